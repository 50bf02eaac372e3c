"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). The store and routes
do the work; these only own the shape.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """A registered identity.

    Neither the plaintext password nor the plaintext email is kept:
    password_hash is a bcrypt string (salt embedded in it) and email_digest is
    the SHA-256 hex digest of the email. name is not unique.
    """

    name: str
    password_hash: str
    email_digest: str


@dataclass(frozen=True)
class TokenClaims:
    """Identity extracted from a verified session token."""

    name: str
    email_digest: str
    expires_at: int  # unix seconds, from the "exp" claim
