"""
auth/tokens.py -- Password hashing, email digests, JWT issue/verify, and login.

Security design decisions:
  Passwords: bcrypt, used directly (no passlib wrapper). bcrypt's cost factor
       makes offline brute force of an exfiltrated registry expensive. The salt
       is generated per call and embedded in the hash string, so verification
       needs nothing but the stored hash.

  Emails: unsalted SHA-256, hex encoded. Deterministic, so login can compare
       digests for an exact match without storing the plaintext. This is a
       weaker guarantee than bcrypt (a known email can be confirmed offline)
       and is accepted for the email field only.

  JWT: python-jose with HS256. Tokens carry name, email_digest, iat and exp.
       The signing secret is passed in by the caller (from Settings) rather
       than read at import time. Verification returns None on any failure --
       the access guard turns that into a 403.

Layer rule: no imports from api/.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import JWTError, jwt

from auth.errors import InvalidCredentialsError, UserNotFoundError
from auth.models import TokenClaims, User

if TYPE_CHECKING:
    from auth.store import UserStore

logger = logging.getLogger("authdemo.auth")

_ALGORITHM = "HS256"
_DEFAULT_ROUNDS = 10

# ---------------------------------------------------------------------------
# Password hashing (slow, salted)
# ---------------------------------------------------------------------------

_BCRYPT_MAX_BYTES = 72


def _pw_bytes(plain: str) -> bytes:
    """Encode the password and cut it to bcrypt's 72-byte input limit.

    Older bcrypt releases truncated silently; 5.x raises ValueError instead.
    Cutting here keeps long passwords registrable on every release, and
    hashing and verification must apply the same cut.
    """
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str, rounds: int = _DEFAULT_ROUNDS) -> str:
    """Return a bcrypt hash of the plaintext password with a fresh salt.

    Only the first 72 bytes of the UTF-8 encoding are hashed (see _pw_bytes).
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_pw_bytes(plain), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(_pw_bytes(plain), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# ---------------------------------------------------------------------------
# Email digest (fast, deterministic)
# ---------------------------------------------------------------------------


def digest_email(email: str) -> str:
    """Return the SHA-256 hex digest of the email (64 lowercase hex chars)."""
    return hashlib.sha256(email.encode("utf-8")).hexdigest()


def verify_email(email: str, digest: str) -> bool:
    """Return True if the email hashes to the stored digest.

    An email that cannot be UTF-8 encoded (lone surrogate) never matches.
    """
    try:
        candidate = digest_email(email)
    except UnicodeEncodeError:
        return False
    return hmac.compare_digest(candidate, digest)


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(user: User, secret: str, expire_seconds: int) -> str:
    """Encode a signed JWT carrying the user's identity claims.

    Args:
        user:           The authenticated user.
        secret:         HS256 signing key (Settings.jwt_secret).
        expire_seconds: Validity window from now. Negative values produce an
                        already-expired token, which tests rely on.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "name": user.name,
        "email_digest": user.email_digest,
        "iat": now,
        "exp": now + timedelta(seconds=expire_seconds),
    }
    return jwt.encode(payload, secret, algorithm=_ALGORITHM)


def decode_access_token(token: str, secret: str) -> TokenClaims | None:
    """Verify signature and expiry. Returns the claims or None on any failure.

    Bad signature, malformed token, expiry and a missing name, email_digest
    or exp claim all collapse to None.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[_ALGORITHM])
    except JWTError:
        return None
    if any(claim not in payload for claim in ("name", "email_digest", "exp")):
        return None
    return TokenClaims(
        name=payload["name"],
        email_digest=payload["email_digest"],
        expires_at=int(payload["exp"]),
    )


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


def authenticate_user(store: UserStore, name: str, password: str, email: str) -> User:
    """Check a name/password/email triple against the registry.

    Raises UserNotFoundError when no record has that name. A wrong password
    and a wrong email both raise InvalidCredentialsError so the response does
    not reveal which field was wrong. Both checks always run.
    """
    user = store.find_by_name(name)
    if user is None:
        logger.info("Login rejected: unknown user")
        raise UserNotFoundError()
    password_ok = verify_password(password, user.password_hash)
    email_ok = verify_email(email, user.email_digest)
    if not (password_ok and email_ok):
        logger.info("Login rejected for %s: invalid credentials", name)
        raise InvalidCredentialsError()
    return user
