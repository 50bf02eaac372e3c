"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

The access guard reads the Authorization header, verifies the bearer JWT
against the secret held in request.app.state.settings, and attaches the
decoded claims to request.state.user for the downstream handler.

It runs once per request and keeps no state between requests.

Layer rule: auth/dependencies.py may import from fastapi (for Request)
because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.errors import InvalidTokenError, MissingTokenError
from auth.models import TokenClaims
from auth.tokens import decode_access_token


def _bearer_token(request: Request) -> str | None:
    """Return the token from an "Authorization: Bearer <token>" header, or None."""
    auth_header = request.headers.get("Authorization", "")
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def get_current_claims(request: Request) -> TokenClaims:
    """Require a valid bearer token.

    Raises MissingTokenError (401) when the header is absent or malformed,
    InvalidTokenError (403) when the signature is wrong or the token expired.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(claims: TokenClaims = Depends(get_current_claims)): ...
    """
    token = _bearer_token(request)
    if not token:
        raise MissingTokenError()

    claims = decode_access_token(token, request.app.state.settings.jwt_secret)
    if claims is None:
        raise InvalidTokenError()

    request.state.user = claims
    return claims
