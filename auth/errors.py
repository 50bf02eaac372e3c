"""
auth/errors.py -- Failure taxonomy for registration, login and the access guard.

Each AuthError subclass carries the HTTP status and the plain-text message the
client sees. api/main.py registers one handler for the whole family, so route
and dependency code only raises.

The credential mismatch messages are deliberately coarse: a wrong password
and a wrong email produce the same InvalidCredentialsError, and an expired
token is indistinguishable from a forged one.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class for failures returned to the caller as a text response."""

    status_code: int = 400
    message: str = "Authentication failed"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UserNotFoundError(AuthError):
    status_code = 400
    message = "User not found"


class InvalidCredentialsError(AuthError):
    status_code = 400
    message = "Invalid password or email"


class MissingTokenError(AuthError):
    status_code = 401
    message = "Access denied: no token provided"


class InvalidTokenError(AuthError):
    status_code = 403
    message = "Invalid or expired token"


class RegistrationError(Exception):
    """Hashing or storing a new user failed unexpectedly.

    Rendered as a 500 with a JSON error envelope rather than plain text.
    The original exception is kept as __cause__.
    """
