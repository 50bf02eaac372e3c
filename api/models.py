"""
API request and response models for AuthDemo REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py, which
own the internal domain representation. Route handlers map between the two.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from auth.models import User

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class Credentials(BaseModel):
    """Request body for POST /users and POST /users/login.

    All three fields are opaque strings; no format or length checks.
    """

    name: str
    password: str
    email: str


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """One registry record as returned by POST /users and GET /users."""

    model_config = ConfigDict(frozen=True)

    name: str
    password_hash: str
    email_digest: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            name=user.name,
            password_hash=user.password_hash,
            email_digest=user.email_digest,
        )


class LoginResponse(BaseModel):
    """Response for a successful POST /users/login."""

    model_config = ConfigDict(frozen=True)

    message: str
    token: str


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Envelope for JSON error responses (422, 500)."""

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str = "healthy"
    version: str
    users: int
