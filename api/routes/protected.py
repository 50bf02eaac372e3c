"""
api/routes/protected.py -- Token-gated endpoints.

Routes:
  GET /protected   -- plain-text greeting for the token's owner
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from auth.dependencies import get_current_claims
from auth.models import TokenClaims

router = APIRouter()


@router.get("/protected", response_class=PlainTextResponse)
def protected(claims: TokenClaims = Depends(get_current_claims)) -> str:
    return f"Welcome {claims.name}"
