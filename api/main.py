"""
api/main.py -- FastAPI application factory for AuthDemo.

create_app() takes the two things every handler needs -- a Settings object
(which carries the JWT secret) and a UserStore -- and pins them on app.state.
Nothing is read from module globals at request time, so tests build as many
isolated apps as they like.

Run with:  uvicorn asgi:app --reload
           python main.py

Middleware stack:
  1. log_requests -- method, path, status and latency for every request

Exception handlers render the auth failures (AuthError) as plain text and
everything else as the JSON ErrorResponse envelope.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from api.models import ErrorDetail, ErrorResponse, HealthResponse
from api.routes.protected import router as protected_router
from api.routes.users import router as users_router
from auth.errors import AuthError, RegistrationError
from auth.store import UserStore
from core.config import Settings, get_settings

__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("authdemo.api")


def create_app(settings: Optional[Settings] = None, user_store: Optional[UserStore] = None) -> FastAPI:
    """Build the ASGI application.

    Args:
        settings:   Application settings. Defaults to get_settings(), which
                    raises when JWT_SECRET is not configured -- the app is
                    never built without a signing secret.
        user_store: Registry shared by every handler of this app. Defaults
                    to a fresh, empty UserStore.
    """
    if settings is None:
        settings = get_settings()
    if user_store is None:
        user_store = UserStore()

    app = FastAPI(
        title="AuthDemo API",
        description="User registration, login and JWT-gated access over an in-memory registry.",
        version=__version__,
    )
    app.state.settings = settings
    app.state.user_store = user_store

    # -----------------------------------------------------------------------
    # Request logging middleware
    # -----------------------------------------------------------------------

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %d %.1fms %s",
            request.method,
            request.url.path,
            response.status_code,
            ms,
            request.client.host if request.client else "unknown",
        )
        return response

    # -----------------------------------------------------------------------
    # Router registration
    # -----------------------------------------------------------------------

    app.include_router(users_router, tags=["Users"])
    app.include_router(protected_router, tags=["Protected"])

    # -----------------------------------------------------------------------
    # Exception handlers
    # -----------------------------------------------------------------------

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> PlainTextResponse:
        """Return the auth failure as a bare text reason with its status code."""
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(RegistrationError)
    async def registration_error_handler(request: Request, exc: RegistrationError) -> JSONResponse:
        """Return 500 with the underlying hashing error as detail."""
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error=ErrorDetail(
                    code="registration_failed",
                    message="Could not register user.",
                    detail=str(exc),
                )
            ).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Return 422 with structured error when the request body fails validation."""
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error=ErrorDetail(
                    code="validation_error",
                    message="Request validation failed.",
                    detail=str(exc.errors()),
                )
            ).model_dump(),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Return a structured error for all FastAPI/Starlette HTTP exceptions.

        When detail is already a structured dict, use it directly as the
        error field rather than stringifying it.
        """
        if isinstance(exc.detail, dict):
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": exc.detail},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=ErrorDetail(
                    code=f"http_{exc.status_code}",
                    message=str(exc.detail),
                )
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected server errors.

        The traceback goes to the log only; the client gets a generic message.
        """
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error=ErrorDetail(
                    code="internal_error",
                    message="An unexpected error occurred.",
                )
            ).model_dump(),
        )

    # -----------------------------------------------------------------------
    # Health endpoint
    # -----------------------------------------------------------------------

    @app.get("/health", tags=["Health"])
    async def health(request: Request) -> HealthResponse:
        """Return liveness, version and registry size."""
        return HealthResponse(version=__version__, users=len(request.app.state.user_store))

    logger.info("AuthDemo app created (token lifetime %ds)", settings.token_expire_seconds)
    return app
