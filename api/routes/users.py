"""
api/routes/users.py -- Registration, debug listing and login endpoints.

Routes:
  POST /users         -- register; 201 with the stored record
  GET  /users         -- dump the registry (testing aid, EXPOSE_USER_LIST)
  POST /users/login   -- verify name/password/email; 200 with a JWT

Security:
  A wrong password and a wrong email return the same 400 text, so the
  response never says which field was wrong. An unknown name is reported
  separately ("User not found").
  Cache-Control: no-store on login responses.
  Register and login are sync handlers: FastAPI runs them in its threadpool,
  so bcrypt does not stall the event loop.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, Response

from api.models import Credentials, LoginResponse, UserResponse
from auth.errors import RegistrationError
from auth.models import User
from auth.store import UserStore
from auth.tokens import authenticate_user, create_access_token, digest_email, hash_password
from core.config import Settings

logger = logging.getLogger("authdemo.api")

router = APIRouter()


@router.post("/users", response_model=UserResponse, status_code=201)
def register(request: Request, body: Credentials) -> UserResponse:
    """Hash the credentials and append a new user record.

    The response echoes password_hash and email_digest. That exposes hashes
    to the client and is kept only for compatibility with existing callers.
    """
    settings: Settings = request.app.state.settings
    user_store: UserStore = request.app.state.user_store

    try:
        user = User(
            name=body.name,
            password_hash=hash_password(body.password, rounds=settings.bcrypt_rounds),
            email_digest=digest_email(body.email),
        )
    except Exception as exc:
        logger.exception("Registration failed for %s", body.name)
        raise RegistrationError(str(exc)) from exc

    user_store.append(user)
    logger.info("Registered user %s (%d total)", user.name, len(user_store))
    return UserResponse.from_user(user)


@router.get("/users", response_model=list[UserResponse])
def list_users(request: Request) -> list[UserResponse]:
    """Return every registered record in insertion order."""
    settings: Settings = request.app.state.settings
    if not settings.expose_user_list:
        raise HTTPException(
            status_code=404,
            detail={"code": "not_found", "message": "Not Found"},
        )
    user_store: UserStore = request.app.state.user_store
    return [UserResponse.from_user(u) for u in user_store.all()]


@router.post("/users/login", response_model=LoginResponse)
def login(request: Request, response: Response, body: Credentials) -> LoginResponse:
    """Verify credentials and issue a signed session token.

    authenticate_user() raises UserNotFoundError / InvalidCredentialsError,
    which the AuthError handler renders as 400 text.
    """
    settings: Settings = request.app.state.settings
    user_store: UserStore = request.app.state.user_store

    user = authenticate_user(user_store, body.name, body.password, body.email)
    token = create_access_token(user, settings.jwt_secret, settings.token_expire_seconds)
    logger.info("Login: %s", user.name)

    response.headers["Cache-Control"] = "no-store"
    return LoginResponse(message="Login successful", token=token)
