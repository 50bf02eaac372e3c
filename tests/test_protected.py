"""
tests/test_protected.py -- Integration tests for the access guard and GET /protected.

Coverage:
  - End-to-end: register -> login -> /protected greets the user
  - Missing or malformed Authorization header -> 401
  - Wrong secret, tampered, expired or garbage token -> 403
  - Valid token attaches the identity claims to request.state.user
"""

from __future__ import annotations

import pytest
from fastapi import Depends, Request
from fastapi.testclient import TestClient
from jose import jwt

from api.main import create_app
from auth.dependencies import get_current_claims
from auth.models import TokenClaims, User
from auth.store import UserStore
from auth.tokens import create_access_token, digest_email
from core.config import Settings


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def token(client: TestClient, register, alice: dict) -> str:
    """Register alice and log in through the API."""
    register(alice)
    resp = client.post("/users/login", json=alice)
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


class TestProtectedHappyPath:
    def test_register_login_protected(self, client: TestClient, token: str) -> None:
        resp = client.get("/protected", headers=_bearer(token))
        assert resp.status_code == 200
        assert resp.text == "Welcome alice"
        assert resp.headers["content-type"].startswith("text/plain")

    def test_token_reusable(self, client: TestClient, token: str) -> None:
        """Tokens are stateless; the guard re-verifies on every request."""
        for _ in range(3):
            assert client.get("/protected", headers=_bearer(token)).status_code == 200

    def test_scheme_is_case_insensitive(self, client: TestClient, token: str) -> None:
        resp = client.get("/protected", headers={"Authorization": f"bearer {token}"})
        assert resp.status_code == 200


class TestMissingToken:
    def test_no_header(self, client: TestClient) -> None:
        resp = client.get("/protected")
        assert resp.status_code == 401
        assert resp.text == "Access denied: no token provided"

    @pytest.mark.parametrize("header", ["", "Bearer", "Bearer ", "Basic abc", "Token abc", "Bearer a b"])
    def test_malformed_header(self, client: TestClient, header: str) -> None:
        resp = client.get("/protected", headers={"Authorization": header})
        assert resp.status_code == 401
        assert resp.text == "Access denied: no token provided"


class TestInvalidToken:
    @pytest.fixture
    def alice_user(self) -> User:
        return User(name="alice", password_hash="unused", email_digest=digest_email("a@x.com"))

    def test_garbage_token(self, client: TestClient) -> None:
        resp = client.get("/protected", headers=_bearer("not-a-jwt"))
        assert resp.status_code == 403
        assert resp.text == "Invalid or expired token"

    def test_wrong_secret(self, client: TestClient, alice_user: User) -> None:
        forged = create_access_token(alice_user, "attacker-secret-0123456789abcdef0123", 3600)
        resp = client.get("/protected", headers=_bearer(forged))
        assert resp.status_code == 403
        assert resp.text == "Invalid or expired token"

    def test_expired(self, client: TestClient, settings: Settings, alice_user: User) -> None:
        expired = create_access_token(alice_user, settings.jwt_secret, expire_seconds=-60)
        resp = client.get("/protected", headers=_bearer(expired))
        assert resp.status_code == 403
        assert resp.text == "Invalid or expired token"

    def test_tampered_payload(self, client: TestClient, settings: Settings, token: str) -> None:
        mallory = User(name="mallory", password_hash="unused", email_digest=digest_email("m@x.com"))
        header, _payload, signature = token.split(".")
        _h, forged_payload, _s = create_access_token(mallory, settings.jwt_secret, 3600).split(".")
        resp = client.get("/protected", headers=_bearer(f"{header}.{forged_payload}.{signature}"))
        assert resp.status_code == 403

    def test_signed_token_without_exp(self, client: TestClient, settings: Settings, alice_digest: str) -> None:
        no_exp = jwt.encode({"name": "alice", "email_digest": alice_digest}, settings.jwt_secret, algorithm="HS256")
        resp = client.get("/protected", headers=_bearer(no_exp))
        assert resp.status_code == 403
        assert resp.text == "Invalid or expired token"

    def test_token_from_other_deployment(self, settings: Settings, token: str) -> None:
        """A token is only valid against the secret it was signed with."""
        other = settings.model_copy(update={"jwt_secret": "other-deployment-secret-0123456789ab"})
        with TestClient(create_app(other, UserStore())) as c:
            resp = c.get("/protected", headers=_bearer(token))
        assert resp.status_code == 403


class TestClaimsAttached:
    def test_claims_on_request_state(self, settings: Settings, alice_digest: str) -> None:
        app = create_app(settings, UserStore())

        @app.get("/whoami")
        def whoami(request: Request, claims: TokenClaims = Depends(get_current_claims)) -> dict:
            attached = request.state.user
            return {"same": attached is claims, "name": attached.name, "email_digest": attached.email_digest}

        user = User(name="alice", password_hash="unused", email_digest=alice_digest)
        token = create_access_token(user, settings.jwt_secret, settings.token_expire_seconds)
        with TestClient(app) as c:
            resp = c.get("/whoami", headers=_bearer(token))
        assert resp.status_code == 200
        assert resp.json() == {"same": True, "name": "alice", "email_digest": alice_digest}
