"""
tests/conftest.py -- Shared test fixtures for AuthDemo.

This module provides:
  - settings: Settings with a fixed test secret and the minimum bcrypt cost
  - user_store: a fresh, empty UserStore per test
  - client: TestClient around create_app(settings, user_store)
  - alice: the canonical registration payload, alice_digest: its email digest
  - register: helper that POSTs a payload to /users and returns the response

Design: every test gets its own app and store, so registrations never leak
between tests. Settings are built with _env_file=None so a developer's .env
cannot change test behaviour.
"""

from __future__ import annotations

from collections.abc import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from auth.store import UserStore
from core.config import Settings

TEST_SECRET = "authdemo-test-secret-0123456789abcdef"

ALICE_EMAIL_DIGEST = "478abec7430569163161dfea8513b8ce89d05f559456a26e945c66e1fe55a29d"


@pytest.fixture
def settings() -> Settings:
    """Settings with a known secret. bcrypt_rounds=4 keeps hashing fast."""
    return Settings(_env_file=None, jwt_secret=TEST_SECRET, bcrypt_rounds=4)


@pytest.fixture
def user_store() -> UserStore:
    return UserStore()


@pytest.fixture
def client(settings: Settings, user_store: UserStore) -> Generator[TestClient, None, None]:
    """TestClient bound to an app that owns this test's store."""
    with TestClient(create_app(settings, user_store), raise_server_exceptions=True) as c:
        yield c


@pytest.fixture
def alice() -> dict[str, str]:
    return {"name": "alice", "password": "p@ss", "email": "a@x.com"}


@pytest.fixture
def alice_digest() -> str:
    """SHA-256 hex digest of alice's email, a@x.com."""
    return ALICE_EMAIL_DIGEST


@pytest.fixture
def register(client: TestClient) -> Callable[[dict[str, str]], httpx.Response]:
    """Return a function that registers a payload and asserts 201."""

    def _register(payload: dict[str, str]) -> httpx.Response:
        resp = client.post("/users", json=payload)
        assert resp.status_code == 201, f"Expected 201, got {resp.status_code}: {resp.text}"
        return resp

    return _register
