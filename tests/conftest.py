"""
tests/conftest.py -- Shared test fixtures for Postdesk tests.

This module provides:
  - _make_test_stores(): creates an isolated in-memory DB shared by both stores
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api: module-scoped ApiHarness (TestClient + users + tokens)
  - post_store / user_store: function-scoped stores on private in-memory DBs

Design: Named shared-memory SQLite URIs (not plain :memory:) are required for
the TestClient fixtures because route handlers run in a thread pool. Plain
:memory: DBs are per-connection and would present a blank schema to each
worker thread.

The DEBUG env var must be set before any auth module import so get_settings()
auto-generates SECRET_KEY in dev mode rather than raising ValueError.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from dataclasses import dataclass

# CRITICAL: Set DEBUG before any auth/core import so get_settings() can
# auto-generate SECRET_KEY in dev mode instead of raising ValueError.
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from api.limiter import limiter
from asgi import app
from auth.models import Identity, User
from auth.store import UserStore
from auth.tokens import create_access_token, hash_password
from posts.service import PostService
from posts.store import PostStore

# Rate limits would trip on the volume of requests a test module makes.
limiter.enabled = False

ADMIN_PASSWORD = "adminpass123"
EDITOR_PASSWORD = "editorpass123"


@dataclass
class ApiHarness:
    """Everything an API integration test needs.

    editor and other are two distinct editors, so ownership checks can be
    exercised from both sides.
    """

    client: TestClient
    user_store: UserStore
    admin_id: int
    editor_id: int
    other_id: int
    admin_token: str
    editor_token: str
    other_token: str

    @staticmethod
    def auth(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def _make_test_stores(db_suffix: str) -> tuple[UserStore, PostStore]:
    """Create a user store and a post store on one named shared-memory DB.

    Args:
        db_suffix: Unique string appended to the DB name so test modules
                   don't share state.
    """
    url = f"sqlite:///file:test_postdesk_{db_suffix}?mode=memory&cache=shared&uri=true"
    return UserStore(db_url=url), PostStore(db_url=url)


def _patch_lifespan(user_store: UserStore, post_store: PostStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.post_store = post_store
        app.state.post_service = PostService(post_store)
        yield

    return test_lifespan


def _seed_user(store: UserStore, username: str, role: str, password: str) -> int:
    return store.create_user(
        User(
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(password),
            role=role,
        )
    )


# ---------------------------------------------------------------------------
# Module-scoped fixtures -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api(request) -> Generator[ApiHarness, None, None]:
    """Yield an ApiHarness backed by a fresh in-memory database.

    Users:
      admin   -- admin@example.com / ADMIN_PASSWORD
      editor  -- editor@example.com / EDITOR_PASSWORD
      other   -- other@example.com / EDITOR_PASSWORD
    """
    user_store, post_store = _make_test_stores(request.module.__name__.rsplit(".", 1)[-1])

    admin_id = _seed_user(user_store, "admin", "admin", ADMIN_PASSWORD)
    editor_id = _seed_user(user_store, "editor", "editor", EDITOR_PASSWORD)
    other_id = _seed_user(user_store, "other", "editor", EDITOR_PASSWORD)

    app.router.lifespan_context = _patch_lifespan(user_store, post_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield ApiHarness(
            client=client,
            user_store=user_store,
            admin_id=admin_id,
            editor_id=editor_id,
            other_id=other_id,
            admin_token=create_access_token(Identity(id=admin_id, role="admin")),
            editor_token=create_access_token(Identity(id=editor_id, role="editor")),
            other_token=create_access_token(Identity(id=other_id, role="editor")),
        )

    post_store.close()
    user_store.close()


# ---------------------------------------------------------------------------
# Function-scoped stores for unit tests
# ---------------------------------------------------------------------------


@pytest.fixture
def user_store() -> Generator[UserStore, None, None]:
    s = UserStore("sqlite:///:memory:")
    yield s
    s.close()


@pytest.fixture
def post_store() -> Generator[PostStore, None, None]:
    s = PostStore("sqlite:///:memory:")
    yield s
    s.close()
