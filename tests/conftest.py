"""Pytest configuration and fixtures for the Data Interface tests.

All state lives in process memory, so every test starts from a freshly
seeded user store and an empty token blacklist.
"""

import os
from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app modules
os.environ["JWT_SECRET"] = "test-jwt-secret-that-is-at-least-32-characters"
os.environ["ENVIRONMENT"] = "development"

# Demo credentials seeded into every fresh user store
TEST_USERNAME = "demo"
TEST_PASSWORD = "password123"
TEST_EMAIL = "demo@example.com"


def _reset_auth_state() -> None:
    from data_interface.services.token_blacklist import get_token_blacklist
    from data_interface.services.user_store import UserStore

    UserStore.reset_instance()
    get_token_blacklist().clear()


@pytest.fixture(autouse=True)
def reset_auth_state():
    """Reset the user store and token blacklist around each test."""
    _reset_auth_state()
    yield
    _reset_auth_state()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Synchronous test client."""
    from data_interface.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Async test client over the ASGI app."""
    from data_interface.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
def user_store():
    from data_interface.services.user_store import UserStore

    return UserStore.get_instance()


@pytest.fixture
def blacklist():
    from data_interface.services.token_blacklist import get_token_blacklist

    return get_token_blacklist()


@pytest.fixture
def demo_user(user_store):
    """The seeded demo user."""
    return user_store.find_by_username(TEST_USERNAME)


@pytest.fixture
def auth_token(demo_user) -> str:
    """A valid session token for the demo user."""
    from data_interface.services.auth import create_access_token

    return create_access_token(demo_user.id, demo_user.username)


@pytest.fixture
def auth_headers(auth_token) -> dict[str, str]:
    """Headers with JWT token for authenticated requests."""
    return {"Authorization": f"Bearer {auth_token}"}
