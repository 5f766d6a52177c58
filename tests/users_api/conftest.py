"""
pytest configuration and fixtures for the users API suite
Each test gets a fresh in-memory store seeded with one user and an app bound to it.
"""

import httpx
import pytest
import pytest_asyncio
from typing import Any, Dict

from app import create_app
from config.settings import Settings
from services.user_store import InMemoryUserStore
from users_api.helpers import TEST_JWT_SECRET, bearer, make_token

SEED_USER = {
    "name": "Teste User",
    "email": "test@user.com",
    "description": "Descrição do usuário de teste",
    "password": "senha-secreta"
}


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret=TEST_JWT_SECRET)


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings, store=store)


@pytest_asyncio.fixture
async def client(app):
    """HTTP client talking to the app in-process"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def seeded_user(store) -> Dict[str, Any]:
    return await store.create_user(dict(SEED_USER))


@pytest.fixture
def admin_token(seeded_user) -> str:
    return make_token({
        "_id": str(seeded_user["id"]),
        "email": seeded_user["email"],
        "is_admin": True
    })


@pytest.fixture
def auth_headers(admin_token) -> Dict[str, str]:
    return bearer(admin_token)
