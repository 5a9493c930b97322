from contextlib import asynccontextmanager

import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from phpass_verify.config import Settings, get_settings
from phpass_verify.main import create_app

# Stored admin credential imported from a WordPress users table.
ADMIN_PHPASS_HASH = "$P$BgTamYfHkWfZ2yKzYCsPxIRjzIgBEu0"  # "testy"


def _settings(**kwargs) -> Settings:
    """Create a Settings instance that ignores any real .env file."""
    return Settings(_env_file=None, **kwargs)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def bcrypt_hash():
    def _make(password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode()
    return _make


@asynccontextmanager
async def _client(settings: Settings):
    app = create_app(lambda: settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def client():
    async with _client(_settings()) as ac:
        yield ac


@pytest_asyncio.fixture
async def client_with_auth():
    settings = _settings(
        auth_enabled=True,
        auth_username="admin",
        auth_password=ADMIN_PHPASS_HASH,
    )
    async with _client(settings) as ac:
        yield ac


@pytest_asyncio.fixture
async def client_low_ceiling():
    async with _client(_settings(max_count_log2=8)) as ac:
        yield ac


@pytest_asyncio.fixture
async def client_with_plaintext_auth():
    settings = _settings(
        auth_enabled=True,
        auth_username="admin",
        auth_password="secret123",
    )
    async with _client(settings) as ac:
        yield ac
