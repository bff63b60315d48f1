import os
import tempfile
import uuid

# Settings are read at import time; point them at a throwaway SQLite file first
_DB_PATH = os.path.join(tempfile.gettempdir(), f"gagyebu-test-{uuid.uuid4().hex}.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key-for-jwt-signing-only"
os.environ["ENVIRONMENT"] = "test"

import pytest
from httpx import ASGITransport, AsyncClient

from gagyebu.core.cache import query_cache
from gagyebu.core.database import AsyncSessionLocal, Base, engine
from gagyebu.main import app

PASSWORD = "secret123"


@pytest.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    query_cache.clear()
    yield
    query_cache.clear()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Pooled connections belong to this test's event loop
    await engine.dispose()


@pytest.fixture
async def session(database):
    async with AsyncSessionLocal() as s:
        yield s


@pytest.fixture
async def client(database):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def signup_and_login(client: AsyncClient, email: str = "user@example.com") -> dict:
    """Register a user and return the Authorization header for them."""
    res = await client.post(
        "/api/v1/auth/signup",
        json={"email": email, "password": PASSWORD, "password_confirm": PASSWORD},
    )
    assert res.status_code == 201, res.text
    res = await client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
    assert res.status_code == 200, res.text
    # Drop the cookie so every request authenticates through the header it is given
    client.cookies.clear()
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
async def auth_headers(client):
    return await signup_and_login(client)


def pytest_sessionfinish(session, exitstatus):
    if os.path.exists(_DB_PATH):
        os.remove(_DB_PATH)
