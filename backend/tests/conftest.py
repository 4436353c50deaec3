"""
SocialNet Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── test_settings: Settings with a known JWT secret and cheap bcrypt cost
    ├── db_engine / db_session: in-memory SQLite with the schema created
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── temp_storage / file_service: Temporary upload directory
    ├── sample_image_bytes: A real 1x1 PNG
    ├── test_client: HTTPX AsyncClient wired to the app with overrides
    └── registered_user / auth_headers: an account and its bearer token
"""

import base64
import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Environment must be in place before socialnet.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="socialnet_test_")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from socialnet import database
from socialnet.config import Settings
from socialnet.database import Base, get_db_session
from socialnet.dependencies import get_settings
from socialnet.main import app
from socialnet.services.file_service import FileService, get_file_service

TEST_JWT_SECRET = "test-secret-not-for-production"

# 1x1 transparent PNG; libmagic identifies it as image/png
PNG_1X1 = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


# ══════════════════════════════════════════════════════════════════════════
# Settings and Database
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(temp_storage):
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        storage_root=temp_storage,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def db_engine():
    """
    A private in-memory database per test.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_lookup(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Files
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def temp_storage(tmp_path):
    """A fresh upload directory for each test (removed by tmp_path)."""
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def file_service(temp_storage):
    return FileService(storage_root=temp_storage, max_file_size=1_048_576)


@pytest.fixture
def sample_image_bytes():
    return PNG_1X1


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(test_settings, db_engine, session_factory, file_service, monkeypatch):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The database session, settings and file service dependencies are
    overridden for the duration of the test, and the health check runs
    against the same per-test engine.
    """
    monkeypatch.setattr(database, "engine", db_engine)

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_file_service] = lambda: file_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def register(client, **overrides):
    """POST /auth/register with sensible defaults; returns the response."""
    body = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "password": "secret",
        "location": "London",
        "occupation": "Mathematician",
    }
    body.update(overrides)
    return await client.post("/auth/register", json=body)


async def login(client, email, password):
    return await client.post("/auth/login", json={"email": email, "password": password})


@pytest_asyncio.fixture
async def registered_user(test_client):
    """Registers an account and logs in; returns (user dict, token)."""
    response = await register(test_client)
    assert response.status_code == 201
    logged_in = await login(test_client, "ada@example.com", "secret")
    assert logged_in.status_code == 200
    return logged_in.json()["user"], logged_in.json()["token"]


@pytest.fixture
def auth_headers(registered_user):
    _, token = registered_user
    return {"Authorization": f"Bearer {token}"}
