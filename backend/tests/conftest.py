"""
Taskboard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the whole suite.

Fixture Hierarchy:
    Service tests (no database):
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    ├── make_user / make_task: factories for detached ORM instances
    
    API tests (real SQLite file per test):
    ├── db_engine: aiosqlite engine with the schema created
    ├── test_client: HTTPX AsyncClient wired to the app, sessions overridden
    ├── registered_user: a user created through /api/auth/register
    └── auth_headers: Bearer header for registered_user
"""

import os
import tempfile

# Settings are read at import time, so the environment must be prepared
# before anything under `app` is imported.
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="taskboard_test_"), "app.db")
)
os.environ["JWT_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.auth.security import hash_password
from app.database import Base, get_db_session
from app.models import Task, User

from helpers import TEST_PASSWORD, login_headers, register

# ══════════════════════════════════════════════════════════════════════════
# Service-level fixtures (mocked session)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    AsyncMock that simulates AsyncSession.

    Usage:
        result = MagicMock()
        result.scalar_one_or_none.return_value = task
        mock_db_session.execute.return_value = result
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_user():
    def _make(id=1, name="Alice", email="alice@example.com", password=TEST_PASSWORD):
        now = datetime.now(timezone.utc)
        return User(
            id=id,
            name=name,
            email=email,
            password_hash=hash_password(password),
            created_at=now,
            updated_at=now,
        )
    return _make


@pytest.fixture
def make_task():
    def _make(id=1, title="Write tests", completed=False, user_id=1):
        now = datetime.now(timezone.utc)
        return Task(
            id=id,
            title=title,
            completed=completed,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
    return _make


# ══════════════════════════════════════════════════════════════════════════
# API-level fixtures (real SQLite database)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Fresh SQLite database per test; NullPool so no connection outlives its loop."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'taskboard.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    `get_db_session` is overridden so every request uses the per-test engine
    with the same commit/rollback semantics as production.
    """
    from app.main import app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def registered_user(test_client):
    return await register(test_client)


@pytest_asyncio.fixture
async def auth_headers(test_client, registered_user):
    return await login_headers(test_client)
