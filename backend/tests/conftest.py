"""
Notes API: Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock async session for service unit tests
    ├── sample_note_row: One notes row as the driver returns it
    ├── db_engine: aiosqlite database file with the notes table created
    └── test_client: HTTPX AsyncClient wired to the app and db_engine
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
# The module-level engine never connects in tests; test_client swaps the
# session dependency onto db_engine.
os.environ["DATABASE_URL"] = "postgresql+asyncpg://localhost/notes_test"
os.environ["DATABASE_SSL"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from notes_api.database import Base, get_db_session, session_scope
from notes_api.main import app
from notes_api.models.note import Note  # noqa: F401  registers the notes table


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.mappings.return_value.all.return_value = [row]
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note_row():
    """A notes row as a column-name → value mapping."""
    now = datetime.now(timezone.utc)
    return {
        "id": 1,
        "note": "buy milk",
        "category": "General",
        "created_at": now,
        "updated_at": now,
        "completed": False,
    }


# ══════════════════════════════════════════════════════════════════════════
# HTTP fixtures (real SQLite database)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    Provides an async engine on a throwaway SQLite file.

    The notes table is created from the model metadata, so the tests run
    the same SELECT / INSERT / UPDATE / DELETE ... RETURNING statements
    the service sends to PostgreSQL.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    Provides an async HTTP test client for endpoint testing.

    How:   ASGITransport routes requests straight into the app; the session
           dependency is swapped for one bound to db_engine.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with session_scope(factory) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
