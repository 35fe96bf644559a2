"""
Notes API: Database Session Management
=========================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling and provides a
       request-scoped session that commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per request.

Connection Model:
    Requests never share a connection object. Each request checks a
    connection out of the pool through its session and returns it when the
    session closes:

        request → get_db_session() → session_scope() → pool checkout
                                                     ↓
        response ← commit / rollback ← close ← pool checkin

    pool_size:      Persistent connections for normal load
    max_overflow:   Temporary connections for traffic spikes
    pool_pre_ping:  Validates connections before use
    pool_recycle:   Recycles connections every hour
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_api.config import settings


def _connect_args() -> dict:
    """
    What: Driver-level connection arguments.
    How:  asyncpg's ssl="require" negotiates TLS without verifying the
          server certificate.
    """
    if settings.database_ssl:
        return {"ssl": "require"}
    return {}


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=settings.db_pool_pre_ping,
    pool_recycle=3600,
    connect_args=_connect_args(),
    # Echo SQL statements only when debugging
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: returned rows stay readable after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations.
    """
    pass


# ── Session Scope ─────────────────────────────────────────────────────────
@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a session bound to one unit of work.

    How it works:
        1. Creates a new session from the given factory
        2. Yields it to the caller (the caller runs its statement)
        3. On success: commits anything still pending (NoteService has
           already committed its DML before the response is built)
        4. On error: rolls back and re-raises
        5. Always: closes the session (returns the connection to the pool)
    """
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise  # The global error handler decides the response
        finally:
            await session.close()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        Any database exceptions are propagated to the global error handler.
    """
    async with session_scope(async_session_factory) as session:
        yield session


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
