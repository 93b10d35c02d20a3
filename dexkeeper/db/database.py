"""
Database engine and session management.

Engines are created on demand from a URL (settings.database_url by default)
rather than at import time, so tests and the app can each point at their own
store. ``open_backend`` is the usual entry point: it creates the tables and
returns a SqlAlchemyBackend that owns its engine.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dexkeeper.config import settings
from dexkeeper.db.backend import SqlAlchemyBackend
from dexkeeper.models.db import Base


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Create an async engine for the given URL, or the configured one."""
    return create_async_engine(
        database_url or settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database tables.

    Creates all tables defined in the ORM models. Existing tables and their
    rows are left alone, so this is safe to call at every startup.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(engine: AsyncEngine) -> None:
    """
    Drop all database tables.

    WARNING: Destroys all data. Use only for testing.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def open_backend(database_url: str | None = None) -> SqlAlchemyBackend:
    """
    Open the persistent key-value backend.

    Creates the engine and tables. Call ``aclose()`` on the returned backend
    to dispose of the engine.
    """
    engine = create_engine(database_url)
    await init_db(engine)
    return SqlAlchemyBackend(create_session_factory(engine), engine=engine)
