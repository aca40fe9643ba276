"""Database engine and session management.

PostgreSQL is reached through psycopg3; local runs and tests use SQLite via
aiosqlite. The engine and session factory are created lazily from
PostgresSettings and cached for the process.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from chat_service.core.database import Base
from chat_service.core.settings import get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from chat_service.core.settings.postgres import PostgresSettings

logger = logging.getLogger(__name__)


def build_engine(url: str, **engine_kwargs: Any) -> AsyncEngine:
    """Create an async engine.

    In-memory SQLite gets a StaticPool so every session shares the one
    database, and foreign keys are switched on for every SQLite connection.
    """
    if url.startswith("sqlite") and ":memory:" in url:
        engine_kwargs.setdefault("poolclass", StaticPool)
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})

    engine = create_async_engine(url, **engine_kwargs)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_conn: Any, connection_record: Any) -> None:
            _ = connection_record
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def engine_from_settings(db_settings: PostgresSettings) -> AsyncEngine:
    """Create an engine from database settings."""
    return build_engine(db_settings.url, **db_settings.sqlalchemy_engine_kwargs())


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Process-wide engine built from PostgresSettings."""
    return engine_from_settings(get_db_settings())


@lru_cache(maxsize=1)
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory bound to ``get_engine()``."""
    return build_sessionmaker(get_engine())


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession]:
    """Open a session that is rolled back on error and always closed.

    Example:
        async with session_scope() as session:
            group = await group_repo.get_or_raise(session, 1)
    """
    factory = factory or get_sessionmaker()
    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_database(engine: AsyncEngine | None = None) -> None:
    """Verify connectivity and create any missing tables."""
    # Register all models on Base.metadata
    import chat_service.features.models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized", extra={"dialect": engine.dialect.name})


async def drop_database(engine: AsyncEngine | None = None) -> None:
    """Drop every table known to the models."""
    import chat_service.features.models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("Database tables dropped", extra={"dialect": engine.dialect.name})


async def close_database(engine: AsyncEngine | None = None) -> None:
    """Dispose of the engine's connection pool."""
    engine = engine or get_engine()
    await engine.dispose()
    logger.info("Database connection closed")


__all__ = [
    "build_engine",
    "build_sessionmaker",
    "close_database",
    "drop_database",
    "engine_from_settings",
    "get_engine",
    "get_sessionmaker",
    "init_database",
    "session_scope",
]
