"""Database infrastructure: engine, session factory and schema lifecycle."""

from .session import (
    build_engine,
    build_sessionmaker,
    close_database,
    drop_database,
    engine_from_settings,
    get_engine,
    get_sessionmaker,
    init_database,
    session_scope,
)

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
