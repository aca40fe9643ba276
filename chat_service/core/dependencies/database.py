"""Database dependencies for FastAPI route handlers.

The session factory lives on ``app.state`` (set by ``create_app``), so tests
and alternative deployments can swap the database without touching
process-wide caches. ``session_scope`` from ``infra.database`` is the
framework-agnostic counterpart used by the CLI and subscriptions.

Usage:
    @router.get("/items")
    async def list_items(session: Annotated[AsyncSession, Depends(get_db_session)]):
        ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.requests import HTTPConnection

from chat_service.infra.database import session_scope


def get_session_factory(connection: HTTPConnection) -> async_sessionmaker[AsyncSession]:
    """Session factory registered on the application."""
    return connection.app.state.session_factory


async def get_db_session(
    factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for a database session.

    Works for HTTP requests and WebSocket connections alike; the session is
    closed (and rolled back if uncommitted) when the request or connection ends.
    """
    async with session_scope(factory) as session:
        yield session


__all__ = ["get_db_session", "get_session_factory"]
