"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: GraphQL settings with test defaults
    - Database Fixtures: file-backed SQLite engine, session factory, sample chat data
    - Event Fixtures: local-only event broker
    - Application Fixtures: FastAPI app and HTTP client

Every test gets its own SQLite file under ``tmp_path`` so sessions opened by
different requests (and by subscriptions) see committed data without
sharing a single connection.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_JSON_FORMAT", "false")
os.environ["REDIS_URL"] = ""

from chat_service.core.settings.graphql import GraphQLSettings  # noqa: E402
from chat_service.features.groups.models import Group  # noqa: E402
from chat_service.features.messages.models import Message  # noqa: E402
from chat_service.features.users.models import User  # noqa: E402
from chat_service.infra.database import build_engine, build_sessionmaker, init_database  # noqa: E402
from chat_service.infra.events import EventBroker  # noqa: E402

if TYPE_CHECKING:
    from pathlib import Path

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def graphql_settings() -> GraphQLSettings:
    """GraphQL settings with the documented defaults (page size 1, max 100)."""
    return GraphQLSettings(default_message_page_size=1, max_page_size=100)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine on a fresh SQLite file with all tables created.

    Example:
        async def test_with_db(db_engine):
            async with db_engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'chat.db'}")
    await init_database(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return build_sessionmaker(db_engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Create an async database session that is rolled back after the test.

    Example:
        async def test_create_user(db_session):
            user = User(email="test@example.com", username="test")
            db_session.add(user)
            await db_session.commit()
            assert user.id is not None
    """
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@dataclass
class ChatData:
    """Ids of the sample rows created by the ``chat_data`` fixture."""

    alice: int
    bob: int
    carol: int
    general: int
    empty: int
    message_ids: list[int]


@pytest.fixture
async def chat_data(session_factory: async_sessionmaker[AsyncSession]) -> ChatData:
    """Three users, a group "General" with all of them and seven messages,
    and a group "Quiet" holding only alice and no messages.

    Message ids are returned oldest first; paginated queries return them
    newest first.
    """
    async with session_factory() as session:
        alice = User(email="alice@example.com", username="alice")
        bob = User(email="bob@example.com", username="bob")
        carol = User(email="carol@example.com", username="carol")
        alice.friends.append(bob)
        bob.friends.append(alice)

        general = Group(name="General", users=[alice, bob, carol])
        quiet = Group(name="Quiet", users=[alice])
        session.add_all([alice, bob, carol, general, quiet])
        await session.flush()

        senders = [alice, bob, carol]
        message_ids = []
        for i in range(7):
            message = Message(
                text=f"message {i + 1}",
                group_id=general.id,
                user_id=senders[i % 3].id,
            )
            session.add(message)
            await session.flush()
            message_ids.append(message.id)

        await session.commit()
        return ChatData(
            alice=alice.id,
            bob=bob.id,
            carol=carol.id,
            general=general.id,
            empty=quiet.id,
            message_ids=message_ids,
        )


# ============================================================================
# Event Fixtures
# ============================================================================


@pytest.fixture
async def broker() -> AsyncGenerator[EventBroker]:
    """Started local-only event broker."""
    event_broker = EventBroker()
    await event_broker.start()
    try:
        yield event_broker
    finally:
        await event_broker.stop()


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    broker: EventBroker,
) -> FastAPI:
    """Create the FastAPI application bound to the test database and broker."""
    from chat_service.app.main import create_app

    return create_app(session_factory=session_factory, broker=broker)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing.

    Example:
        async def test_health_check(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def anyio_backend() -> str:
    """Configure anyio backend for async tests."""
    return "asyncio"
