"""Deterministic sample data for local development and demos.

Creates four users with mutual friendships, two groups and a short
conversation in each. Seeding is skipped when any user already exists.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from chat_service.features.groups.models import Group
from chat_service.features.messages.models import Message
from chat_service.features.users.models import User

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

SEED_USERS = [
    ("alice@example.com", "alice"),
    ("bob@example.com", "bob"),
    ("carol@example.com", "carol"),
    ("dave@example.com", "dave"),
]

SEED_FRIENDSHIPS = [("alice", "bob"), ("alice", "carol"), ("bob", "dave")]

SEED_GROUPS = {
    "General": ["alice", "bob", "carol", "dave"],
    "Weekend plans": ["alice", "bob"],
}

SEED_MESSAGES = [
    ("General", "alice", "Welcome to the chat!"),
    ("General", "bob", "Hi everyone"),
    ("General", "carol", "Hello from carol"),
    ("Weekend plans", "bob", "Hiking on Saturday?"),
    ("Weekend plans", "alice", "Count me in"),
]


async def seed_database(session: AsyncSession) -> dict[str, int]:
    """Insert the sample data and commit.

    Returns:
        Number of rows created per entity; all zero when data already exists.
    """
    existing = await session.scalar(select(func.count()).select_from(User))
    if existing:
        logger.info("Seed skipped; users already exist", extra={"users": existing})
        return {"users": 0, "groups": 0, "messages": 0}

    users = {username: User(email=email, username=username) for email, username in SEED_USERS}
    for left, right in SEED_FRIENDSHIPS:
        users[left].friends.append(users[right])
        users[right].friends.append(users[left])

    groups = {
        name: Group(name=name, users=[users[username] for username in members])
        for name, members in SEED_GROUPS.items()
    }
    session.add_all([*users.values(), *groups.values()])
    await session.flush()

    # Added one by one so ids follow conversation order
    for group_name, username, text in SEED_MESSAGES:
        session.add(Message(text=text, group_id=groups[group_name].id, user_id=users[username].id))
        await session.flush()

    await session.commit()
    counts = {"users": len(users), "groups": len(groups), "messages": len(SEED_MESSAGES)}
    logger.info("Database seeded", extra=counts)
    return counts


__all__ = ["seed_database"]
