"""DataLoader container and factory.

DataLoaders batch and cache database lookups within a single request,
preventing N+1 query problems common in GraphQL resolvers.

Each GraphQL request (and each subscription event) gets its own DataLoaders
so that batching boundaries and caches never outlive the session they use.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chat_service.features.graphql.dataloaders.groups import (
    GroupDataLoader,
    UserGroupsDataLoader,
)
from chat_service.features.graphql.dataloaders.users import (
    GroupMembersDataLoader,
    UserDataLoader,
    UserFriendsDataLoader,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass
class DataLoaders:
    """Container for all DataLoader instances.

    ``session`` and ``lock`` are exposed for resolvers that query directly
    (paginated connections); hold ``lock`` around any such query.

    Usage in resolver:
        members = await self.loaders.group_members.load(self.id)
    """

    session: AsyncSession
    users: UserDataLoader
    groups: GroupDataLoader
    group_members: GroupMembersDataLoader
    user_groups: UserGroupsDataLoader
    user_friends: UserFriendsDataLoader
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


def create_dataloaders(session: AsyncSession) -> DataLoaders:
    """Factory for creating request-scoped DataLoaders.

    Args:
        session: Database session for the current request or event

    Returns:
        DataLoaders container with all loaders sharing one session lock
    """
    lock = asyncio.Lock()
    return DataLoaders(
        session=session,
        users=UserDataLoader(session, lock),
        groups=GroupDataLoader(session, lock),
        group_members=GroupMembersDataLoader(session, lock),
        user_groups=UserGroupsDataLoader(session, lock),
        user_friends=UserFriendsDataLoader(session, lock),
        lock=lock,
    )


__all__ = [
    "DataLoaders",
    "GroupDataLoader",
    "GroupMembersDataLoader",
    "UserDataLoader",
    "UserFriendsDataLoader",
    "UserGroupsDataLoader",
    "create_dataloaders",
]
