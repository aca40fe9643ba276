"""DataLoaders for users and the user side of memberships.

Prevents N+1 queries when resolving ``Message.from``, ``Group.users`` and
``User.friends`` for many parents at once.
"""

from __future__ import annotations

from chat_service.features.graphql.dataloaders.base import SessionDataLoader
from chat_service.features.users.models import User
from chat_service.features.users.repository import get_user_repository


class UserDataLoader(SessionDataLoader[int, User | None]):
    """Batch-load users by ID.

    Usage:
        user = await loaders.users.load(message.user_id)
    """

    async def fetch(self, keys: list[int]) -> list[User | None]:
        users = await get_user_repository().get_many(self._session, keys)
        by_id = {user.id: user for user in users}
        return [by_id.get(key) for key in keys]


class GroupMembersDataLoader(SessionDataLoader[int, list[User]]):
    """Batch-load the members of groups, keyed by group ID."""

    async def fetch(self, keys: list[int]) -> list[list[User]]:
        members = await get_user_repository().list_for_groups(self._session, keys)
        return [members.get(key, []) for key in keys]


class UserFriendsDataLoader(SessionDataLoader[int, list[User]]):
    """Batch-load friends, keyed by user ID."""

    async def fetch(self, keys: list[int]) -> list[list[User]]:
        friends = await get_user_repository().list_friends(self._session, keys)
        return [friends.get(key, []) for key in keys]
