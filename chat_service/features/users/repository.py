"""Repository for chat users."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from chat_service.core.database import BaseRepository
from chat_service.features.groups.models import group_users
from chat_service.features.users.models import User, user_friends

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class UserRepository(BaseRepository[User]):
    """Repository for User with lookups used by the GraphQL loaders."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(self, session: AsyncSession, email: str) -> User | None:
        """Find a user by email address."""
        return await self.get_by(session, User.email, email)

    async def list_for_groups(
        self, session: AsyncSession, group_ids: Sequence[int]
    ) -> dict[int, list[User]]:
        """Members of each group, keyed by group id, ordered by user id."""
        stmt = (
            select(group_users.c.group_id, User)
            .join(group_users, group_users.c.user_id == User.id)
            .where(group_users.c.group_id.in_(group_ids))
            .order_by(User.id)
        )
        result = await session.execute(stmt)
        members: dict[int, list[User]] = {group_id: [] for group_id in group_ids}
        for group_id, user in result.all():
            members[group_id].append(user)

        self._lazy.debug(
            lambda: f"db.list_for_groups: {len(group_ids)} groups -> {sum(map(len, members.values()))} members"
        )
        return members

    async def list_friends(
        self, session: AsyncSession, user_ids: Sequence[int]
    ) -> dict[int, list[User]]:
        """Friends of each user, keyed by user id."""
        stmt = (
            select(user_friends.c.user_id, User)
            .join(user_friends, user_friends.c.friend_id == User.id)
            .where(user_friends.c.user_id.in_(user_ids))
            .order_by(User.id)
        )
        result = await session.execute(stmt)
        friends: dict[int, list[User]] = {user_id: [] for user_id in user_ids}
        for user_id, friend in result.all():
            friends[user_id].append(friend)
        return friends


_user_repository: UserRepository | None = None


def get_user_repository() -> UserRepository:
    """Get the shared UserRepository instance."""
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepository()
    return _user_repository
