"""Repository for chat groups and membership."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select

from chat_service.core.database import BaseRepository
from chat_service.features.groups.models import Group, group_users

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class GroupRepository(BaseRepository[Group]):
    """Repository for Group.

    Membership is written through the association table directly so that
    adding or removing members never loads the full member collection.
    """

    def __init__(self) -> None:
        super().__init__(Group)

    async def list_for_users(
        self, session: AsyncSession, user_ids: Sequence[int]
    ) -> dict[int, list[Group]]:
        """Groups each user belongs to, keyed by user id."""
        stmt = (
            select(group_users.c.user_id, Group)
            .join(group_users, group_users.c.group_id == Group.id)
            .where(group_users.c.user_id.in_(user_ids))
            .order_by(Group.id)
        )
        result = await session.execute(stmt)
        groups: dict[int, list[Group]] = {user_id: [] for user_id in user_ids}
        for user_id, group in result.all():
            groups[user_id].append(group)
        return groups

    async def member_ids(self, session: AsyncSession, group_id: int) -> set[int]:
        """Ids of the users in a group."""
        stmt = select(group_users.c.user_id).where(group_users.c.group_id == group_id)
        result = await session.execute(stmt)
        return set(result.scalars().all())

    async def add_members(
        self, session: AsyncSession, group_id: int, user_ids: Sequence[int]
    ) -> None:
        """Add users to a group, ignoring users who are already members."""
        existing = await self.member_ids(session, group_id)
        new_ids = [uid for uid in dict.fromkeys(user_ids) if uid not in existing]
        if not new_ids:
            return
        await session.execute(
            insert(group_users),
            [{"group_id": group_id, "user_id": uid} for uid in new_ids],
        )
        self._lazy.debug(lambda: f"db.add_members: group {group_id} += {new_ids}")

    async def remove_members(
        self, session: AsyncSession, group_id: int, user_ids: Sequence[int]
    ) -> int:
        """Remove users from a group; returns the number of memberships removed."""
        if not user_ids:
            return 0
        result = await session.execute(
            delete(group_users).where(
                group_users.c.group_id == group_id,
                group_users.c.user_id.in_(list(user_ids)),
            )
        )
        return result.rowcount or 0


_group_repository: GroupRepository | None = None


def get_group_repository() -> GroupRepository:
    """Get the shared GroupRepository instance."""
    global _group_repository
    if _group_repository is None:
        _group_repository = GroupRepository()
    return _group_repository
