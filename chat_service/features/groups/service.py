"""Service layer for group lifecycle and membership."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chat_service.core.exceptions import (
    ConflictException,
    NotFoundException,
    ValidationException,
)
from chat_service.core.services.base import BaseService
from chat_service.features.groups.models import Group
from chat_service.features.groups.repository import GroupRepository, get_group_repository
from chat_service.features.users.repository import UserRepository, get_user_repository

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

MAX_GROUP_NAME_LENGTH = 200


class GroupService(BaseService):
    """Create, rename, re-member, delete and leave groups.

    The service flushes but never commits; the caller owns the transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: GroupRepository | None = None,
        user_repository: UserRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_group_repository()
        self._users = user_repository or get_user_repository()

    async def get_group(self, group_id: int) -> Group:
        """Fetch a group or raise NotFoundException."""
        group = await self._repository.get(self._session, group_id)
        if group is None:
            raise NotFoundException(
                detail=f"Group {group_id} not found",
                extra={"group_id": group_id},
            )
        return group

    async def create_group(
        self,
        name: str,
        user_ids: Sequence[int] = (),
        user_id: int | None = None,
    ) -> Group:
        """Create a group with ``user_ids`` (plus the creator, if given) as members."""
        member_ids = list(dict.fromkeys([*user_ids, *([user_id] if user_id is not None else [])]))
        await self._ensure_users_exist(member_ids)

        group = await self._repository.create(self._session, Group(name=_clean_name(name)))
        await self._repository.add_members(self._session, group.id, member_ids)
        await self._session.flush()

        self.logger.info(
            "Group created",
            extra={
                "group_id": group.id,
                "member_count": len(member_ids),
                "operation": "service.create_group",
            },
        )
        return group

    async def update_group(
        self,
        group_id: int,
        *,
        name: str | None = None,
        user_ids: Sequence[int] | None = None,
    ) -> Group:
        """Rename a group and/or replace its member list.

        ``None`` leaves the corresponding attribute untouched.
        """
        group = await self.get_group(group_id)

        if name is not None:
            group.name = _clean_name(name)

        if user_ids is not None:
            wanted = list(dict.fromkeys(user_ids))
            await self._ensure_users_exist(wanted)
            current = await self._repository.member_ids(self._session, group_id)
            await self._repository.remove_members(
                self._session, group_id, sorted(current - set(wanted))
            )
            await self._repository.add_members(self._session, group_id, wanted)

        await self._session.flush()
        await self._session.refresh(group)

        self.logger.info(
            "Group updated",
            extra={
                "group_id": group_id,
                "renamed": name is not None,
                "members_replaced": user_ids is not None,
                "operation": "service.update_group",
            },
        )
        return group

    async def delete_group(self, group_id: int) -> Group:
        """Delete a group together with its messages and memberships."""
        group = await self.get_group(group_id)
        await self._repository.delete(self._session, group)

        self.logger.info(
            "Group deleted",
            extra={"group_id": group_id, "operation": "service.delete_group"},
        )
        return group

    async def leave_group(self, group_id: int, user_id: int) -> Group:
        """Remove ``user_id`` from a group; the last member out deletes it."""
        group = await self.get_group(group_id)

        removed = await self._repository.remove_members(self._session, group_id, [user_id])
        if not removed:
            raise ConflictException(
                detail=f"User {user_id} is not a member of group {group_id}",
                extra={"group_id": group_id, "user_id": user_id},
            )

        remaining = await self._repository.member_ids(self._session, group_id)
        if not remaining:
            await self._repository.delete(self._session, group)
            self.logger.info(
                "Group deleted after last member left",
                extra={"group_id": group_id, "user_id": user_id, "operation": "service.leave_group"},
            )
        else:
            self.logger.info(
                "User left group",
                extra={"group_id": group_id, "user_id": user_id, "operation": "service.leave_group"},
            )
        return group

    async def _ensure_users_exist(self, user_ids: Sequence[int]) -> None:
        if not user_ids:
            return
        found = {user.id for user in await self._users.get_many(self._session, user_ids)}
        missing = [uid for uid in user_ids if uid not in found]
        if missing:
            raise NotFoundException(
                detail=f"Users not found: {missing}",
                extra={"user_ids": missing},
            )


def _clean_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValidationException(detail="Group name cannot be empty", extra={"field": "name"})
    if len(cleaned) > MAX_GROUP_NAME_LENGTH:
        raise ValidationException(
            detail=f"Group name must be {MAX_GROUP_NAME_LENGTH} characters or less",
            extra={"field": "name"},
        )
    return cleaned
