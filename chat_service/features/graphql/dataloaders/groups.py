"""DataLoaders for groups."""

from __future__ import annotations

from chat_service.features.graphql.dataloaders.base import SessionDataLoader
from chat_service.features.groups.models import Group
from chat_service.features.groups.repository import get_group_repository


class GroupDataLoader(SessionDataLoader[int, Group | None]):
    """Batch-load groups by ID (resolves ``Message.to``)."""

    async def fetch(self, keys: list[int]) -> list[Group | None]:
        groups = await get_group_repository().get_many(self._session, keys)
        by_id = {group.id: group for group in groups}
        return [by_id.get(key) for key in keys]


class UserGroupsDataLoader(SessionDataLoader[int, list[Group]]):
    """Batch-load the groups each user belongs to, keyed by user ID."""

    async def fetch(self, keys: list[int]) -> list[list[Group]]:
        groups = await get_group_repository().list_for_users(self._session, keys)
        return [groups.get(key, []) for key in keys]
