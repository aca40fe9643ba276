"""Repository for chat messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from chat_service.core.database import BaseRepository, CollectionFilter, EqualsFilter
from chat_service.features.messages.models import Message

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from chat_service.core.pagination import Connection

# Newest first; ids are unique so they are a complete keyset on their own.
MESSAGE_ORDER = [(Message.id, "desc")]


class MessageRepository(BaseRepository[Message]):
    """Repository for Message."""

    def __init__(self) -> None:
        super().__init__(Message)

    async def paginate_for_group(
        self,
        session: AsyncSession,
        group_id: int,
        *,
        first: int | None = None,
        after: str | None = None,
        last: int | None = None,
        before: str | None = None,
    ) -> Connection[Message]:
        """One page of a group's messages, newest first.

        Raises:
            InvalidCursorError: If ``after``/``before`` is not a valid cursor.
        """
        stmt = select(Message).where(Message.group_id == group_id)
        connection = await self.paginate_cursor(
            session,
            stmt,
            first=first,
            after=after,
            last=last,
            before=before,
            order_by=MESSAGE_ORDER,
        )
        self._lazy.debug(
            lambda: f"db.paginate_for_group: group {group_id} first={first} last={last} -> {len(connection.edges)} messages"
        )
        return connection

    async def find(
        self,
        session: AsyncSession,
        *,
        group_ids: Sequence[int] | None = None,
        user_id: int | None = None,
        limit: int = 100,
    ) -> Sequence[Message]:
        """Messages filtered by groups and/or sender, newest first."""
        stmt = select(Message)
        if group_ids is not None:
            stmt = CollectionFilter(Message.group_id, group_ids).apply(stmt)
        stmt = EqualsFilter(Message.user_id, user_id).apply(stmt)
        stmt = stmt.order_by(Message.id.desc()).limit(limit)

        result = await session.execute(stmt)
        items = result.scalars().all()
        self._lazy.debug(
            lambda: f"db.find: Message(groups={group_ids}, user={user_id}) -> {len(items)} items"
        )
        return items


_message_repository: MessageRepository | None = None


def get_message_repository() -> MessageRepository:
    """Get the shared MessageRepository instance."""
    global _message_repository
    if _message_repository is None:
        _message_repository = MessageRepository()
    return _message_repository
