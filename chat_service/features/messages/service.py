"""Service layer for sending and listing messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chat_service.core.exceptions import (
    ConflictException,
    NotFoundException,
    ValidationException,
)
from chat_service.core.services.base import BaseService
from chat_service.features.groups.repository import GroupRepository, get_group_repository
from chat_service.features.messages.models import Message
from chat_service.features.messages.repository import (
    MessageRepository,
    get_message_repository,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class MessageService(BaseService):
    """Orchestrates message operations using the repositories."""

    def __init__(
        self,
        session: AsyncSession,
        repository: MessageRepository | None = None,
        group_repository: GroupRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_message_repository()
        self._groups = group_repository or get_group_repository()

    async def create_message(self, *, group_id: int, user_id: int, text: str) -> Message:
        """Send ``text`` from ``user_id`` to ``group_id``.

        Raises:
            ValidationException: If the text is blank.
            NotFoundException: If the group does not exist.
            ConflictException: If the sender is not a member of the group.
        """
        if not text.strip():
            raise ValidationException(detail="Message text cannot be empty", extra={"field": "text"})

        if await self._groups.get(self._session, group_id) is None:
            raise NotFoundException(
                detail=f"Group {group_id} not found",
                extra={"group_id": group_id},
            )
        if user_id not in await self._groups.member_ids(self._session, group_id):
            raise ConflictException(
                detail=f"User {user_id} is not a member of group {group_id}",
                extra={"group_id": group_id, "user_id": user_id},
            )

        message = await self._repository.create(
            self._session,
            Message(text=text, group_id=group_id, user_id=user_id),
        )

        self.logger.info(
            "Message created",
            extra={
                "message_id": message.id,
                "group_id": group_id,
                "user_id": user_id,
                "operation": "service.create_message",
            },
        )
        return message

    async def list_messages(
        self,
        *,
        group_id: int | None = None,
        user_id: int | None = None,
    ) -> Sequence[Message]:
        """Messages matching the given group and/or sender, newest first."""
        messages = await self._repository.find(
            self._session,
            group_ids=[group_id] if group_id is not None else None,
            user_id=user_id,
        )
        self._lazy.debug(
            lambda: f"service.list_messages(group={group_id}, user={user_id}) -> {len(messages)} items"
        )
        return messages
