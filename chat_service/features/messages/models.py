"""SQLAlchemy models for chat messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chat_service.core.database import TimestampedBase

if TYPE_CHECKING:
    from chat_service.features.groups.models import Group
    from chat_service.features.users.models import User


class Message(TimestampedBase):
    """A message sent by a user to a group.

    Ids increase with insertion order, so ``id DESC`` is newest first.
    """

    __tablename__ = "messages"

    text: Mapped[str] = mapped_column(Text(), nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Sender",
    )
    group_id: Mapped[int] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Recipient group",
    )

    sender: Mapped[User] = relationship("User", back_populates="messages")
    group: Mapped[Group] = relationship("Group", back_populates="messages")

    def __repr__(self) -> str:
        return f"Message(id={self.id!r}, group_id={self.group_id!r}, user_id={self.user_id!r})"
