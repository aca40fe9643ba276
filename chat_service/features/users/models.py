"""SQLAlchemy models for chat users."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chat_service.core.database import Base, TimestampedBase

if TYPE_CHECKING:
    from chat_service.features.groups.models import Group
    from chat_service.features.messages.models import Message

# Self-referential many-to-many: a row per direction of a friendship
user_friends = Table(
    "user_friends",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("friend_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(TimestampedBase):
    """A chat participant."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    username: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    groups: Mapped[list[Group]] = relationship(
        "Group",
        secondary="group_users",
        back_populates="users",
        order_by="Group.id",
    )
    friends: Mapped[list[User]] = relationship(
        "User",
        secondary=user_friends,
        primaryjoin=lambda: User.id == user_friends.c.user_id,
        secondaryjoin=lambda: User.id == user_friends.c.friend_id,
        order_by="User.id",
    )
    messages: Mapped[list[Message]] = relationship(
        "Message",
        back_populates="sender",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r})"
