"""SQLAlchemy models for chat groups."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chat_service.core.database import Base, TimestampedBase

if TYPE_CHECKING:
    from chat_service.features.messages.models import Message
    from chat_service.features.users.models import User

group_users = Table(
    "group_users",
    Base.metadata,
    Column("group_id", ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Group(TimestampedBase):
    """A named conversation between a set of users."""

    __tablename__ = "groups"

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    users: Mapped[list[User]] = relationship(
        "User",
        secondary=group_users,
        back_populates="groups",
        order_by="User.id",
    )
    messages: Mapped[list[Message]] = relationship(
        "Message",
        back_populates="group",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"Group(id={self.id!r}, name={self.name!r})"
