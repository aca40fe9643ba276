"""GraphQL types for users, groups and messages.

Each type carries the request's (or subscription event's) DataLoaders as a
private field, so nested fields resolve against the session that produced
the parent object.
"""

from __future__ import annotations

from datetime import datetime

import strawberry
from strawberry.types import Info

from chat_service.core.database import InvalidCursorError
from chat_service.core.exceptions import ValidationException
from chat_service.features.graphql.adapters import unpack_connection_input
from chat_service.features.graphql.context import GraphQLContext
from chat_service.features.graphql.dataloaders import DataLoaders
from chat_service.features.graphql.types.base import PageInfoType
from chat_service.features.graphql.types.pagination import ConnectionInput
from chat_service.features.groups.models import Group
from chat_service.features.messages.models import Message
from chat_service.features.messages.repository import get_message_repository
from chat_service.features.users.models import User


@strawberry.type(name="User", description="A chat participant")
class UserType:
    """GraphQL type for the User entity."""

    id: int = strawberry.field(description="Unique identifier")
    email: str = strawberry.field(description="Email address (unique)")
    username: str = strawberry.field(description="Display name")
    created_at: datetime = strawberry.field(description="When the user signed up")
    loaders: strawberry.Private[DataLoaders]

    @classmethod
    def from_model(cls, user: User, loaders: DataLoaders) -> UserType:
        """Convert SQLAlchemy model to GraphQL type."""
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            created_at=user.created_at,
            loaders=loaders,
        )

    @strawberry.field(description="Groups the user belongs to")
    async def groups(self) -> list[GroupType]:
        groups = await self.loaders.user_groups.load(self.id)
        return [GroupType.from_model(group, self.loaders) for group in groups]

    @strawberry.field(description="The user's friends")
    async def friends(self) -> list[UserType]:
        friends = await self.loaders.user_friends.load(self.id)
        return [UserType.from_model(friend, self.loaders) for friend in friends]


@strawberry.type(name="Message", description="A message sent by a user to a group")
class MessageType:
    """GraphQL type for the Message entity."""

    id: int = strawberry.field(description="Unique identifier; higher ids are newer")
    text: str = strawberry.field(description="Message body")
    created_at: datetime = strawberry.field(description="When the message was sent")
    user_id: strawberry.Private[int]
    group_id: strawberry.Private[int]
    loaders: strawberry.Private[DataLoaders]

    @classmethod
    def from_model(cls, message: Message, loaders: DataLoaders) -> MessageType:
        """Convert SQLAlchemy model to GraphQL type."""
        return cls(
            id=message.id,
            text=message.text,
            created_at=message.created_at,
            user_id=message.user_id,
            group_id=message.group_id,
            loaders=loaders,
        )

    @strawberry.field(name="from", description="The sender")
    async def from_(self) -> UserType:
        user = await self.loaders.users.load(self.user_id)
        return UserType.from_model(user, self.loaders)

    @strawberry.field(description="The group the message was sent to")
    async def to(self) -> GroupType:
        group = await self.loaders.groups.load(self.group_id)
        return GroupType.from_model(group, self.loaders)


@strawberry.type(name="MessageEdge", description="A message and the cursor that addresses it")
class MessageEdge:
    cursor: str = strawberry.field(description="Opaque cursor for this edge")
    node: MessageType = strawberry.field(description="The message")


@strawberry.type(name="MessageConnection", description="One page of a group's messages, newest first")
class MessageConnection:
    edges: list[MessageEdge] = strawberry.field(description="Messages on this page")
    page_info: PageInfoType = strawberry.field(description="Pagination metadata")


@strawberry.type(name="Group", description="A named conversation between a set of users")
class GroupType:
    """GraphQL type for the Group entity."""

    id: int = strawberry.field(description="Unique identifier")
    name: str = strawberry.field(description="Group name")
    created_at: datetime = strawberry.field(description="When the group was created")
    loaders: strawberry.Private[DataLoaders]

    @classmethod
    def from_model(cls, group: Group, loaders: DataLoaders) -> GroupType:
        """Convert SQLAlchemy model to GraphQL type."""
        return cls(
            id=group.id,
            name=group.name,
            created_at=group.created_at,
            loaders=loaders,
        )

    @strawberry.field(description="Members of the group")
    async def users(self) -> list[UserType]:
        members = await self.loaders.group_members.load(self.id)
        return [UserType.from_model(user, self.loaders) for user in members]

    @strawberry.field(description="Messages sent to the group, newest first")
    async def messages(
        self,
        info: Info[GraphQLContext, None],
        message_connection: ConnectionInput | None = {},  # noqa: B006 - GraphQL default value
    ) -> MessageConnection:
        settings = info.context.graphql_settings
        args = unpack_connection_input(
            message_connection,
            default_first=settings.default_message_page_size,
            max_page_size=settings.max_page_size,
        )

        try:
            async with self.loaders.lock:
                page = await get_message_repository().paginate_for_group(
                    self.loaders.session, self.id, **args.as_kwargs()
                )
        except InvalidCursorError as e:
            raise ValidationException(
                detail=f"Invalid cursor: {e.cursor}",
                extra={"field": "messageConnection"},
            ) from e

        return MessageConnection(
            edges=[
                MessageEdge(cursor=edge.cursor, node=MessageType.from_model(edge.node, self.loaders))
                for edge in page.edges
            ],
            page_info=PageInfoType.from_page_info(page.page_info),
        )


__all__ = [
    "GroupType",
    "MessageConnection",
    "MessageEdge",
    "MessageType",
    "UserType",
]
