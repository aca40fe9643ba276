"""Query resolvers for the GraphQL API.

Provides read operations:
- user(id, email): A single user
- users: All users
- group(id): A single group
- messages(groupId, userId): Messages filtered by group and/or sender
"""

from __future__ import annotations

import logging
from typing import Annotated

import strawberry
from strawberry.types import Info

from chat_service.core.exceptions import ValidationException
from chat_service.features.graphql.context import GraphQLContext
from chat_service.features.graphql.types.chat import GroupType, MessageType, UserType
from chat_service.features.messages.service import MessageService
from chat_service.features.users.repository import get_user_repository

logger = logging.getLogger(__name__)

# Type aliases for annotated arguments with descriptions
GroupIdFilterArg = Annotated[
    int | None, strawberry.argument(description="Only messages sent to this group"),
]
UserIdFilterArg = Annotated[
    int | None, strawberry.argument(description="Only messages sent by this user"),
]


@strawberry.type(description="Root query type")
class Query:
    """GraphQL Query resolvers."""

    @strawberry.field(description="Get a single user by ID or email")
    async def user(
        self,
        info: Info[GraphQLContext, None],
        id: int | None = None,
        email: str | None = None,
    ) -> UserType | None:
        """Get a user by ID or email; at least one must be given.

        When both are given the user must match both.
        """
        ctx = info.context
        if id is None and email is None:
            raise ValidationException(detail="Either id or email is required", extra={"field": "id"})

        if id is not None:
            user = await ctx.loaders.users.load(id)
            if user is not None and email is not None and user.email != email:
                user = None
        else:
            async with ctx.loaders.lock:
                user = await get_user_repository().get_by_email(ctx.session, email)

        return UserType.from_model(user, ctx.loaders) if user else None

    @strawberry.field(description="List all users")
    async def users(self, info: Info[GraphQLContext, None]) -> list[UserType]:
        ctx = info.context
        async with ctx.loaders.lock:
            users = await get_user_repository().list(ctx.session, limit=1000)
        return [UserType.from_model(user, ctx.loaders) for user in users]

    @strawberry.field(description="Get a single group by ID")
    async def group(self, info: Info[GraphQLContext, None], id: int) -> GroupType | None:
        ctx = info.context
        group = await ctx.loaders.groups.load(id)
        if group is None:
            logger.debug("Group %s not found", id)
            return None
        return GroupType.from_model(group, ctx.loaders)

    @strawberry.field(description="Messages filtered by group and/or sender, newest first")
    async def messages(
        self,
        info: Info[GraphQLContext, None],
        group_id: GroupIdFilterArg = None,
        user_id: UserIdFilterArg = None,
    ) -> list[MessageType]:
        ctx = info.context
        async with ctx.loaders.lock:
            messages = await MessageService(ctx.session).list_messages(
                group_id=group_id,
                user_id=user_id,
            )
        return [MessageType.from_model(message, ctx.loaders) for message in messages]


__all__ = ["Query"]
