"""Mutation resolvers for the GraphQL API.

Every mutation takes its payload as one required input argument:
- createMessage(message: CreateMessageInput!)
- createGroup(group: CreateGroupInput!)
- updateGroup(group: UpdateGroupInput!)
- deleteGroup(id)
- leaveGroup(id, userId)

Domain errors raised by the services propagate as GraphQL errors; the
error extension attaches their ``extensions.code``.
"""

from __future__ import annotations

import logging

import strawberry
from strawberry.types import Info

from chat_service.features.graphql.context import GraphQLContext
from chat_service.features.graphql.events import publish_group_added, publish_message_added
from chat_service.features.graphql.types.chat import GroupType, MessageType
from chat_service.features.graphql.types.inputs import (
    CreateGroupInput,
    CreateMessageInput,
    UpdateGroupInput,
)
from chat_service.features.groups.service import GroupService
from chat_service.features.messages.service import MessageService

logger = logging.getLogger(__name__)


@strawberry.type(description="Root mutation type")
class Mutation:
    """GraphQL Mutation resolvers."""

    @strawberry.mutation(description="Send a message to a group")
    async def create_message(
        self,
        info: Info[GraphQLContext, None],
        message: CreateMessageInput,
    ) -> MessageType:
        ctx = info.context
        async with ctx.loaders.lock:
            try:
                created = await MessageService(ctx.session).create_message(
                    group_id=message.group_id,
                    user_id=message.user_id,
                    text=message.text,
                )
                await ctx.session.commit()
            except Exception:
                await ctx.session.rollback()
                raise

        await publish_message_added(ctx.broker, created)
        return MessageType.from_model(created, ctx.loaders)

    @strawberry.mutation(description="Create a group")
    async def create_group(
        self,
        info: Info[GraphQLContext, None],
        group: CreateGroupInput,
    ) -> GroupType:
        """Create a group; ``userId`` (the creator) is added to ``userIds``."""
        ctx = info.context
        member_ids = [*group.user_ids, *([group.user_id] if group.user_id is not None else [])]
        async with ctx.loaders.lock:
            try:
                created = await GroupService(ctx.session).create_group(
                    group.name,
                    user_ids=group.user_ids,
                    user_id=group.user_id,
                )
                await ctx.session.commit()
            except Exception:
                await ctx.session.rollback()
                raise

        await publish_group_added(ctx.broker, created, member_ids)
        return GroupType.from_model(created, ctx.loaders)

    @strawberry.mutation(description="Rename a group and/or replace its members")
    async def update_group(
        self,
        info: Info[GraphQLContext, None],
        group: UpdateGroupInput,
    ) -> GroupType:
        ctx = info.context
        async with ctx.loaders.lock:
            try:
                updated = await GroupService(ctx.session).update_group(
                    group.id,
                    name=group.name,
                    user_ids=group.user_ids,
                )
                await ctx.session.commit()
            except Exception:
                await ctx.session.rollback()
                raise

        return GroupType.from_model(updated, ctx.loaders)

    @strawberry.mutation(description="Delete a group and its messages")
    async def delete_group(self, info: Info[GraphQLContext, None], id: int) -> GroupType:
        ctx = info.context
        async with ctx.loaders.lock:
            try:
                deleted = await GroupService(ctx.session).delete_group(id)
                await ctx.session.commit()
            except Exception:
                await ctx.session.rollback()
                raise

        return GroupType.from_model(deleted, ctx.loaders)

    @strawberry.mutation(description="Remove a user from a group")
    async def leave_group(
        self,
        info: Info[GraphQLContext, None],
        id: int,
        user_id: int,
    ) -> GroupType:
        """Remove ``userId`` from group ``id``; the last member leaving deletes the group."""
        ctx = info.context
        async with ctx.loaders.lock:
            try:
                group = await GroupService(ctx.session).leave_group(id, user_id)
                await ctx.session.commit()
            except Exception:
                await ctx.session.rollback()
                raise

        return GroupType.from_model(group, ctx.loaders)


__all__ = ["Mutation"]
