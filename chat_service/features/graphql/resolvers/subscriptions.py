"""Subscription resolvers for real-time GraphQL updates.

Provides WebSocket subscriptions for:
- messageAdded(groupIds): New messages, optionally limited to some groups
- groupAdded(userId): New groups, optionally limited to one member

Events only carry ids. Each event is resolved in its own short-lived
session with fresh DataLoaders, held open while the payload is serialized.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import aclosing
import logging
from typing import Annotated

import strawberry
from strawberry.types import Info

from chat_service.features.graphql.context import GraphQLContext
from chat_service.features.graphql.dataloaders import create_dataloaders
from chat_service.features.graphql.events import GROUP_ADDED, MESSAGE_ADDED
from chat_service.features.graphql.types.chat import GroupType, MessageType
from chat_service.features.groups.repository import get_group_repository
from chat_service.features.messages.repository import get_message_repository
from chat_service.infra.database import session_scope

logger = logging.getLogger(__name__)

GroupIdsArg = Annotated[
    list[int] | None,
    strawberry.argument(description="Only messages sent to these groups (all groups when omitted)"),
]
UserIdArg = Annotated[
    int | None,
    strawberry.argument(description="Only groups this user is a member of (all groups when omitted)"),
]


@strawberry.type(description="Root subscription type")
class Subscription:
    """GraphQL Subscription resolvers.

    Subscriptions use WebSocket transport and the event broker for fan-out
    (Redis PubSub across instances when configured).
    """

    @strawberry.subscription(description="Subscribe to new messages")
    async def message_added(
        self,
        info: Info[GraphQLContext, None],
        group_ids: GroupIdsArg = None,
    ) -> AsyncGenerator[MessageType, None]:
        ctx = info.context
        wanted = set(group_ids) if group_ids is not None else None
        repo = get_message_repository()

        async with aclosing(ctx.broker.subscribe([MESSAGE_ADDED])) as events:
            async for _, event in events:
                if wanted is not None and event.get("group_id") not in wanted:
                    continue

                async with session_scope(ctx.session_factory) as session:
                    message = await repo.get(session, event["message_id"])
                    if message is None:
                        logger.debug("Message %s vanished before delivery", event["message_id"])
                        continue
                    yield MessageType.from_model(message, create_dataloaders(session))

    @strawberry.subscription(description="Subscribe to newly created groups")
    async def group_added(
        self,
        info: Info[GraphQLContext, None],
        user_id: UserIdArg = None,
    ) -> AsyncGenerator[GroupType, None]:
        ctx = info.context
        repo = get_group_repository()

        async with aclosing(ctx.broker.subscribe([GROUP_ADDED])) as events:
            async for _, event in events:
                if user_id is not None and user_id not in event.get("user_ids", []):
                    continue

                async with session_scope(ctx.session_factory) as session:
                    group = await repo.get(session, event["group_id"])
                    if group is None:
                        logger.debug("Group %s vanished before delivery", event["group_id"])
                        continue
                    yield GroupType.from_model(group, create_dataloaders(session))


__all__ = ["Subscription"]
