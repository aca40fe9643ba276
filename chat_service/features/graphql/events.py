"""Event publishing utilities for GraphQL subscriptions.

Mutations publish small id-only events after their transaction commits;
subscription resolvers reload the entities from the database, so events
never carry stale copies of a row.

Usage in mutation resolvers:
    await ctx.session.commit()
    await publish_message_added(ctx.broker, message)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chat_service.features.groups.models import Group
    from chat_service.features.messages.models import Message
    from chat_service.infra.events import EventBroker

logger = logging.getLogger(__name__)

MESSAGE_ADDED = "message_added"
GROUP_ADDED = "group_added"


async def publish_event(broker: EventBroker | None, channel: str, data: dict[str, Any]) -> None:
    """Publish an event for GraphQL subscriptions.

    Failures are logged and swallowed: a committed mutation must not be
    reported as failed because a notification could not be sent.

    Args:
        broker: Event broker from the GraphQL context (None disables publishing)
        channel: Channel name (e.g. "message_added")
        data: JSON-serializable event payload
    """
    if broker is None:
        logger.debug("No event broker configured, skipping publish to %s", channel)
        return

    try:
        delivered = await broker.publish(channel, data)
        logger.debug("Published event to %s (%s local subscribers)", channel, delivered)
    except Exception:
        logger.exception("Failed to publish event", extra={"channel": channel})


async def publish_message_added(broker: EventBroker | None, message: Message) -> None:
    """Announce a new message to ``messageAdded`` subscribers."""
    await publish_event(
        broker,
        MESSAGE_ADDED,
        {"message_id": message.id, "group_id": message.group_id, "user_id": message.user_id},
    )


async def publish_group_added(
    broker: EventBroker | None,
    group: Group,
    user_ids: Iterable[int],
) -> None:
    """Announce a new group to the ``groupAdded`` subscribers of its members."""
    await publish_event(
        broker,
        GROUP_ADDED,
        {"group_id": group.id, "user_ids": sorted(set(user_ids))},
    )


__all__ = [
    "GROUP_ADDED",
    "MESSAGE_ADDED",
    "publish_event",
    "publish_group_added",
    "publish_message_added",
]
