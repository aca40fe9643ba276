"""Publish/subscribe fan-out for GraphQL subscriptions.

The broker runs in one of two modes:

1. Local-only: events reach subscribers in this process through
   per-subscriber ``asyncio.Queue``s.
2. Redis PubSub: events are published to Redis and a single listener task
   per process delivers them to the local queues, so every instance sees
   every event.

Subscribers never talk to Redis directly; one pattern subscription per
process covers all channels.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
import contextlib
import json
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterable

    from redis.asyncio import Redis
    from redis.asyncio.client import PubSub

logger = logging.getLogger(__name__)

Event = dict[str, Any]


class EventBroker:
    """Fan out events published on named channels to async subscribers.

    Example:
        broker = EventBroker()
        await broker.start()

        async for channel, event in broker.subscribe(["message_added"]):
            ...

        # Elsewhere (all subscribers on all instances when Redis is used)
        await broker.publish("message_added", {"message_id": 7, "group_id": 2})
    """

    def __init__(
        self,
        redis_client: Redis | None = None,
        channel_prefix: str = "chat",
        queue_size: int = 100,
    ) -> None:
        """Initialize the broker.

        Args:
            redis_client: Optional Redis client. If None, runs in local-only mode.
            channel_prefix: Prefix for Redis channel names.
            queue_size: Per-subscriber buffer; the oldest event is dropped on overflow.
        """
        self._redis = redis_client
        self._channel_prefix = channel_prefix
        self._queue_size = queue_size

        # channel -> queues of the subscribers listening on it
        self._subscribers: dict[str, set[asyncio.Queue[tuple[str, Event]]]] = defaultdict(set)

        self._pubsub: PubSub | None = None
        self._listener_task: asyncio.Task[None] | None = None
        self._running = False

    @property
    def is_distributed(self) -> bool:
        """Whether events travel through Redis."""
        return self._redis is not None

    def _redis_channel(self, channel: str) -> str:
        return f"{self._channel_prefix}:{channel}"

    async def start(self) -> None:
        """Start the Redis listener (no-op in local-only mode)."""
        if self._running:
            return
        self._running = True

        if self._redis is not None:
            self._pubsub = self._redis.pubsub()
            await self._pubsub.psubscribe(f"{self._channel_prefix}:*")
            self._listener_task = asyncio.create_task(self._pubsub_listener())
            logger.info(
                "Event broker started with Redis PubSub",
                extra={"channel_prefix": self._channel_prefix},
            )
        else:
            logger.info("Event broker started in local-only mode")

    async def stop(self) -> None:
        """Stop the listener and release Redis resources."""
        self._running = False

        if self._listener_task:
            self._listener_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._listener_task
            self._listener_task = None

        if self._pubsub:
            await self._pubsub.aclose()
            self._pubsub = None

        if self._redis is not None:
            await self._redis.aclose()

        logger.info(
            "Event broker stopped",
            extra={"subscribers": self.subscriber_count()},
        )

    async def publish(self, channel: str, event: Event) -> int:
        """Publish ``event`` on ``channel``.

        Returns:
            Number of local subscribers the event was queued for (0 when the
            event went to Redis; local delivery then happens in the listener).
        """
        if self._redis is not None:
            await self._redis.publish(self._redis_channel(channel), json.dumps(event))
            return 0
        return self._deliver(channel, event)

    async def subscribe(self, channels: Iterable[str]) -> AsyncGenerator[tuple[str, Event]]:
        """Yield ``(channel, event)`` pairs for the given channels until closed.

        The subscriber is registered before the first event is awaited and is
        removed when the generator is closed or cancelled.
        """
        channel_list = list(dict.fromkeys(channels))
        queue: asyncio.Queue[tuple[str, Event]] = asyncio.Queue(maxsize=self._queue_size)

        for channel in channel_list:
            self._subscribers[channel].add(queue)
        logger.debug("Subscriber registered", extra={"channels": channel_list})

        try:
            while True:
                yield await queue.get()
        finally:
            for channel in channel_list:
                queue_set = self._subscribers.get(channel)
                if queue_set is None:
                    continue
                queue_set.discard(queue)
                if not queue_set:
                    del self._subscribers[channel]
            logger.debug("Subscriber removed", extra={"channels": channel_list})

    def subscriber_count(self, channel: str | None = None) -> int:
        """Number of subscribers on ``channel``, or distinct subscribers overall."""
        if channel is not None:
            return len(self._subscribers.get(channel, ()))
        return len({id(q) for queues in self._subscribers.values() for q in queues})

    def _deliver(self, channel: str, event: Event) -> int:
        queues = list(self._subscribers.get(channel, ()))
        for queue in queues:
            if queue.full():
                # Slow consumer: keep the newest events
                queue.get_nowait()
                logger.warning("Subscriber queue full, dropped oldest event", extra={"channel": channel})
            queue.put_nowait((channel, event))
        return len(queues)

    async def _pubsub_listener(self) -> None:
        """Deliver Redis PubSub messages to local subscribers."""
        if self._pubsub is None:
            return

        try:
            async for message in self._pubsub.listen():
                if not self._running:
                    break
                if message["type"] != "pmessage":
                    continue

                try:
                    channel = message["channel"]
                    if isinstance(channel, bytes):
                        channel = channel.decode()
                    channel = channel.removeprefix(f"{self._channel_prefix}:")

                    data = message["data"]
                    if isinstance(data, bytes):
                        data = data.decode()
                    self._deliver(channel, json.loads(data))
                except (ValueError, TypeError) as e:
                    logger.error(
                        "Error processing PubSub message",
                        extra={"error": str(e), "channel": message.get("channel")},
                    )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Subscribers stay registered but receive nothing until restart
            logger.error(
                "PubSub listener error",
                extra={"error": str(e), "error_type": type(e).__name__},
                exc_info=True,
            )


_broker: EventBroker | None = None


def get_event_broker() -> EventBroker:
    """Get the process-wide broker, using Redis when REDIS_URL is configured."""
    global _broker
    if _broker is None:
        from chat_service.core.settings import get_redis_settings

        settings = get_redis_settings()
        redis_client = None
        if settings.is_configured:
            from redis.asyncio import Redis

            redis_client = Redis.from_url(settings.redis_url, **settings.client_kwargs())
        _broker = EventBroker(redis_client, channel_prefix=settings.channel_prefix)
    return _broker


def reset_event_broker() -> None:
    """Forget the process-wide broker (used by tests)."""
    global _broker
    _broker = None


__all__ = ["Event", "EventBroker", "get_event_broker", "reset_event_broker"]
