"""Event fan-out used by GraphQL subscriptions."""

from chat_service.infra.events.broker import (
    Event,
    EventBroker,
    get_event_broker,
    reset_event_broker,
)

__all__ = [
    "Event",
    "EventBroker",
    "get_event_broker",
    "reset_event_broker",
]
