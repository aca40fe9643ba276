"""Event broker dependency for FastAPI route handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.requests import HTTPConnection

if TYPE_CHECKING:
    from chat_service.infra.events import EventBroker


def get_broker(connection: HTTPConnection) -> EventBroker:
    """Event broker registered on the application (started by the lifespan)."""
    return connection.app.state.broker


__all__ = ["get_broker"]
