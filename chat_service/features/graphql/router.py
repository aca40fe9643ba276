"""GraphQL router for FastAPI integration.

Provides:
- GraphQL endpoint (POST queries/mutations, GET serves the configured IDE)
- WebSocket subscriptions over graphql-transport-ws and graphql-ws
- Request context with session, DataLoaders, broker and settings
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any, cast

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.requests import HTTPConnection
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from chat_service.core.dependencies import get_broker, get_db_session, get_session_factory
from chat_service.core.settings import get_graphql_settings
from chat_service.features.graphql.context import GraphQLContext
from chat_service.features.graphql.dataloaders import create_dataloaders
from chat_service.infra.events import EventBroker

if TYPE_CHECKING:
    import strawberry

    from chat_service.core.settings.graphql import GraphQLSettings

logger = logging.getLogger(__name__)


async def get_graphql_context(
    connection: HTTPConnection,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
    broker: Annotated[EventBroker, Depends(get_broker)],
) -> GraphQLContext:
    """Create GraphQL context from FastAPI dependencies.

    Strawberry fills in ``request``, ``response`` and ``background_tasks``;
    this adds the application's dependencies.
    """
    correlation_id = getattr(connection.state, "correlation_id", None)

    return GraphQLContext(
        session=session,
        loaders=create_dataloaders(session),
        session_factory=session_factory,
        broker=broker,
        graphql_settings=connection.app.state.graphql_settings,
        correlation_id=correlation_id,
    )


def create_graphql_router(
    settings: GraphQLSettings | None = None,
    schema: strawberry.Schema | None = None,
) -> GraphQLRouter:
    """Create the GraphQL router with settings-based configuration.

    The router is mounted with ``prefix=settings.path`` by the app router.
    """
    settings = settings or get_graphql_settings()
    if schema is None:
        from chat_service.features.graphql.schema import schema as default_schema

        schema = default_schema

    subscription_protocols: tuple[str, ...] = ()
    if settings.subscriptions_enabled:
        subscription_protocols = (GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL)

    graphql_ide = settings.get_graphql_ide()

    router = GraphQLRouter(
        schema,
        context_getter=cast("Any", get_graphql_context),
        subscription_protocols=subscription_protocols,
        graphql_ide=graphql_ide or None,
        path="",
    )
    logger.debug(
        "GraphQL router created",
        extra={
            "path": settings.path,
            "graphql_ide": graphql_ide,
            "subscriptions_enabled": settings.subscriptions_enabled,
        },
    )
    return router


__all__ = ["create_graphql_router", "get_graphql_context"]
