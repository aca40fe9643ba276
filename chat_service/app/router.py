"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chat_service.core.settings import get_graphql_settings
from chat_service.features.graphql.router import create_graphql_router
from chat_service.features.health.router import router as health_router

if TYPE_CHECKING:
    import strawberry
    from fastapi import FastAPI

    from chat_service.core.settings.graphql import GraphQLSettings

logger = logging.getLogger(__name__)


def setup_routers(
    app: FastAPI,
    graphql_settings: GraphQLSettings | None = None,
    graphql_schema: strawberry.Schema | None = None,
) -> None:
    """Register the health and GraphQL routers with the application.

    Args:
        app: FastAPI application instance.
        graphql_settings: Optional override for the GraphQL path and IDE.
        graphql_schema: Optional schema override (defaults to the module schema).
    """
    graphql_settings = graphql_settings or get_graphql_settings()

    app.include_router(health_router)

    graphql_router = create_graphql_router(graphql_settings, graphql_schema)
    app.include_router(graphql_router, prefix=graphql_settings.path, tags=["graphql"])
    logger.info(
        "GraphQL endpoint enabled at %s (playground: %s)",
        graphql_settings.path,
        "enabled" if graphql_settings.playground_enabled else "disabled",
    )


__all__ = ["setup_routers"]
