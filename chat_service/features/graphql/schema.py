"""GraphQL schema assembly.

Combines Query, Mutation, and Subscription types into a single schema
with the configured extensions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import strawberry

from chat_service.core.settings import get_app_settings, get_graphql_settings
from chat_service.features.graphql.extensions import get_extensions
from chat_service.features.graphql.resolvers import Mutation, Query, Subscription

if TYPE_CHECKING:
    from graphql import GraphQLError
    from strawberry.types import ExecutionContext

    from chat_service.core.settings.graphql import GraphQLSettings

logger = logging.getLogger(__name__)


class ChatSchema(strawberry.Schema):
    """Schema whose errors are logged by ``ErrorProcessingExtension``."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        # Logged with classification and context by the error extension
        return None


def create_schema(
    settings: GraphQLSettings | None = None,
    *,
    production: bool | None = None,
) -> ChatSchema:
    """Build the schema.

    Args:
        settings: GraphQL settings; defaults to the environment's
        production: Mask internal errors; defaults to APP_ENVIRONMENT == "production"
    """
    settings = settings or get_graphql_settings()
    if production is None:
        production = get_app_settings().is_production

    return ChatSchema(
        query=Query,
        mutation=Mutation,
        subscription=Subscription,
        extensions=get_extensions(settings, production=production),
    )


schema = create_schema()

logger.debug("GraphQL schema created")

__all__ = ["ChatSchema", "create_schema", "schema"]
