"""Strawberry extensions for the GraphQL schema.

Provides:
- Query depth limiting (GRAPHQL_MAX_QUERY_DEPTH)
- Optional introspection blocking (GRAPHQL_INTROSPECTION_ENABLED=false)
- Error classification, logging and production masking
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphql.validation import NoSchemaIntrospectionCustomRule
from strawberry.extensions import AddValidationRules, QueryDepthLimiter, SchemaExtension

from chat_service.features.graphql.error_handler import process_graphql_errors

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from chat_service.core.settings.graphql import GraphQLSettings

logger = logging.getLogger(__name__)


class ErrorProcessingExtension(SchemaExtension):
    """Run every operation's errors through ``process_graphql_errors``."""

    def __init__(self, *, production: bool = False) -> None:
        self.production = production

    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        errors = getattr(result, "errors", None)
        if result is not None and errors:
            result.errors = process_graphql_errors(
                list(errors),
                self.execution_context,
                production=self.production,
            )


def get_extensions(
    settings: GraphQLSettings, *, production: bool = False
) -> list[Callable[[], SchemaExtension]]:
    """Get list of Strawberry extension factories for the schema.

    Strawberry calls each factory once per operation, so no extension state
    is shared between requests.

    Args:
        settings: GraphQL settings (depth limit, introspection)
        production: Mask internal errors

    Returns:
        List of extension factories
    """
    max_depth = settings.max_query_depth
    extensions: list[Callable[[], SchemaExtension]] = [
        lambda: QueryDepthLimiter(max_depth=max_depth),
    ]
    if not settings.introspection_enabled:
        extensions.append(lambda: AddValidationRules([NoSchemaIntrospectionCustomRule]))
    extensions.append(lambda: ErrorProcessingExtension(production=production))

    logger.debug(
        "GraphQL extensions configured",
        extra={
            "max_query_depth": settings.max_query_depth,
            "introspection_enabled": settings.introspection_enabled,
            "mask_errors": production,
        },
    )
    return extensions


__all__ = ["ErrorProcessingExtension", "get_extensions"]
