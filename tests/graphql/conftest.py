"""GraphQL test fixtures.

Provides:
- A context factory mirroring what the FastAPI router builds per request
- ``execute``: run a catalog request (or raw document) in its own session
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import pytest

from chat_service.client.documents import RequestDefinition
from chat_service.features.graphql.context import GraphQLContext
from chat_service.features.graphql.dataloaders import create_dataloaders
from chat_service.features.graphql.schema import create_schema
from chat_service.infra.database import session_scope

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    from strawberry.types import ExecutionResult

    from chat_service.client.fragments import FragmentLibrary
    from chat_service.core.settings.graphql import GraphQLSettings
    from chat_service.features.graphql.schema import ChatSchema
    from chat_service.infra.events import EventBroker

Execute = Callable[..., Awaitable["ExecutionResult"]]


@pytest.fixture
def schema(graphql_settings: GraphQLSettings) -> ChatSchema:
    """Schema built from the test settings, with errors unmasked."""
    return create_schema(graphql_settings, production=False)


@pytest.fixture
def make_context(
    session_factory: async_sessionmaker[AsyncSession],
    broker: EventBroker,
    graphql_settings: GraphQLSettings,
) -> Callable[[AsyncSession], GraphQLContext]:
    """Build a request context around ``session``."""

    def _make(session: AsyncSession) -> GraphQLContext:
        return GraphQLContext(
            session=session,
            loaders=create_dataloaders(session),
            session_factory=session_factory,
            broker=broker,
            graphql_settings=graphql_settings,
            correlation_id="test-correlation-id",
        )

    return _make


@pytest.fixture
def execute(
    schema: ChatSchema,
    session_factory: async_sessionmaker[AsyncSession],
    make_context: Callable[[AsyncSession], GraphQLContext],
) -> Execute:
    """Execute a request the way one HTTP request would: fresh session and loaders.

    Example:
        result = await execute(GROUP_QUERY, {"groupId": 1})
    """

    async def _execute(
        request: RequestDefinition | str,
        variables: dict[str, Any] | None = None,
        *,
        library: FragmentLibrary | None = None,
    ) -> ExecutionResult:
        if isinstance(request, RequestDefinition):
            document, operation_name = request.render(library), request.name
        else:
            document, operation_name = request, None

        async with session_scope(session_factory) as session:
            return await schema.execute(
                document,
                variable_values=variables,
                context_value=make_context(session),
                operation_name=operation_name,
            )

    return _execute
