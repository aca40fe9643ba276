"""GraphQL context for request-scoped dependencies.

The context is created fresh for each GraphQL request (or WebSocket
connection) and provides:
- Database session and DataLoaders (for queries and mutations)
- Session factory (subscriptions open a short session per event)
- Event broker (mutations publish, subscriptions listen)
- GraphQL settings (connection defaults)
- Correlation ID (for log correlation)

Following Strawberry's FastAPI integration pattern:
https://strawberry.rocks/docs/integrations/fastapi#context_getter
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from strawberry.fastapi import BaseContext

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.websockets import WebSocket

    from chat_service.core.settings.graphql import GraphQLSettings
    from chat_service.features.graphql.dataloaders import DataLoaders
    from chat_service.infra.events import EventBroker


@dataclass
class GraphQLContext(BaseContext):
    """Request context for GraphQL operations.

    Standard fields (filled in by Strawberry's FastAPI router):
    - request: The HTTP request or WebSocket
    - response: The HTTP response (None for WebSocket)
    - background_tasks: FastAPI BackgroundTasks

    Example usage in resolver:
        @strawberry.field
        async def group(self, info: Info[GraphQLContext, None], id: int) -> GroupType | None:
            ctx = info.context
            group = await ctx.loaders.groups.load(id)
            return GroupType.from_model(group, ctx.loaders) if group else None
    """

    # Standard Strawberry/FastAPI context fields
    request: Request | WebSocket | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None
    connection_params: dict[str, Any] | None = None

    # Custom application fields
    session: AsyncSession = field(default=None)  # type: ignore[assignment]
    loaders: DataLoaders = field(default=None)  # type: ignore[assignment]
    session_factory: async_sessionmaker[AsyncSession] = field(default=None)  # type: ignore[assignment]
    broker: EventBroker = field(default=None)  # type: ignore[assignment]
    graphql_settings: GraphQLSettings = field(default=None)  # type: ignore[assignment]
    correlation_id: str | None = None


__all__ = ["GraphQLContext"]
