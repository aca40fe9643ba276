"""FastAPI application factory.

Run with uvicorn's factory mode:
    uvicorn chat_service.app.main:create_app --factory
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI

from chat_service.app.exception_handlers import configure_exception_handlers
from chat_service.app.lifespan import lifespan
from chat_service.app.middleware import configure_middleware
from chat_service.app.router import setup_routers
from chat_service.core.settings import get_settings
from chat_service.infra.database import get_sessionmaker
from chat_service.infra.events import get_event_broker

if TYPE_CHECKING:
    import strawberry
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from chat_service.infra.events import EventBroker


def create_app(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    broker: EventBroker | None = None,
    *,
    graphql_schema: strawberry.Schema | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        session_factory: Session factory to serve requests from. When omitted
            the process-wide engine built from DB_* settings is used and the
            lifespan owns its startup and disposal.
        broker: Event broker for subscriptions. Defaults to the process-wide
            broker (Redis-backed when REDIS_URL is set).
        graphql_schema: Schema override, mainly for tests.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()
    app_settings = settings.app

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        openapi_url=app_settings.get_openapi_url(),
        root_path=app_settings.root_path,
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    app.state.owns_engine = session_factory is None
    app.state.session_factory = session_factory or get_sessionmaker()
    app.state.broker = broker or get_event_broker()
    app.state.graphql_settings = settings.graphql

    # Exception handlers before middleware
    configure_exception_handlers(app)
    configure_middleware(app, app_settings)
    setup_routers(app, settings.graphql, graphql_schema)

    return app
