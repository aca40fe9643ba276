"""Application lifespan management.

Startup Order:
1. Logging
2. Database (tables created only when DB_CREATE_TABLES_ON_STARTUP is set)
3. Event broker (Redis pub/sub listener when REDIS_URL is configured)

Shutdown Order: Reverse of startup
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from chat_service.core.settings import get_app_settings, get_db_settings
from chat_service.infra.database import close_database, init_database
from chat_service.infra.logging.config import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop the services the application owns.

    The engine is only initialized and disposed when ``create_app`` built it
    from settings; an injected session factory belongs to the caller.
    """
    setup_logging()
    app_settings = get_app_settings()
    owns_engine: bool = app.state.owns_engine

    logger.info(
        "Application starting",
        extra={
            "service": app_settings.service_name,
            "version": app_settings.version,
            "environment": app_settings.environment,
        },
    )

    if owns_engine and get_db_settings().create_tables_on_startup:
        await init_database()

    broker = app.state.broker
    await broker.start()
    logger.info("Event broker started", extra={"distributed": broker.is_distributed})

    try:
        yield
    finally:
        await broker.stop()
        if owns_engine:
            await close_database()
        logger.info("Application stopped")


__all__ = ["lifespan"]
