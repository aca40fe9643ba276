"""Health check API endpoints.

- /health/live: Is the process alive?
- /health: Service status with database and event broker checks
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chat_service.core.dependencies import get_db_session
from chat_service.core.exceptions import ServiceUnavailableException
from chat_service.core.settings import get_app_settings
from chat_service.features.health.schemas import HealthResponse, LivenessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", response_model=LivenessResponse, summary="Liveness probe")
async def liveness() -> LivenessResponse:
    return LivenessResponse()


@router.get("", response_model=HealthResponse, summary="Health check")
async def health_check(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> HealthResponse:
    """Report service health.

    Raises:
        ServiceUnavailableException: If the database cannot be reached.
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        raise ServiceUnavailableException(
            detail="Database is unavailable",
            extra={"checks": {"database": False}},
        ) from e

    broker = request.app.state.broker
    checks = {"database": True, "event_broker": broker is not None}
    app_settings = get_app_settings()
    return HealthResponse(
        status="healthy" if all(checks.values()) else "degraded",
        service=app_settings.service_name,
        version=app_settings.version,
        checks=checks,
    )
