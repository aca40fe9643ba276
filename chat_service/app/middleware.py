"""Middleware configuration for the FastAPI application."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
import uuid

from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import MutableHeaders

from chat_service.infra.logging import remove_from_log_context, set_log_context

if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

    from chat_service.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


class CorrelationIDMiddleware:
    """Pure ASGI middleware that tags each request with a correlation ID.

    The ID comes from the ``X-Correlation-ID`` header (or is generated), is
    stored on ``scope["state"]``, added to the logging context, and echoed
    in the response headers. WebSocket connections get the same treatment
    minus the response header.
    """

    header_name = "x-correlation-id"

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        raw = headers.get(self.header_name.encode())
        correlation_id = raw.decode("latin-1") if raw else uuid.uuid4().hex

        scope.setdefault("state", {})["correlation_id"] = correlation_id
        set_log_context(correlation_id=correlation_id)

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(self.header_name, correlation_id)
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            remove_from_log_context("correlation_id")


def configure_middleware(app: FastAPI, app_settings: AppSettings) -> None:
    """Install CORS and correlation ID middleware."""
    cors_origins = app_settings.cors_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )
    app.add_middleware(CorrelationIDMiddleware)

    logger.debug("Middleware configured", extra={"cors_origins": cors_origins})
