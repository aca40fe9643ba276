"""Logging infrastructure.

Structured JSON Lines logging with automatic context injection:

    import logging
    from chat_service.infra.logging import set_log_context

    logger = logging.getLogger(__name__)

    set_log_context(request_id="abc-123", operation="GetGroup")
    logger.info("Resolving group")  # includes request_id and operation
"""

from chat_service.infra.logging.config import (
    build_logging_config,
    configure_logging,
    setup_logging,
)
from chat_service.infra.logging.context import (
    ContextBoundLogger,
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    get_logger,
    remove_from_log_context,
    set_log_context,
)
from chat_service.infra.logging.formatters import JSONFormatter
from chat_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextBoundLogger",
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "build_logging_config",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "get_logger",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
]
