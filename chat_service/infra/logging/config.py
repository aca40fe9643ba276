"""Logging configuration setup.

Builds a ``logging.config.dictConfig`` dictionary from LoggingSettings:
- all handlers live on the root logger and application loggers propagate
- ContextInjectingFilter is attached to every handler
- JSON Lines or plain text output, to stdout and optionally a rotating file
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chat_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

_TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Configure logging once across entrypoints (server, CLI).

    Args:
        log_settings: Logging settings. Loaded via get_logging_settings() if omitted.
        force: Reconfigure even if logging was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from chat_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    log_config = {**log_settings.to_logging_kwargs(), **configure_kwargs}
    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    console_enabled: bool = True,
    file_path: str | Path | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    include_context: bool = True,
    include_uvicorn: bool = True,
    capture_warnings: bool = True,
    service_name: str = "chat-service",
) -> dict[str, Any]:
    """Apply a dictConfig built from the given options.

    Returns:
        The dictConfig dictionary that was applied.
    """
    if capture_warnings:
        logging.captureWarnings(True)

    path = Path(file_path) if file_path else None
    if path:
        path.parent.mkdir(parents=True, exist_ok=True)

    config = build_logging_config(
        log_level=log_level,
        json_logs=json_logs,
        console_enabled=console_enabled,
        file_path=path,
        file_max_bytes=file_max_bytes,
        file_backup_count=file_backup_count,
        include_context=include_context,
        include_uvicorn=include_uvicorn,
        service_name=service_name,
    )
    logging.config.dictConfig(config)
    logger.debug("Logging configured", extra={"json_logs": json_logs, "level": log_level})
    return config


def build_logging_config(
    *,
    log_level: str,
    json_logs: bool,
    console_enabled: bool,
    file_path: Path | None,
    file_max_bytes: int,
    file_backup_count: int,
    include_context: bool,
    include_uvicorn: bool,
    service_name: str,
) -> dict[str, Any]:
    """Build the dictConfig dictionary without applying it."""
    formatter_name = "json" if json_logs else "text"
    formatters: dict[str, Any] = {
        "json": {
            "()": "chat_service.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name},
        },
        "text": {"format": _TEXT_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
    }

    filters: dict[str, Any] = {}
    handler_filters: list[str] = []
    if include_context:
        filters["context"] = {"()": "chat_service.infra.logging.context.ContextInjectingFilter"}
        handler_filters.append("context")

    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": formatter_name,
            "filters": handler_filters,
        }
    if file_path:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(file_path),
            "maxBytes": file_max_bytes,
            "backupCount": file_backup_count,
            "encoding": "utf-8",
            "formatter": formatter_name,
            "filters": handler_filters,
        }

    loggers: dict[str, Any] = {}
    if include_uvicorn:
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            loggers[name] = {"handlers": [], "propagate": True}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": loggers,
        "root": {"level": log_level.upper(), "handlers": list(handlers)},
    }
