"""Base service class for business logic."""

from __future__ import annotations

from chat_service.infra.logging import get_lazy_logger, get_logger


class BaseService:
    """Base class for services.

    Loggers:
        - self.logger: INFO/WARNING/ERROR business events, bound to the service name
        - self._lazy: DEBUG output, evaluated only when enabled
    """

    def __init__(self) -> None:
        class_name = self.__class__.__name__
        self.logger = get_logger(f"service.{class_name}", component=class_name)
        self._lazy = get_lazy_logger(f"service.{class_name}")
