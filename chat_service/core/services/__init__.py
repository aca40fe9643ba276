"""Service layer base classes."""

from chat_service.core.services.base import BaseService

__all__ = ["BaseService"]
