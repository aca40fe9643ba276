"""FastAPI dependencies for route handlers.

Usage:
    from chat_service.core.dependencies import get_db_session, get_broker
"""

from chat_service.core.dependencies.database import get_db_session, get_session_factory
from chat_service.core.dependencies.events import get_broker

__all__ = ["get_broker", "get_db_session", "get_session_factory"]
