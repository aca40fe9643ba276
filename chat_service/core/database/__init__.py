"""Core database package: declarative base, mixins, filters and repository.

Base Classes and Mixins:
    - Base: Declarative base with constraint naming convention
    - IntegerPKMixin: Auto-increment integer primary key
    - TimestampMixin: created_at, updated_at tracking
    - TimestampedBase: Integer PK + timestamps

Repository:
    - BaseRepository[T]: CRUD and keyset pagination with explicit session passing

Query Filters:
    - CollectionFilter: WHERE ... IN clauses
    - EqualsFilter: optional equality

Exceptions:
    - RepositoryError, NotFoundError, InvalidCursorError
"""

from chat_service.core.database.base import (
    NAMING_CONVENTION,
    Base,
    IntegerPKMixin,
    TimestampedBase,
    TimestampMixin,
)
from chat_service.core.database.exceptions import (
    InvalidCursorError,
    NotFoundError,
    RepositoryError,
)
from chat_service.core.database.filters import (
    CollectionFilter,
    EqualsFilter,
    StatementFilter,
)
from chat_service.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "CollectionFilter",
    "EqualsFilter",
    "IntegerPKMixin",
    "InvalidCursorError",
    "NotFoundError",
    "RepositoryError",
    "StatementFilter",
    "TimestampMixin",
    "TimestampedBase",
]
