"""Query filtering utilities for SQLAlchemy.

Filters work directly on SQLAlchemy statements without hiding the query:

    stmt = select(Message)
    stmt = CollectionFilter(Message.group_id, [1, 2]).apply(stmt)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, false

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute


class StatementFilter(ABC):
    """Base class for statement filters."""

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Return a modified copy of ``statement``."""
        ...


class CollectionFilter(StatementFilter):
    """Filter by collection (WHERE ... IN).

    An empty collection matches nothing, and matches everything when inverted.
    """

    def __init__(
        self,
        field: InstrumentedAttribute[Any],
        values: Sequence[Any],
        *,
        invert: bool = False,
    ):
        self.field = field
        self.values = list(values)
        self.invert = invert

    def apply(self, statement: Select[Any]) -> Select[Any]:
        if not self.values:
            return statement.where(false()) if not self.invert else statement

        if self.invert:
            return statement.where(self.field.notin_(self.values))
        return statement.where(self.field.in_(self.values))


class EqualsFilter(StatementFilter):
    """Filter by equality, skipped when the value is None."""

    def __init__(self, field: InstrumentedAttribute[Any], value: Any):
        self.field = field
        self.value = value

    def apply(self, statement: Select[Any]) -> Select[Any]:
        if self.value is None:
            return statement
        return statement.where(self.field == self.value)


__all__ = ["CollectionFilter", "EqualsFilter", "StatementFilter"]
