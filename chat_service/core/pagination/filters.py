"""Keyset cursor filter for SQLAlchemy queries.

Instead of OFFSET, the filter seeks past the cursor row with a compound
WHERE clause. For ORDER BY created_at DESC, id DESC and a cursor at
(t1, id1), "after" becomes:

    WHERE (created_at < t1) OR (created_at = t1 AND id < id1)
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import Select, and_, or_

from chat_service.core.database.exceptions import InvalidCursorError
from chat_service.core.database.filters import StatementFilter
from chat_service.core.pagination.cursor import CursorCodec, CursorData

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute

SortDirection = Literal["asc", "desc"]


class CursorFilter(StatementFilter):
    """Apply keyset pagination to a statement.

    The filter adds ordering, the seek condition (when a cursor is given)
    and ``LIMIT limit + 1`` so the caller can tell whether another page exists.
    For ``direction="before"`` the ordering is reversed; callers reverse the
    fetched rows back into natural order.

    Raises:
        InvalidCursorError: If the cursor cannot be decoded or lacks a sort key.
    """

    def __init__(
        self,
        cursor: str | None,
        order_by: list[tuple[InstrumentedAttribute[Any], SortDirection]],
        *,
        limit: int,
        direction: Literal["after", "before"] = "after",
    ) -> None:
        self.cursor = cursor
        self.order_by = order_by
        self.limit = limit
        self.direction = direction

        self._cursor_data: CursorData | None = None
        if cursor:
            try:
                self._cursor_data = CursorCodec.decode(cursor)
            except ValueError as e:
                raise InvalidCursorError(cursor, "cannot be decoded") from e
            missing = [f for f in self.sort_fields if f not in self._cursor_data.values]
            if missing:
                raise InvalidCursorError(cursor, f"missing sort keys {missing}")

    @property
    def sort_fields(self) -> list[str]:
        """Names of the sort columns, in order."""
        return [col.key for col, _ in self.order_by]

    def apply(self, statement: Select[Any]) -> Select[Any]:
        statement = self._apply_ordering(statement)
        if self._cursor_data:
            statement = self._apply_seek_condition(statement, self._cursor_data)
        return statement.limit(self.limit + 1)

    def _apply_ordering(self, statement: Select[Any]) -> Select[Any]:
        for column, direction in self.order_by:
            effective = direction
            if self.direction == "before":
                effective = "asc" if direction == "desc" else "desc"
            statement = statement.order_by(column.desc() if effective == "desc" else column.asc())
        return statement

    def _apply_seek_condition(self, statement: Select[Any], data: CursorData) -> Select[Any]:
        or_conditions = []

        for i, (column, direction) in enumerate(self.order_by):
            value = self._convert_cursor_value(column, data.values[column.key])

            eq_conditions = [
                prev_column == self._convert_cursor_value(prev_column, data.values[prev_column.key])
                for prev_column, _ in self.order_by[:i]
            ]

            # "after" on a descending key means smaller values
            descending_seek = (direction == "desc") == (self.direction == "after")
            compare = column < value if descending_seek else column > value

            or_conditions.append(and_(*eq_conditions, compare) if eq_conditions else compare)

        return statement.where(or_(*or_conditions))

    @staticmethod
    def _convert_cursor_value(column: InstrumentedAttribute[Any], value: Any) -> Any:
        column_type = getattr(column.type, "impl", column.type)
        if type(column_type).__name__ in ("DateTime", "TIMESTAMP") and isinstance(value, str):
            return datetime.fromisoformat(value)
        return value


__all__ = ["CursorFilter", "SortDirection"]
