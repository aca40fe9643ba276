"""Cursor-based (keyset) pagination.

Repositories build a statement, hand it to ``BaseRepository.paginate_cursor``
and get back a ``Connection`` whose cursors encode the sort key values of
each row. Results stay stable when rows are inserted between page fetches.
"""

from chat_service.core.pagination.cursor import CursorCodec, CursorData
from chat_service.core.pagination.filters import CursorFilter, SortDirection
from chat_service.core.pagination.schemas import Connection, Edge, PageInfo

__all__ = [
    "Connection",
    "CursorCodec",
    "CursorData",
    "CursorFilter",
    "Edge",
    "PageInfo",
    "SortDirection",
]
