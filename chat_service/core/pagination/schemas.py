"""Connection schemas for cursor-based pagination.

Repositories return ``Connection[T]`` with ORM instances as nodes; the
GraphQL layer converts them into its own edge and page-info types.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageInfo(BaseModel):
    """Relay-style pagination metadata.

    Attributes:
        has_previous_page: Whether there are items before the current page
        has_next_page: Whether there are items after the current page
        start_cursor: Cursor of the first item in this page
        end_cursor: Cursor of the last item in this page
        total_count: Total number of items (only when requested)
    """

    has_previous_page: bool = Field(description="Whether previous items exist")
    has_next_page: bool = Field(description="Whether more items exist")
    start_cursor: str | None = Field(default=None, description="Cursor of the first item")
    end_cursor: str | None = Field(default=None, description="Cursor of the last item")
    total_count: int | None = Field(default=None, description="Total count (optional)")


class Edge(BaseModel, Generic[T]):
    """A node together with the cursor that addresses it."""

    node: T = Field(description="The data item")
    cursor: str = Field(description="Cursor for this item")


class Connection(BaseModel, Generic[T]):
    """One page of a cursor-paginated result.

    Client navigation:
        first page:     first=10
        next page:      first=10, after=<page_info.end_cursor>
        previous page:  last=10, before=<page_info.start_cursor>
    """

    edges: list[Edge[T]] = Field(default_factory=list)
    page_info: PageInfo

    @property
    def nodes(self) -> list[T]:
        """Nodes without edge wrappers."""
        return [edge.node for edge in self.edges]


__all__ = ["Connection", "Edge", "PageInfo"]
