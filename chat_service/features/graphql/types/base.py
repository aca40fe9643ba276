"""Base GraphQL types for pagination.

Provides the Relay PageInfo type that mirrors
chat_service.core.pagination.schemas.PageInfo as a Strawberry type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from chat_service.core.pagination import PageInfo


@strawberry.type(name="PageInfo", description="Pagination metadata following GraphQL Relay specification")
class PageInfoType:
    """GraphQL Relay PageInfo for cursor-based pagination."""

    has_next_page: bool = strawberry.field(description="Whether more items exist after this page")
    has_previous_page: bool = strawberry.field(description="Whether items exist before this page")
    start_cursor: str | None = strawberry.field(
        default=None,
        description="Cursor of the first item",
    )
    end_cursor: str | None = strawberry.field(
        default=None,
        description="Cursor of the last item",
    )

    @classmethod
    def from_page_info(cls, page_info: PageInfo) -> PageInfoType:
        """Convert repository pagination metadata."""
        return cls(
            has_next_page=page_info.has_next_page,
            has_previous_page=page_info.has_previous_page,
            start_cursor=page_info.start_cursor,
            end_cursor=page_info.end_cursor,
        )


__all__ = ["PageInfoType"]
