"""Pagination input shared by every connection field.

``ConnectionInput`` bundles the four Relay connection arguments into one
structured argument. Each field keeps the name and type it had as a flat
argument, and every field is optional.
"""

from __future__ import annotations

import strawberry

__all__ = ["ConnectionInput"]


@strawberry.input(description="Relay connection arguments: page forward with first/after or backward with last/before")
class ConnectionInput:
    """Input parameters for cursor-based pagination.

    Resolvers never read this directly; ``unpack_connection_input`` turns it
    into the flat arguments the repositories take.
    """

    first: int | None = strawberry.field(
        default=None,
        description="Number of items to return after the cursor",
    )

    after: str | None = strawberry.field(
        default=None,
        description="Cursor to start after (exclusive)",
    )

    last: int | None = strawberry.field(
        default=None,
        description="Number of items to return before the cursor",
    )

    before: str | None = strawberry.field(
        default=None,
        description="Cursor to end before (exclusive)",
    )
