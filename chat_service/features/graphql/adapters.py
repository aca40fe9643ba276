"""Resolver adapters between GraphQL input types and repository arguments.

Repositories keep flat keyword signatures (``first=, after=, last=, before=``);
the adapter is the only place that knows about ``ConnectionInput``.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

from chat_service.core.exceptions import ValidationException

if TYPE_CHECKING:
    from chat_service.features.graphql.types.pagination import ConnectionInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConnectionArgs:
    """Flat connection arguments, ready to pass to a repository."""

    first: int | None = None
    after: str | None = None
    last: int | None = None
    before: str | None = None

    def as_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``paginate_*`` repository methods."""
        return {
            "first": self.first,
            "after": self.after,
            "last": self.last,
            "before": self.before,
        }


def unpack_connection_input(
    connection: ConnectionInput | None,
    *,
    default_first: int,
    max_page_size: int | None = None,
) -> ConnectionArgs:
    """Unpack a ConnectionInput into flat connection arguments.

    A missing object, an empty object, and an object with neither ``first``
    nor ``last`` all get the default page size. That default pages forward
    as ``first``, or backward as ``last`` when only ``before`` is given.
    Sizes above ``max_page_size`` are clamped.

    Args:
        connection: The argument as received by the resolver, possibly None
        default_first: Page size used when no size is requested
        max_page_size: Upper bound for ``first``/``last``

    Raises:
        ValidationException: If ``first`` or ``last`` is negative.

    Example:
        args = unpack_connection_input(message_connection, default_first=1)
        page = await repo.paginate_for_group(session, group_id, **args.as_kwargs())
    """
    if connection is None:
        return ConnectionArgs(first=default_first)

    first, after, last, before = (
        connection.first,
        connection.after,
        connection.last,
        connection.before,
    )

    for name, size in (("first", first), ("last", last)):
        if size is not None and size < 0:
            raise ValidationException(
                detail=f"ConnectionInput.{name} must be non-negative, got {size}",
                extra={"field": name},
            )

    if first is None and last is None:
        if before is not None and after is None:
            last = default_first
        else:
            first = default_first

    if max_page_size is not None:
        if first is not None and first > max_page_size:
            logger.debug("Clamping first=%s to %s", first, max_page_size)
            first = max_page_size
        if last is not None and last > max_page_size:
            logger.debug("Clamping last=%s to %s", last, max_page_size)
            last = max_page_size

    return ConnectionArgs(first=first, after=after, last=last, before=before)


__all__ = ["ConnectionArgs", "unpack_connection_input"]
