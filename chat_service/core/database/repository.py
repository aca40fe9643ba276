"""Minimal generic repository for SQLAlchemy models.

Provides basic CRUD and keyset pagination with explicit session passing.
For anything else, use the session directly.

Example:
    class UserRepository(BaseRepository[User]):
        async def get_by_email(self, session: AsyncSession, email: str) -> User | None:
            return await self.get_by(session, User.email, email)

    user_repo = UserRepository(User)
    user = await user_repo.get_or_raise(session, user_id)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import Select, func, select

from chat_service.core.database.exceptions import NotFoundError
from chat_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

    from chat_service.core.pagination import Connection, SortDirection


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Generic repository for CRUD operations.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - get_by(session, attr, value) -> T | None
        - get_many(session, ids) -> Sequence[T]
        - list(session, limit, offset) -> Sequence[T]
        - create(session, instance) -> T
        - delete(session, instance) -> None
        - paginate_cursor(session, statement, ...) -> Connection[T]
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        self.model = model
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Get entity by primary key, optionally with loader options."""
        if options:
            stmt = select(self.model).where(self.model.id == id).options(*options)
            result = await session.execute(stmt)
            instance = result.scalar_one_or_none()
        else:
            instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T:
        """Get entity by primary key or raise NotFoundError."""
        instance = await self.get(session, id, options=options)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={"entity": self.model.__name__, "id": str(id), "operation": "db.get_or_raise"},
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def get_by(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        value: Any,
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Get entity by an arbitrary unique attribute."""
        stmt = select(self.model).where(attr == value)
        if options:
            stmt = stmt.options(*options)
        result = await session.execute(stmt)
        instance = result.scalar_one_or_none()

        self._lazy.debug(
            lambda: f"db.get_by: {self.model.__name__}.{attr.key}={value!r} -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_many(
        self,
        session: AsyncSession,
        ids: Iterable[Any],
        *,
        options: Iterable[Any] | None = None,
    ) -> Sequence[T]:
        """Get entities whose primary key is in ``ids`` (order not guaranteed)."""
        ids_list = list(ids)
        if not ids_list:
            return []
        stmt = select(self.model).where(self.model.id.in_(ids_list))
        if options:
            stmt = stmt.options(*options)
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.get_many: {self.model.__name__}({len(ids_list)} ids) -> {len(items)} found"
        )
        return items

    async def list(
        self,
        session: AsyncSession,
        *,
        limit: int = 100,
        offset: int = 0,
        options: Iterable[Any] | None = None,
    ) -> Sequence[T]:
        """List entities ordered by primary key."""
        stmt = select(self.model).order_by(self.model.id).limit(limit).offset(offset)
        if options:
            stmt = stmt.options(*options)
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.list: {self.model.__name__}(limit={limit}, offset={offset}) -> {len(items)} items"
        )
        return items

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Add, flush and refresh a new entity so generated fields are populated."""
        session.add(instance)
        await session.flush()
        await session.refresh(instance)

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def delete(self, session: AsyncSession, instance: T) -> None:
        """Delete an entity and flush."""
        entity_id = getattr(instance, "id", None)
        await session.delete(instance)
        await session.flush()

        self._logger.info(
            "Entity deleted",
            extra={"entity": self.model.__name__, "id": str(entity_id), "operation": "db.delete"},
        )

    async def paginate_cursor(
        self,
        session: AsyncSession,
        statement: Select[tuple[T]],
        *,
        first: int | None = None,
        after: str | None = None,
        last: int | None = None,
        before: str | None = None,
        order_by: Sequence[tuple[InstrumentedAttribute[Any], SortDirection]],
        include_total: bool = False,
    ) -> Connection[T]:
        """Execute a keyset-paginated query.

        ``first``/``after`` page forward through the natural order given by
        ``order_by``; ``last``/``before`` take the window immediately preceding
        ``before`` (or the end of the list). ``first`` wins when both sizes are
        given. Rows are always returned in natural order.

        Args:
            session: Database session
            statement: Select statement without ordering or limit
            first: Page size for forward pagination
            after: Cursor to start after
            last: Page size for backward pagination
            before: Cursor to end before
            order_by: (column, direction) pairs; must end with a unique column
            include_total: Also count all rows matched by ``statement``

        Raises:
            InvalidCursorError: If ``after``/``before`` is not a valid cursor.

        Example:
            connection = await repo.paginate_cursor(
                session,
                select(Message).where(Message.group_id == 3),
                first=5,
                order_by=[(Message.id, "desc")],
            )
            next_cursor = connection.page_info.end_cursor
        """
        from chat_service.core.pagination import (
            Connection,
            CursorCodec,
            CursorFilter,
            Edge,
            PageInfo,
        )

        if first is not None:
            limit, cursor, direction = first, after, "after"
        elif last is not None:
            limit, cursor, direction = last, before, "before"
        else:
            limit, cursor, direction = 50, after, "after"

        cursor_filter = CursorFilter(
            cursor=cursor,
            order_by=list(order_by),
            limit=limit,
            direction=direction,
        )
        result = await session.execute(cursor_filter.apply(statement))
        rows = list(result.scalars().all())

        has_more = len(rows) > limit
        rows = rows[:limit]
        if direction == "before":
            rows.reverse()

        total_count = None
        if include_total:
            count_stmt = select(func.count()).select_from(statement.subquery())
            total_count = (await session.execute(count_stmt)).scalar_one()

        sort_fields = cursor_filter.sort_fields
        edges: list[Edge[T]] = [
            Edge(node=row, cursor=CursorCodec.create_cursor(row, sort_fields)) for row in rows
        ]

        if direction == "after":
            has_next, has_prev = has_more, cursor is not None
        else:
            has_next, has_prev = cursor is not None, has_more

        page_info = PageInfo(
            has_previous_page=has_prev,
            has_next_page=has_next,
            start_cursor=edges[0].cursor if edges else None,
            end_cursor=edges[-1].cursor if edges else None,
            total_count=total_count,
        )

        self._lazy.debug(
            lambda: f"db.paginate_cursor: {self.model.__name__}({direction}, limit={limit}) -> {len(edges)} items, has_next={has_next}"
        )
        return Connection(edges=edges, page_info=page_info)


__all__ = ["BaseRepository"]
