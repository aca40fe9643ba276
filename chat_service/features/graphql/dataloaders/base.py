"""Shared plumbing for request-scoped DataLoaders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

from strawberry.dataloader import DataLoader

if TYPE_CHECKING:
    import asyncio

    from sqlalchemy.ext.asyncio import AsyncSession


K = TypeVar("K")
V = TypeVar("V")


class SessionDataLoader(ABC, Generic[K, V]):
    """DataLoader bound to one AsyncSession.

    Sibling GraphQL fields resolve concurrently, but an AsyncSession must
    not run two statements at once, so every batch holds the request's
    session lock while it queries.
    """

    def __init__(self, session: AsyncSession, lock: asyncio.Lock) -> None:
        self._session = session
        self._lock = lock
        self._loader: DataLoader[K, V] = DataLoader(load_fn=self._batch_load)

    async def _batch_load(self, keys: list[K]) -> list[V]:
        if not keys:
            return []
        async with self._lock:
            return await self.fetch(keys)

    @abstractmethod
    async def fetch(self, keys: list[K]) -> list[V]:
        """Load values for ``keys``; must return one value per key, in order."""

    async def load(self, key: K) -> V:
        """Load one value, batched with other loads in the same tick."""
        return await self._loader.load(key)

    async def load_many(self, keys: list[K]) -> list[V]:
        """Load several values."""
        return await self._loader.load_many(keys)

    def prime(self, key: K, value: V) -> None:
        """Seed the cache with an already-loaded value."""
        self._loader.prime(key, value)
