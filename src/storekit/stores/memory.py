"""MemoryStore — zero-config, sorted in-memory storage for development and testing."""

from __future__ import annotations

from bisect import bisect_left, insort
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from storekit._internal.streams import iterate
from storekit.stores.base import Entry, Store

if TYPE_CHECKING:
    from storekit._internal.streams import Stream

K = TypeVar("K")
V = TypeVar("V")

_MISSING = object()


@dataclass
class MemoryTable:
    """Sorted key index plus value map.  Shared by every store over one table."""

    keys: list[Any] = field(default_factory=list)
    data: dict[Any, Any] = field(default_factory=dict)

    def put(self, key: Any, value: Any) -> None:
        if key not in self.data:
            insort(self.keys, key)
        self.data[key] = value

    def remove(self, key: Any) -> None:
        if self.data.pop(key, _MISSING) is not _MISSING:
            del self.keys[bisect_left(self.keys, key)]

    def span(self, start: Any, end: Any) -> list[Any]:
        if not start < end:
            return []
        return self.keys[bisect_left(self.keys, start) : bisect_left(self.keys, end)]

    def clear(self) -> None:
        self.keys.clear()
        self.data.clear()


class MemoryStore(Store[K, V]):
    """In-memory store over a sorted key index.  Data is lost on process exit.

    * ``find_in_range``, ``keys()`` and ``values()`` iterate a snapshot
      taken when iteration starts; later writes are not visible to it.
    * ``invalidate()`` drops every entry; there is no source of truth to
      re-fetch from.

    Parameters:
        key_type:   Type of the keys (must be totally ordered).
        value_type: Type of the values.
        table:      Backing table; pass a shared one so several stores
                    observe each other's writes.
    """

    def __init__(
        self,
        key_type: type[Any],
        value_type: type[Any],
        table: MemoryTable | None = None,
    ) -> None:
        self.key_type = key_type
        self.value_type = value_type
        self._table = table if table is not None else MemoryTable()

    # ── writes ───────────────────────────────────────────────

    async def save(self, key: K, value: V) -> None:
        self._table.put(key, value)

    async def save_many(self, entries: Stream[Entry[K, V] | tuple[K, V]]) -> None:
        async for key, value in iterate(entries):
            self._table.put(key, value)

    async def delete(self, key: K) -> None:
        self._table.remove(key)

    async def delete_many(self, ids: Stream[K]) -> None:
        async for key in iterate(ids):
            self._table.remove(key)

    async def delete_in_range(self, start: K, end: K) -> None:
        for key in self._table.span(start, end):
            self._table.remove(key)

    async def delete_all(self) -> None:
        self._table.clear()

    async def invalidate(self) -> None:
        self._table.clear()

    # ── reads ────────────────────────────────────────────────

    async def find(self, key: K) -> V | None:
        return self._table.data.get(key)

    async def find_in_range(self, start: K, end: K) -> AsyncIterator[Entry[K, V]]:
        data = self._table.data
        snapshot = [Entry(key, data[key]) for key in self._table.span(start, end)]
        for entry in snapshot:
            yield entry

    async def count(self) -> int:
        return len(self._table.data)

    async def keys(self) -> AsyncIterator[K]:
        for key in list(self._table.keys):
            yield key

    async def values(self) -> AsyncIterator[V]:
        data = self._table.data
        for value in [data[key] for key in self._table.keys]:
            yield value
