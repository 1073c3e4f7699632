"""ForwardingStore — exposes a generic ``Store[int, V]`` as a ``LongObjStore[V]``."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, TypeVar

from storekit._internal.streams import iterate
from storekit.stores.base import Entry, LongEntry, LongObjStore

if TYPE_CHECKING:
    from storekit._internal.streams import Stream
    from storekit.stores.base import Store

V = TypeVar("V")


class ForwardingStore(LongObjStore[V]):
    """Translates every integer-keyed call 1:1 onto the wrapped generic store.

    No caching, batching or error handling happens here: results and
    failures come straight from the wrapped store.

    Parameters:
        original: Generic store whose keys are ``int``.
    """

    key_type = int

    def __init__(self, original: Store[int, V]) -> None:
        self._original = original
        self.value_type = original.value_type

    @property
    def original(self) -> Store[int, V]:
        """The generic store being forwarded to."""
        return self._original

    # ── writes ───────────────────────────────────────────────

    async def save_with_long(self, key: int, value: V) -> None:
        await self._original.save(key, value)

    async def save_many_with_long(self, entries: Stream[LongEntry[V] | tuple[int, V]]) -> None:
        await self._original.save_many(_to_entries(entries))

    async def delete(self, key: int) -> None:
        await self._original.delete(key)

    async def delete_many(self, ids: Stream[int]) -> None:
        await self._original.delete_many(ids)

    async def delete_in_range(self, start: int, end: int) -> None:
        await self._original.delete_in_range(start, end)

    async def delete_all(self) -> None:
        await self._original.delete_all()

    async def invalidate(self) -> None:
        await self._original.invalidate()

    # ── reads ────────────────────────────────────────────────

    async def find(self, key: int) -> V | None:
        return await self._original.find(key)

    async def find_in_range(self, start: int, end: int) -> AsyncIterator[LongEntry[V]]:
        async for key, value in self._original.find_in_range(start, end):
            yield LongEntry(key, value)

    async def count(self) -> int:
        return await self._original.count()

    def keys(self) -> AsyncIterator[int]:
        return self._original.keys()

    def values(self) -> AsyncIterator[V]:
        return self._original.values()

    def __repr__(self) -> str:
        return f"ForwardingStore({self._original!r})"


async def _to_entries(
    entries: Stream[LongEntry[V] | tuple[int, V]],
) -> AsyncIterator[Entry[int, V]]:
    async for key, value in iterate(entries):
        yield Entry(key, value)
