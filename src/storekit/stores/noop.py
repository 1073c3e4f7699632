"""No-op stores — accept every write, remember nothing."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any, TypeVar

from storekit._internal.streams import empty
from storekit.stores.base import Entry, LongEntry, LongObjStore, Store

if TYPE_CHECKING:
    from storekit._internal.streams import Stream

K = TypeVar("K")
V = TypeVar("V")


class NoOpStore(Store[K, V]):
    """Generic store that persists nothing.

    Writes complete immediately, reads are always empty.  Streams passed
    to ``save_many`` / ``delete_many`` are not consumed.
    """

    def __init__(self, key_type: type[Any] = object, value_type: type[Any] = object) -> None:
        self.key_type = key_type
        self.value_type = value_type

    async def save(self, key: K, value: V) -> None:
        return None

    async def save_many(self, entries: Stream[Entry[K, V] | tuple[K, V]]) -> None:
        return None

    async def find(self, key: K) -> V | None:
        return None

    def find_in_range(self, start: K, end: K) -> AsyncIterator[Entry[K, V]]:
        return empty()

    async def count(self) -> int:
        return 0

    async def delete(self, key: K) -> None:
        return None

    async def delete_many(self, ids: Stream[K]) -> None:
        return None

    async def delete_in_range(self, start: K, end: K) -> None:
        return None

    async def delete_all(self) -> None:
        return None

    def keys(self) -> AsyncIterator[K]:
        return empty()

    def values(self) -> AsyncIterator[V]:
        return empty()

    async def invalidate(self) -> None:
        return None


class NoOpLongObjStore(LongObjStore[V]):
    """Integer-keyed counterpart of :class:`NoOpStore`."""

    key_type = int

    def __init__(self, value_type: type[Any] = object) -> None:
        self.value_type = value_type

    async def save_with_long(self, key: int, value: V) -> None:
        return None

    async def save_many_with_long(self, entries: Stream[LongEntry[V] | tuple[int, V]]) -> None:
        return None

    async def find(self, key: int) -> V | None:
        return None

    def find_in_range(self, start: int, end: int) -> AsyncIterator[LongEntry[V]]:
        return empty()

    async def count(self) -> int:
        return 0

    async def delete(self, key: int) -> None:
        return None

    async def delete_many(self, ids: Stream[int]) -> None:
        return None

    async def delete_in_range(self, start: int, end: int) -> None:
        return None

    async def delete_all(self) -> None:
        return None

    def keys(self) -> AsyncIterator[int]:
        return empty()

    def values(self) -> AsyncIterator[V]:
        return empty()

    async def invalidate(self) -> None:
        return None
