"""Store contracts — ordered key-value persistence over async results."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any, Generic, NamedTuple, TypeVar

if TYPE_CHECKING:
    from storekit._internal.streams import Stream

K = TypeVar("K")
V = TypeVar("V")


class Entry(NamedTuple, Generic[K, V]):
    """A single key/value pair."""

    key: K
    value: V


class LongEntry(NamedTuple, Generic[V]):
    """A key/value pair whose key is an integer."""

    key: int
    value: V


class ReadOnlyStore(ABC, Generic[K, V]):
    """Read half of the generic store contract.

    Keys must be totally ordered; range queries are half-open
    (``start <= key < end``) and yield entries in ascending key order.

    Attributes:
        key_type:   Type of the keys this store was requested with.
        value_type: Type of the values this store was requested with.
    """

    key_type: type[Any]
    value_type: type[Any]

    @abstractmethod
    async def find(self, key: K) -> V | None:
        """Return the value for *key*, or ``None`` if it is absent.

        A stored ``None`` value reads back the same as a missing key;
        backends do not distinguish the two.  Use :meth:`keys` or
        :meth:`count` when presence matters.
        """
        ...

    @abstractmethod
    def find_in_range(self, start: K, end: K) -> AsyncIterator[Entry[K, V]]:
        """Yield entries with ``start <= key < end`` in ascending key order.

        Yields nothing when ``start >= end``.
        """
        ...

    @abstractmethod
    async def count(self) -> int:
        """Return the number of entries at the time of the request."""
        ...

    @abstractmethod
    def keys(self) -> AsyncIterator[K]:
        """Yield every key.  Order is backend-defined."""
        ...

    @abstractmethod
    def values(self) -> AsyncIterator[V]:
        """Yield every value.  Order is backend-defined."""
        ...


class Store(ReadOnlyStore[K, V]):
    """Abstract base for every generic key-value store.

    Concrete backends document how concurrent mutation is visible to
    ``keys()`` / ``values()`` and what reads return after ``invalidate()``.
    """

    @abstractmethod
    async def save(self, key: K, value: V) -> None:
        """Create or overwrite a single entry."""
        ...

    @abstractmethod
    async def save_many(self, entries: Stream[Entry[K, V] | tuple[K, V]]) -> None:
        """Apply *entries* in receipt order.  Later duplicates win."""
        ...

    @abstractmethod
    async def delete(self, key: K) -> None:
        """Delete one entry.  No-op if the key does not exist."""
        ...

    @abstractmethod
    async def delete_many(self, ids: Stream[K]) -> None:
        """Delete every key produced by *ids*."""
        ...

    @abstractmethod
    async def delete_in_range(self, start: K, end: K) -> None:
        """Delete entries with ``start <= key < end``."""
        ...

    @abstractmethod
    async def delete_all(self) -> None:
        """Delete every entry."""
        ...

    @abstractmethod
    async def invalidate(self) -> None:
        """Stop guaranteeing that previously read or cached data is reliable."""
        ...


class ReadOnlyLongObjStore(ABC, Generic[V]):
    """Read half of the integer-keyed store contract."""

    key_type: type[int]
    value_type: type[Any]

    @abstractmethod
    async def find(self, key: int) -> V | None: ...

    @abstractmethod
    def find_in_range(self, start: int, end: int) -> AsyncIterator[LongEntry[V]]: ...

    @abstractmethod
    async def count(self) -> int: ...

    @abstractmethod
    def keys(self) -> AsyncIterator[int]: ...

    @abstractmethod
    def values(self) -> AsyncIterator[V]: ...


class LongObjStore(ReadOnlyLongObjStore[V]):
    """Generic store contract specialized to ``int`` keys.

    Backends that can avoid the generic path implement this directly;
    everything else is adapted by
    :class:`~storekit.stores.forwarding.ForwardingStore`.
    """

    @abstractmethod
    async def save_with_long(self, key: int, value: V) -> None: ...

    @abstractmethod
    async def save_many_with_long(self, entries: Stream[LongEntry[V] | tuple[int, V]]) -> None: ...

    @abstractmethod
    async def delete(self, key: int) -> None: ...

    @abstractmethod
    async def delete_many(self, ids: Stream[int]) -> None: ...

    @abstractmethod
    async def delete_in_range(self, start: int, end: int) -> None: ...

    @abstractmethod
    async def delete_all(self) -> None: ...

    @abstractmethod
    async def invalidate(self) -> None: ...
