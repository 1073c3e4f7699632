"""Store contracts and the bundled store implementations."""

from storekit.stores.base import (
    Entry,
    LongEntry,
    LongObjStore,
    ReadOnlyLongObjStore,
    ReadOnlyStore,
    Store,
)
from storekit.stores.forwarding import ForwardingStore
from storekit.stores.memory import MemoryStore, MemoryTable
from storekit.stores.noop import NoOpLongObjStore, NoOpStore
from storekit.stores.sqlite import SQLiteStore

__all__ = [
    "Entry",
    "ForwardingStore",
    "LongEntry",
    "LongObjStore",
    "MemoryStore",
    "MemoryTable",
    "NoOpLongObjStore",
    "NoOpStore",
    "ReadOnlyLongObjStore",
    "ReadOnlyStore",
    "SQLiteStore",
    "Store",
]
