"""Store services — backend factories and the decorators around them."""

from storekit.services.base import (
    ORDER_HIGHEST,
    ORDER_LOWEST,
    ORDER_NEUTRAL,
    StoreService,
)
from storekit.services.forwarding import ForwardingStoreService
from storekit.services.memory import MemoryStoreService
from storekit.services.noop import NoOpStoreService
from storekit.services.sqlite import SQLiteStoreService

__all__ = [
    "ORDER_HIGHEST",
    "ORDER_LOWEST",
    "ORDER_NEUTRAL",
    "ForwardingStoreService",
    "MemoryStoreService",
    "NoOpStoreService",
    "SQLiteStoreService",
    "StoreService",
]
