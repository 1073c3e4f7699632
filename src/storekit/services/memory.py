"""MemoryStoreService — provides dict-backed stores that live as long as the service."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from storekit.exceptions import CapabilityMismatchError, ServiceDisposedError
from storekit.services.base import ORDER_NEUTRAL, StoreService
from storekit.stores.memory import MemoryStore, MemoryTable

if TYPE_CHECKING:
    from storekit.context import StoreContext
    from storekit.stores.base import LongObjStore

logger = logging.getLogger(__name__)


class MemoryStoreService(StoreService):
    """Generic-only in-memory backend.

    Stores requested with the same (key type, value type) pair share one
    :class:`MemoryTable`, so they observe each other's writes.  Disposing
    the service drops every table.

    Integer-keyed stores are not offered natively; register the service
    through :class:`~storekit.services.forwarding.ForwardingStoreService`
    (or let the registry synthesize one) to get them.

    Parameters:
        order: Selection priority (lower wins).
    """

    _service_type = "memory"

    def __init__(self, *, order: int = ORDER_NEUTRAL) -> None:
        super().__init__(order=order)
        self._tables: dict[tuple[type[Any], type[Any]], MemoryTable] = {}
        self._lock = threading.Lock()
        self._context: StoreContext | None = None
        self._disposed = False

    def has_generic_stores(self) -> bool:
        return True

    def provide_generic_store(self, key_type: type[Any], value_type: type[Any]) -> MemoryStore[Any, Any]:
        with self._lock:
            if self._disposed:
                raise ServiceDisposedError(self)
            table = self._tables.get((key_type, value_type))
            if table is None:
                table = self._tables[(key_type, value_type)] = MemoryTable()
                logger.debug(
                    "Created memory table for (%s, %s)",
                    key_type.__name__,
                    getattr(value_type, "__name__", value_type),
                )
        return MemoryStore(key_type, value_type, table)

    def has_long_obj_stores(self) -> bool:
        return False

    def provide_long_obj_store(self, value_type: type[Any]) -> LongObjStore[Any]:
        raise CapabilityMismatchError(self, "long_obj")

    @property
    def context(self) -> StoreContext | None:
        return self._context

    def init(self, context: StoreContext) -> None:
        self._context = context

    async def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            count = len(self._tables)
            for table in self._tables.values():
                table.clear()
            self._tables.clear()
        logger.info("Disposed memory store service (%d tables dropped)", count)
