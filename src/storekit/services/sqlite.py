"""SQLiteStoreService — provides tables of one SQLite database as stores."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING, Any

import aiosqlite

from storekit.exceptions import (
    CapabilityMismatchError,
    DisposalError,
    ServiceDisposedError,
)
from storekit.services.base import ORDER_NEUTRAL, StoreService
from storekit.stores.sqlite import SQLiteStore

if TYPE_CHECKING:
    from storekit.context import StoreContext
    from storekit.stores.base import LongObjStore

logger = logging.getLogger(__name__)


class SQLiteStoreService(StoreService):
    """Generic-only backend over a single SQLite file.

    One connection is shared by every store the service manufactures and
    is opened lazily on first use.  Writes through it are serialized so
    each store commits or rolls back only its own transaction.  Each
    (key type, value type) pair maps to its own table, so stores requested
    with the same types observe each other's writes.

    Parameters:
        path:  Path to the SQLite database file.  Use ``":memory:"`` for an
               in-memory database (useful for testing).
        order: Selection priority (lower wins).
    """

    _service_type = "sqlite"

    def __init__(self, path: str = "storekit.db", *, order: int = ORDER_NEUTRAL) -> None:
        super().__init__(order=order)
        self._path = path
        self._db: aiosqlite.Connection | None = None
        self._connect_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._state_lock = threading.Lock()
        self._context: StoreContext | None = None
        self._disposed = False

    @property
    def path(self) -> str:
        return self._path

    @property
    def context(self) -> StoreContext | None:
        return self._context

    async def _connect(self) -> aiosqlite.Connection:
        if self._db is not None:
            return self._db
        async with self._connect_lock:
            if self._disposed:
                raise ServiceDisposedError(self)
            if self._db is None:
                logger.info("Opening SQLite database %s", self._path)
                self._db = await aiosqlite.connect(self._path)
        return self._db

    def has_generic_stores(self) -> bool:
        return True

    def provide_generic_store(self, key_type: type[Any], value_type: type[Any]) -> SQLiteStore[Any, Any]:
        with self._state_lock:
            if self._disposed:
                raise ServiceDisposedError(self)
        return SQLiteStore(self._connect, key_type, value_type, self._write_lock)

    def has_long_obj_stores(self) -> bool:
        return False

    def provide_long_obj_store(self, value_type: type[Any]) -> LongObjStore[Any]:
        raise CapabilityMismatchError(self, "long_obj")

    def init(self, context: StoreContext) -> None:
        self._context = context

    async def dispose(self) -> None:
        with self._state_lock:
            if self._disposed:
                return
            self._disposed = True
        async with self._connect_lock:
            db, self._db = self._db, None
        if db is None:
            return
        try:
            await db.close()
        except Exception as e:
            raise DisposalError([e]) from e
        logger.info("Closed SQLite database %s", self._path)
