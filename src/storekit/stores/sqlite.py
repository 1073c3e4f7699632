"""SQLiteStore — durable, single-file storage backend using aiosqlite."""

from __future__ import annotations

import asyncio
import hashlib
import re
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, TypeVar, get_args

import aiosqlite
from pydantic import TypeAdapter

from storekit._internal.streams import iterate
from storekit.exceptions import StoreTypeMismatchError
from storekit.stores.base import Entry, Store

if TYPE_CHECKING:
    from storekit._internal.streams import Stream

K = TypeVar("K")
V = TypeVar("V")

# Key types SQLite can order natively, with their column affinity.
KEY_AFFINITY: dict[type[Any], str] = {
    int: "INTEGER",
    str: "TEXT",
    float: "REAL",
    bytes: "BLOB",
}

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS "{table}" (
    key   {affinity} NOT NULL PRIMARY KEY,
    value BLOB NOT NULL
)
"""


def _type_label(tp: Any) -> str:
    if get_args(tp):
        return str(tp)
    module = getattr(tp, "__module__", "builtins")
    qualname = getattr(tp, "__qualname__", str(tp))
    return qualname if module == "builtins" else f"{module}.{qualname}"


def table_name(key_type: type[Any], value_type: type[Any]) -> str:
    """Return the table holding entries for a (key type, value type) pair.

    The name is a readable, sanitized prefix followed by a short digest of
    the fully qualified type names, so distinct types never share a table
    even when their sanitized names coincide.
    """
    label = f"{_type_label(key_type)}|{_type_label(value_type)}"
    digest = hashlib.sha1(label.encode()).hexdigest()[:10]
    readable = f"store_{key_type.__name__}_{getattr(value_type, '__name__', 'value')}"
    return f"{re.sub(r'[^0-9A-Za-z_]', '_', readable).lower()}_{digest}"


class SQLiteStore(Store[K, V]):
    """Persistent store backed by one table of a SQLite database.

    Values are serialized to JSON with a pydantic ``TypeAdapter`` for
    *value_type*, so anything pydantic can validate (models, dataclasses,
    primitives, containers) can be stored.

    * Every read goes to the database, so ``invalidate()`` has nothing to
      discard and returns immediately.
    * ``keys()``, ``values()`` and ``find_in_range`` run one query when
      iteration starts and stream its rows in ascending key order.
    * Each write is one transaction.  ``save_many`` and ``delete_many``
      drain and encode their whole stream before touching the database,
      so a stream that fails partway leaves the table unchanged.
    * Stores sharing a connection should share *write_lock* so that one
      store's commit or rollback never lands in another's transaction.

    Parameters:
        connect:    Coroutine factory returning the shared connection.
        key_type:   One of ``int``, ``str``, ``float`` or ``bytes``.
        value_type: Type of the values.
        write_lock: Lock serializing transactions on the connection.

    Raises:
        StoreTypeMismatchError: If *key_type* has no SQLite ordering.
    """

    def __init__(
        self,
        connect: Callable[[], Awaitable[aiosqlite.Connection]],
        key_type: type[Any],
        value_type: type[Any],
        write_lock: asyncio.Lock | None = None,
    ) -> None:
        if key_type not in KEY_AFFINITY:
            supported = ", ".join(t.__name__ for t in KEY_AFFINITY)
            raise StoreTypeMismatchError(
                f"SQLiteStore cannot order keys of type {key_type.__name__!r}; "
                f"supported key types: {supported}"
            )
        self.key_type = key_type
        self.value_type = value_type
        self._connect_fn = connect
        self._write_lock = write_lock or asyncio.Lock()
        self._adapter: TypeAdapter[Any] = TypeAdapter(value_type)
        self._table = table_name(key_type, value_type)
        self._ready = False

    @property
    def table(self) -> str:
        return self._table

    async def _connect(self) -> aiosqlite.Connection:
        db = await self._connect_fn()
        if not self._ready:
            affinity = KEY_AFFINITY[self.key_type]
            async with self._write_lock:
                await db.execute(_CREATE_TABLE.format(table=self._table, affinity=affinity))
                await db.commit()
            self._ready = True
        return db

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        db = await self._connect()
        async with self._write_lock:
            try:
                yield db
            except BaseException:
                await db.rollback()
                raise
            await db.commit()

    def _encode(self, value: V) -> bytes:
        return self._adapter.dump_json(value)

    def _decode(self, raw: bytes) -> V:
        result: V = self._adapter.validate_json(raw)
        return result

    # ── writes ───────────────────────────────────────────────

    async def save(self, key: K, value: V) -> None:
        row = (key, self._encode(value))
        async with self._transaction() as db:
            await db.execute(
                f'INSERT OR REPLACE INTO "{self._table}" (key, value) VALUES (?, ?)',
                row,
            )

    async def save_many(self, entries: Stream[Entry[K, V] | tuple[K, V]]) -> None:
        rows = [(key, self._encode(value)) async for key, value in iterate(entries)]
        if not rows:
            return
        async with self._transaction() as db:
            await db.executemany(
                f'INSERT OR REPLACE INTO "{self._table}" (key, value) VALUES (?, ?)',
                rows,
            )

    async def delete(self, key: K) -> None:
        async with self._transaction() as db:
            await db.execute(f'DELETE FROM "{self._table}" WHERE key = ?', (key,))

    async def delete_many(self, ids: Stream[K]) -> None:
        rows = [(key,) async for key in iterate(ids)]
        if not rows:
            return
        async with self._transaction() as db:
            await db.executemany(f'DELETE FROM "{self._table}" WHERE key = ?', rows)

    async def delete_in_range(self, start: K, end: K) -> None:
        async with self._transaction() as db:
            await db.execute(
                f'DELETE FROM "{self._table}" WHERE key >= ? AND key < ?',
                (start, end),
            )

    async def delete_all(self) -> None:
        async with self._transaction() as db:
            await db.execute(f'DELETE FROM "{self._table}"')

    async def invalidate(self) -> None:
        return None

    # ── reads ────────────────────────────────────────────────

    async def find(self, key: K) -> V | None:
        db = await self._connect()
        cursor = await db.execute(
            f'SELECT value FROM "{self._table}" WHERE key = ?',
            (key,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._decode(row[0])

    async def find_in_range(self, start: K, end: K) -> AsyncIterator[Entry[K, V]]:
        db = await self._connect()
        async with db.execute(
            f'SELECT key, value FROM "{self._table}" WHERE key >= ? AND key < ? ORDER BY key',
            (start, end),
        ) as cursor:
            async for row in cursor:
                yield Entry(row[0], self._decode(row[1]))

    async def count(self) -> int:
        db = await self._connect()
        cursor = await db.execute(f'SELECT COUNT(*) FROM "{self._table}"')
        row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def keys(self) -> AsyncIterator[K]:
        db = await self._connect()
        async with db.execute(f'SELECT key FROM "{self._table}" ORDER BY key') as cursor:
            async for row in cursor:
                yield row[0]

    async def values(self) -> AsyncIterator[V]:
        db = await self._connect()
        async with db.execute(f'SELECT value FROM "{self._table}" ORDER BY key') as cursor:
            async for row in cursor:
                yield self._decode(row[0])
