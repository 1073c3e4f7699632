"""Tests for SQLiteStoreService."""

import asyncio

import aiosqlite
import pytest

from storekit import (
    CapabilityMismatchError,
    DisposalError,
    ServiceDisposedError,
)
from storekit.services import SQLiteStoreService


async def test_capabilities(sqlite_service):
    assert sqlite_service.has_generic_stores()
    assert not sqlite_service.has_long_obj_stores()
    with pytest.raises(CapabilityMismatchError):
        sqlite_service.provide_long_obj_store(str)


async def test_persists_across_services(tmp_path):
    path = str(tmp_path / "stores.db")

    writer = SQLiteStoreService(path)
    await writer.provide_generic_store(int, str).save(1, "persisted")
    await writer.dispose()

    reader = SQLiteStoreService(path)
    try:
        assert await reader.provide_generic_store(int, str).find(1) == "persisted"
    finally:
        await reader.dispose()


async def test_dispose_without_connection():
    service = SQLiteStoreService(":memory:")
    await service.dispose()
    await service.dispose()


async def test_disposed_service_refuses_new_work():
    service = SQLiteStoreService(":memory:")
    store = service.provide_generic_store(int, str)
    await store.save(1, "a")

    await service.dispose()

    with pytest.raises(ServiceDisposedError):
        service.provide_generic_store(int, str)
    with pytest.raises(ServiceDisposedError):
        await store.find(1)


async def test_close_failure_is_reported_as_disposal_error():
    service = SQLiteStoreService(":memory:")
    await service.provide_generic_store(int, str).save(1, "a")

    class BrokenConnection:
        async def close(self):
            raise OSError("cannot close")

    real = service._db
    service._db = BrokenConnection()
    try:
        with pytest.raises(DisposalError) as exc_info:
            await service.dispose()
        assert isinstance(exc_info.value.failures[0], OSError)
    finally:
        await real.close()


async def test_init_records_context(sqlite_service):
    assert sqlite_service.context.session_id == "test"


async def test_describe(sqlite_service):
    assert sqlite_service.describe() == {
        "type": "sqlite",
        "class": "SQLiteStoreService",
        "order": 0,
        "generic": True,
        "long_obj": False,
    }


async def test_concurrent_first_use_opens_one_connection(monkeypatch):
    opened = []
    real_connect = aiosqlite.connect

    def counting_connect(*args, **kwargs):
        opened.append(args)
        return real_connect(*args, **kwargs)

    monkeypatch.setattr(aiosqlite, "connect", counting_connect)

    service = SQLiteStoreService(":memory:")
    try:
        stores = [service.provide_generic_store(int, str) for _ in range(8)]
        await asyncio.gather(*(s.save(i, f"v{i}") for i, s in enumerate(stores)))

        assert len(opened) == 1
        assert [k async for k in stores[0].keys()] == list(range(8))
        assert await stores[-1].count() == 8
    finally:
        await service.dispose()


async def test_concurrent_writes_to_different_tables(sqlite_service):
    ints = sqlite_service.provide_generic_store(str, int)
    strs = sqlite_service.provide_generic_store(str, str)

    def broken():
        yield "a", "fine"
        raise RuntimeError("stream broke")

    results = await asyncio.gather(
        ints.save_many([(str(i), i) for i in range(5)]),
        strs.save_many(broken()),
        ints.save("last", 99),
        return_exceptions=True,
    )

    assert isinstance(results[1], RuntimeError)
    assert await ints.count() == 6
    assert await strs.count() == 0
