"""Tests for MemoryStoreService and NoOpStoreService."""

import asyncio

import pytest

from storekit import (
    CapabilityMismatchError,
    ServiceDisposedError,
    StoreContext,
)
from storekit.services import ORDER_LOWEST, ORDER_NEUTRAL, MemoryStoreService, NoOpStoreService
from storekit.stores import NoOpLongObjStore, NoOpStore


def test_capabilities(memory_service):
    assert memory_service.has_generic_stores()
    assert not memory_service.has_long_obj_stores()


def test_default_order_is_neutral(memory_service):
    assert memory_service.order == ORDER_NEUTRAL


def test_long_obj_store_is_a_capability_mismatch(memory_service):
    with pytest.raises(CapabilityMismatchError) as exc_info:
        memory_service.provide_long_obj_store(str)
    assert exc_info.value.capability == "long_obj"
    assert "MemoryStoreService" in str(exc_info.value)


async def test_stores_with_same_types_share_data(memory_service):
    first = memory_service.provide_generic_store(str, int)
    second = memory_service.provide_generic_store(str, int)
    await first.save("a", 1)
    assert await second.find("a") == 1


async def test_stores_with_different_types_are_isolated(memory_service):
    ints = memory_service.provide_generic_store(str, int)
    strs = memory_service.provide_generic_store(str, str)
    await ints.save("a", 1)
    assert await strs.find("a") is None


def test_init_records_context(memory_service, context):
    memory_service.init(context)
    assert memory_service.context is context


async def test_dispose_without_init(memory_service):
    await memory_service.dispose()


async def test_double_dispose_is_noop(memory_service):
    await memory_service.dispose()
    await memory_service.dispose()


async def test_dispose_drops_data_and_refuses_new_stores(memory_service):
    store = memory_service.provide_generic_store(int, str)
    await store.save(1, "a")

    await memory_service.dispose()

    assert await store.count() == 0
    with pytest.raises(ServiceDisposedError):
        memory_service.provide_generic_store(int, str)


async def test_concurrent_provide_shares_one_table(memory_service):
    stores = await asyncio.gather(
        *(asyncio.to_thread(memory_service.provide_generic_store, int, str) for _ in range(8))
    )
    await stores[0].save(1, "a")
    assert all([await s.find(1) == "a" for s in stores])


# ── no-op service ────────────────────────────────────────────


def test_noop_service_offers_everything():
    service = NoOpStoreService()
    assert service.has_generic_stores()
    assert service.has_long_obj_stores()
    assert service.order == ORDER_LOWEST


async def test_noop_service_stores():
    service = NoOpStoreService()
    service.init(StoreContext())
    generic = service.provide_generic_store(str, int)
    long_obj = service.provide_long_obj_store(bytes)
    assert isinstance(generic, NoOpStore)
    assert isinstance(long_obj, NoOpLongObjStore)
    assert (generic.key_type, generic.value_type) == (str, int)
    assert long_obj.value_type is bytes
    await service.dispose()
    await service.dispose()
