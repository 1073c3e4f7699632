"""Tests for ForwardingStoreService."""

import pytest

from storekit import StoreContext
from storekit.services import ForwardingStoreService, MemoryStoreService, StoreService
from storekit.stores import ForwardingStore, MemoryStore


class RecordingService(MemoryStoreService):
    """Memory service that records lifecycle calls."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = []

    def init(self, context):
        self.calls.append(("init", context))
        super().init(context)

    async def dispose(self):
        self.calls.append(("dispose",))
        await super().dispose()


@pytest.fixture
def original():
    return RecordingService(order=7)


@pytest.fixture
def forwarding(original):
    return ForwardingStoreService(original)


def test_reports_long_obj_capability(forwarding, original):
    assert not original.has_long_obj_stores()
    assert forwarding.has_long_obj_stores()


def test_forwards_order_and_generic_capability(forwarding, original):
    assert forwarding.order == 7
    assert forwarding.has_generic_stores() is original.has_generic_stores()
    assert forwarding.original is original


def test_generic_store_comes_from_original(forwarding):
    store = forwarding.provide_generic_store(str, int)
    assert isinstance(store, MemoryStore)
    assert store.key_type is str


async def test_long_obj_store_wraps_generic_int_store(forwarding, original):
    store = forwarding.provide_long_obj_store(str)
    assert isinstance(store, ForwardingStore)
    assert store.original.key_type is int
    assert store.value_type is str

    await store.save_with_long(42, "x")
    assert await original.provide_generic_store(int, str).find(42) == "x"


async def test_lifecycle_is_forwarded(forwarding, original):
    context = StoreContext(session_id="abc")
    forwarding.init(context)
    await forwarding.dispose()
    assert original.calls == [("init", context), ("dispose",)]


def test_describe_marks_forwarding(forwarding):
    data = forwarding.describe()
    assert data["type"] == "memory"
    assert data["long_obj"] is True
    assert data["forwarding"] is True


def test_is_a_store_service(forwarding):
    assert isinstance(forwarding, StoreService)
