"""Shared test fixtures."""

import pytest

from storekit import StoreContext, StoreRegistry
from storekit.services import MemoryStoreService, SQLiteStoreService
from storekit.stores import MemoryStore


@pytest.fixture
def memory_service():
    return MemoryStoreService()


@pytest.fixture
async def sqlite_service():
    service = SQLiteStoreService(":memory:")
    service.init(StoreContext(session_id="test"))
    yield service
    await service.dispose()


@pytest.fixture
def store():
    return MemoryStore(int, str)


@pytest.fixture
def registry():
    return StoreRegistry()


@pytest.fixture
def context():
    return StoreContext(session_id="session-1", shard_index=0, shard_count=2)
