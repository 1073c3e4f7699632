"""
storekit — Hello World

Backends register as store services. Consumers ask the registry for a
store by capability and get the best match, an adapted generic store,
or a no-op store when nothing is configured.
"""

import asyncio

from pydantic import BaseModel

from storekit import Capability, StoreContext, StoreRegistry
from storekit.services import (
    ForwardingStoreService,
    MemoryStoreService,
    SQLiteStoreService,
)


class Message(BaseModel):
    author: str
    content: str


async def main():
    # ──────────────────────────────────────
    #  1. Nothing registered: stores accept
    #     writes and remember nothing
    # ──────────────────────────────────────
    print("=== Empty registry ===\n")

    empty = StoreRegistry()
    store = empty.generic_store(str, int)
    await store.save("visits", 1)
    print(f"  find('visits') -> {await store.find('visits')}")

    # ──────────────────────────────────────
    #  2. Register backends (lower order wins)
    # ──────────────────────────────────────
    registry = StoreRegistry()
    registry.register(SQLiteStoreService(":memory:", order=10))
    registry.register(ForwardingStoreService(MemoryStoreService(order=5)))

    async with registry:
        print("\n=== Selection ===\n")
        for capability in Capability:
            print(f"  {capability.value:>8}: {registry.resolve(capability)!r}")

        # ──────────────────────────────────────
        #  3. Integer-keyed store over a generic
        #     backend
        # ──────────────────────────────────────
        print("\n=== Integer-keyed store ===\n")

        messages = registry.long_obj_store(Message)
        await messages.save_many_with_long(
            [
                (1, Message(author="alice", content="hello")),
                (2, Message(author="bob", content="hi")),
                (3, Message(author="alice", content="bye")),
            ]
        )
        async for entry in messages.find_in_range(1, 3):
            print(f"  #{entry.key} {entry.value.author}: {entry.value.content}")
        print(f"  count -> {await messages.count()}")

    # ──────────────────────────────────────
    #  4. Context reaches every backend
    # ──────────────────────────────────────
    print("\n=== Durable store ===\n")

    durable = StoreRegistry([SQLiteStoreService(":memory:")])
    durable.init(StoreContext(session_id="demo"))
    try:
        users = durable.request_store(Capability.GENERIC, str, Message)
        await users.save("alice", Message(author="alice", content="profile"))
        print(f"  find('alice') -> {await users.find('alice')}")
    finally:
        await durable.dispose()


if __name__ == "__main__":
    asyncio.run(main())
