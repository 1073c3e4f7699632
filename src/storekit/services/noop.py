"""NoOpStoreService — the fallback used when no real backend qualifies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from storekit.services.base import ORDER_LOWEST, StoreService
from storekit.stores.noop import NoOpLongObjStore, NoOpStore

if TYPE_CHECKING:
    from storekit.context import StoreContext


class NoOpStoreService(StoreService):
    """Always able to provide stores; none of them persist anything.

    The registry never ranks this service against real backends; it is
    only returned when nothing else reports the requested capability.
    """

    _service_type = "noop"

    def __init__(self) -> None:
        super().__init__(order=ORDER_LOWEST)

    def has_generic_stores(self) -> bool:
        return True

    def provide_generic_store(self, key_type: type[Any], value_type: type[Any]) -> NoOpStore[Any, Any]:
        return NoOpStore(key_type, value_type)

    def has_long_obj_stores(self) -> bool:
        return True

    def provide_long_obj_store(self, value_type: type[Any]) -> NoOpLongObjStore[Any]:
        return NoOpLongObjStore(value_type)

    def init(self, context: StoreContext) -> None:
        return None

    async def dispose(self) -> None:
        return None
