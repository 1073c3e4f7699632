"""ForwardingStoreService — gives a generic-only service integer-keyed stores."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from storekit.services.base import StoreService
from storekit.stores.forwarding import ForwardingStore

if TYPE_CHECKING:
    from storekit.context import StoreContext
    from storekit.stores.base import LongObjStore, Store


class ForwardingStoreService(StoreService):
    """Decorates a generic-capable service with :class:`ForwardingStore` support.

    Everything except the integer-keyed capability is forwarded unchanged,
    including ``order``, so the wrapped backend competes at its own
    priority.

    Parameters:
        original: The service to forward to.  It must report
                  ``has_generic_stores() == True``.
    """

    def __init__(self, original: StoreService) -> None:
        self._original = original

    @property
    def original(self) -> StoreService:
        """The generic-capable service being forwarded to."""
        return self._original

    @property
    def order(self) -> int:
        return self._original.order

    def has_generic_stores(self) -> bool:
        return self._original.has_generic_stores()

    def provide_generic_store(self, key_type: type[Any], value_type: type[Any]) -> Store[Any, Any]:
        return self._original.provide_generic_store(key_type, value_type)

    def has_long_obj_stores(self) -> bool:
        return True

    def provide_long_obj_store(self, value_type: type[Any]) -> LongObjStore[Any]:
        return ForwardingStore(self._original.provide_generic_store(int, value_type))

    def init(self, context: StoreContext) -> None:
        self._original.init(context)

    async def dispose(self) -> None:
        await self._original.dispose()

    def describe(self) -> dict[str, Any]:
        data = self._original.describe()
        data["long_obj"] = True
        data["forwarding"] = True
        return data

    def __repr__(self) -> str:
        return f"ForwardingStoreService({self._original!r})"
