"""StoreService ABC — factory and lifecycle owner for one backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from storekit.context import StoreContext
    from storekit.stores.base import LongObjStore, Store

ORDER_HIGHEST = -(2**31)
ORDER_NEUTRAL = 0
ORDER_LOWEST = 2**31 - 1


class StoreService(ABC):
    """Base class for every store backend.

    A service reports what it can build (``has_generic_stores`` /
    ``has_long_obj_stores``) so that selection never has to try and fail,
    then manufactures store instances on demand.  The flags are fixed for
    the lifetime of the service.

    Lifecycle: ``init`` is called once before any store is produced;
    ``dispose`` releases every resource held for the stores the service
    manufactured.  ``dispose`` must be safe without a prior ``init`` and
    must be a no-op the second time.

    Calling a ``provide_*`` method whose capability flag is ``False`` is a
    programming error and raises
    :class:`~storekit.exceptions.CapabilityMismatchError`.

    Class Variables:
        _service_type: Type identifier used by configuration (e.g. "memory").
    """

    _service_type: ClassVar[str] = "base"

    def __init__(self, *, order: int = ORDER_NEUTRAL) -> None:
        self._order = order

    @property
    def order(self) -> int:
        """Selection priority; lower wins.  Fixed at construction."""
        return self._order

    @abstractmethod
    def has_generic_stores(self) -> bool:
        """Return ``True`` if this service can build :class:`Store` instances."""
        ...

    @abstractmethod
    def provide_generic_store(self, key_type: type[Any], value_type: type[Any]) -> Store[Any, Any]:
        """Return a new store bound to *key_type* / *value_type*."""
        ...

    @abstractmethod
    def has_long_obj_stores(self) -> bool:
        """Return ``True`` if this service can build :class:`LongObjStore` instances."""
        ...

    @abstractmethod
    def provide_long_obj_store(self, value_type: type[Any]) -> LongObjStore[Any]:
        """Return a new integer-keyed store bound to *value_type*."""
        ...

    @abstractmethod
    def init(self, context: StoreContext) -> None:
        """Allocate backend resources for the environment in *context*."""
        ...

    @abstractmethod
    async def dispose(self) -> None:
        """Release backend resources.

        Raises:
            DisposalError: If teardown fails.
        """
        ...

    def describe(self) -> dict[str, Any]:
        """Return a JSON-serializable summary of this service."""
        return {
            "type": self._service_type,
            "class": type(self).__name__,
            "order": self.order,
            "generic": self.has_generic_stores(),
            "long_obj": self.has_long_obj_stores(),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(order={self.order})"
