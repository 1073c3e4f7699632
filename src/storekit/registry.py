"""StoreRegistry — discovers, ranks and selects store services."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING, Any

from storekit.context import StoreContext
from storekit.exceptions import DisposalError, StoreTypeMismatchError
from storekit.services.forwarding import ForwardingStoreService
from storekit.services.noop import NoOpStoreService

if TYPE_CHECKING:
    from types import TracebackType

    from storekit.services.base import StoreService
    from storekit.stores.base import LongObjStore, Store

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    """Kinds of store a consumer can request."""

    GENERIC = "generic"
    LONG_OBJ = "long_obj"


def _is_noop(service: StoreService) -> bool:
    while isinstance(service, ForwardingStoreService):
        service = service.original
    return isinstance(service, NoOpStoreService)


def _supports(service: StoreService, capability: Capability) -> bool:
    if capability is Capability.GENERIC:
        return service.has_generic_stores()
    return service.has_long_obj_stores()


class StoreRegistry:
    """Explicit registry of store services, populated by application wiring.

    Selection for a capability filters the registered services to those
    reporting it, orders them by ascending ``order`` (registration order
    breaks ties) and picks the first.  When nobody offers integer-keyed
    stores natively, the best generic service is wrapped in a
    :class:`ForwardingStoreService`; that wrapper is created once per
    service and reused.  When nothing qualifies at all, the registry's
    :class:`NoOpStoreService` is returned, so consumers always get a
    working (if forgetful) store.

    Selection runs on every request; nothing is cached except the
    synthesized forwarders.

    Example:
        registry = StoreRegistry()
        registry.register(SQLiteStoreService("app.db", order=10))
        registry.register(ForwardingStoreService(MemoryStoreService(order=5)))
        registry.init(StoreContext(session_id="s1"))

        users = registry.generic_store(str, User)
        messages = registry.long_obj_store(Message)
    """

    def __init__(self, services: Iterable[StoreService] = ()) -> None:
        self._services: list[StoreService] = []
        self._forwarders: dict[int, ForwardingStoreService] = {}
        self._fallback = NoOpStoreService()
        self._lock = threading.Lock()
        self._context: StoreContext | None = None
        for service in services:
            self.register(service)

    # ── registration ─────────────────────────────────────────

    def register(self, service: StoreService) -> StoreRegistry:
        """Append *service* to the candidate list.

        A :class:`NoOpStoreService`, bare or wrapped in forwarders, is
        accepted but never selected.  Services registered after
        :meth:`init` are initialized immediately with the same context.
        """
        with self._lock:
            self._services.append(service)
            context = self._context
        logger.info("Registered store service %r", service)
        if context is not None:
            service.init(context)
        return self

    @property
    def services(self) -> list[StoreService]:
        """Registered services in registration order."""
        with self._lock:
            return list(self._services)

    @property
    def fallback(self) -> NoOpStoreService:
        return self._fallback

    # ── selection ────────────────────────────────────────────

    def candidates(self, capability: Capability) -> list[StoreService]:
        """Return services natively reporting *capability*, best first."""
        matching = [
            s
            for s in self.services
            if not _is_noop(s) and _supports(s, capability)
        ]
        return sorted(matching, key=lambda s: s.order)

    def resolve(self, capability: Capability) -> StoreService:
        """Return the single service that will serve *capability*."""
        capability = Capability(capability)
        ranked = self.candidates(capability)
        if ranked:
            logger.debug("Resolved %s stores to %r", capability.value, ranked[0])
            return ranked[0]

        if capability is Capability.LONG_OBJ:
            generic = self.candidates(Capability.GENERIC)
            if generic:
                forwarder = self._forwarder_for(generic[0])
                logger.debug("Resolved %s stores to %r", capability.value, forwarder)
                return forwarder

        logger.warning(
            "No store service provides %s stores; falling back to %r",
            capability.value,
            self._fallback,
        )
        return self._fallback

    def _forwarder_for(self, service: StoreService) -> ForwardingStoreService:
        with self._lock:
            forwarder = self._forwarders.get(id(service))
            if forwarder is None or forwarder.original is not service:
                forwarder = ForwardingStoreService(service)
                self._forwarders[id(service)] = forwarder
                logger.info("Synthesized %r for integer-keyed stores", forwarder)
            return forwarder

    # ── consumer API ─────────────────────────────────────────

    def request_store(
        self,
        capability: Capability,
        key_type: type[Any] | None = None,
        value_type: type[Any] = object,
    ) -> Store[Any, Any] | LongObjStore[Any]:
        """Manufacture a store for *capability* bound to the given types.

        Raises:
            StoreTypeMismatchError: If the types cannot be honoured: a
                non-``int`` key for :attr:`Capability.LONG_OBJ`, a missing
                key type for :attr:`Capability.GENERIC`, a key type the
                selected backend cannot order, or a backend that returns
                a differently-typed store.
        """
        capability = Capability(capability)
        if capability is Capability.LONG_OBJ:
            if key_type not in (None, int):
                raise StoreTypeMismatchError(
                    f"Integer-keyed stores require int keys, got {key_type.__name__!r}"
                )
            return self.long_obj_store(value_type)
        if key_type is None:
            raise StoreTypeMismatchError("Generic stores require a key type")
        return self.generic_store(key_type, value_type)

    def generic_store(self, key_type: type[Any], value_type: type[Any]) -> Store[Any, Any]:
        """Manufacture a generic store from the highest-priority generic service."""
        service = self.resolve(Capability.GENERIC)
        store = service.provide_generic_store(key_type, value_type)
        _check_binding(service, store, key_type, value_type)
        return store

    def long_obj_store(self, value_type: type[Any]) -> LongObjStore[Any]:
        """Manufacture an integer-keyed store from the highest-priority service."""
        service = self.resolve(Capability.LONG_OBJ)
        store = service.provide_long_obj_store(value_type)
        _check_binding(service, store, int, value_type)
        return store

    # ── lifecycle ────────────────────────────────────────────

    def init(self, context: StoreContext | None = None) -> None:
        """Initialize every registered service once with *context*."""
        context = context or StoreContext()
        with self._lock:
            if self._context is not None:
                return
            self._context = context
            services = list(self._services)
        for service in services:
            service.init(context)
        self._fallback.init(context)
        logger.info("Initialized %d store service(s)", len(services))

    async def dispose(self) -> None:
        """Dispose every registered service, then report failures together.

        Raises:
            DisposalError: If one or more services failed to release
                their resources.  All services are attempted first.
        """
        with self._lock:
            services = list(self._services)
            self._context = None
            self._forwarders.clear()
        results = await asyncio.gather(
            *(service.dispose() for service in services),
            self._fallback.dispose(),
            return_exceptions=True,
        )
        failures: list[BaseException] = []
        for service, result in zip(services, results):
            if not isinstance(result, BaseException):
                continue
            logger.error("Failed to dispose %r: %s", service, result)
            if isinstance(result, DisposalError):
                failures.extend(result.failures)
            else:
                failures.append(result)
        if failures:
            raise DisposalError(failures)
        logger.info("Disposed %d store service(s)", len(services))

    async def __aenter__(self) -> StoreRegistry:
        self.init()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.dispose()


def _check_binding(
    service: StoreService,
    store: Store[Any, Any] | LongObjStore[Any],
    key_type: type[Any],
    value_type: type[Any],
) -> None:
    if store.key_type != key_type or store.value_type != value_type:
        raise StoreTypeMismatchError(
            f"{service!r} returned a store for ({store.key_type!r}, {store.value_type!r}) "
            f"but ({key_type!r}, {value_type!r}) was requested"
        )
