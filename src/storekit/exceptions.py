"""Custom exceptions for the storekit package."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storekit.services.base import StoreService


class StoreError(Exception):
    """Base exception for all storekit errors."""


class CapabilityMismatchError(StoreError):
    """Raised when a store is requested from a service lacking that capability.

    This is a programming error: callers are expected to check
    ``has_generic_stores()`` / ``has_long_obj_stores()`` first.
    """

    def __init__(self, service: StoreService, capability: str) -> None:
        self.service = service
        self.capability = capability
        super().__init__(f"{type(service).__name__} cannot provide {capability} stores")


class StoreTypeMismatchError(StoreError):
    """Raised when a store cannot be bound to the requested key/value types."""


class ServiceDisposedError(StoreError):
    """Raised when a disposed service is asked to manufacture a store."""

    def __init__(self, service: StoreService) -> None:
        self.service = service
        super().__init__(f"{type(service).__name__} has been disposed")


class DisposalError(StoreError):
    """Raised when releasing a service's resources fails.

    ``failures`` holds the underlying exceptions; there is more than one
    when a registry disposes several services.
    """

    def __init__(self, failures: list[BaseException]) -> None:
        self.failures = failures
        detail = "; ".join(f"{type(e).__name__}: {e}" for e in failures)
        super().__init__(f"Store service disposal failed: {detail}")


class ServiceConfigError(StoreError):
    """Raised when a store service is misconfigured."""

    def __init__(self, service_type: str, message: str) -> None:
        self.service_type = service_type
        super().__init__(f"Store service '{service_type}' misconfigured: {message}")
