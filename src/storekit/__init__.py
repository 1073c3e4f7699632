"""storekit — pluggable key-value storage behind an explicit service registry.

Backends register as store services; consumers ask the registry for a
store by capability and get the highest-priority match, an adapted
generic store, or a no-op store when nothing is configured.
"""

from storekit.context import StoreContext
from storekit.exceptions import (
    CapabilityMismatchError,
    DisposalError,
    ServiceConfigError,
    ServiceDisposedError,
    StoreError,
    StoreTypeMismatchError,
)
from storekit.registry import Capability, StoreRegistry
from storekit.services.base import StoreService
from storekit.stores.base import Entry, LongEntry, LongObjStore, Store

__all__ = [
    "Capability",
    "CapabilityMismatchError",
    "DisposalError",
    "Entry",
    "LongEntry",
    "LongObjStore",
    "ServiceConfigError",
    "ServiceDisposedError",
    "Store",
    "StoreContext",
    "StoreError",
    "StoreRegistry",
    "StoreService",
    "StoreTypeMismatchError",
]
