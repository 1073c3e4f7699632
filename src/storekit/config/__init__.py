# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Configuration-driven wiring of store services.

Exports:
    ServiceFactory: Creates services (and a registry) from configuration
    RegistryConfigSchema: Top-level configuration model
    StoreServiceConfigSchema: Per-service configuration model
    StoreContextSchema: Context configuration model
"""

from .factory import ServiceFactory
from .schema import (
    RegistryConfigSchema,
    StoreContextSchema,
    StoreServiceConfigSchema,
)

__all__ = [
    "RegistryConfigSchema",
    "ServiceFactory",
    "StoreContextSchema",
    "StoreServiceConfigSchema",
]
