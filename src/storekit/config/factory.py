# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Service factory for creating store services from configuration.

Uses the Registry pattern to map type strings to service classes,
allowing new backends to be plugged in without modifying factory code.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from storekit.exceptions import ServiceConfigError
from storekit.registry import StoreRegistry
from storekit.services import (
    ForwardingStoreService,
    MemoryStoreService,
    SQLiteStoreService,
    StoreService,
)

from .schema import RegistryConfigSchema, StoreServiceConfigSchema

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Creates store services from configuration.

    Backend types are registered at class level and can be extended via
    the `register` class method.

    Example:
        factory = ServiceFactory()
        config = RegistryConfigSchema(
            services=[
                StoreServiceConfigSchema(type="sqlite", order=10, config={"path": "app.db"}),
                StoreServiceConfigSchema(type="memory", order=5, forward_long_obj=True),
            ],
        )
        registry = factory.build_registry(config)
    """

    # Class-level registry mapping type strings to service classes
    _registry: ClassVar[dict[str, type[StoreService]]] = {
        "memory": MemoryStoreService,
        "sqlite": SQLiteStoreService,
    }

    @classmethod
    def register(cls, type_name: str, service_class: type[StoreService]) -> None:
        """Register a custom backend type.

        Args:
            type_name: Type string to use in configuration
            service_class: StoreService subclass to instantiate

        Raises:
            ValueError: If service_class._service_type doesn't match type_name

        Example:
            ServiceFactory.register("redis", RedisStoreService)
        """
        declared_type = getattr(service_class, "_service_type", "base")
        if declared_type != "base" and declared_type != type_name:
            raise ValueError(
                f"Service {service_class.__name__} has _service_type='{declared_type}' "
                f"but is being registered as '{type_name}'"
            )
        cls._registry[type_name] = service_class

    @classmethod
    def registered_types(cls) -> list[str]:
        """Return list of registered backend type names."""
        return list(cls._registry.keys())

    def create(self, config: StoreServiceConfigSchema) -> StoreService:
        """Create a single service.

        Args:
            config: Service configuration

        Returns:
            Created service, wrapped in ForwardingStoreService when
            ``forward_long_obj`` is set

        Raises:
            ServiceConfigError: If type is unknown or construction fails
        """
        service_class = self._registry.get(config.type)
        if not service_class:
            available = ", ".join(sorted(self.registered_types()))
            raise ServiceConfigError(
                config.type, f"unknown backend type. Available types: {available}"
            )

        kwargs: dict[str, Any] = dict(config.config)
        if config.order is not None:
            kwargs["order"] = config.order

        try:
            service = service_class(**kwargs)
        except TypeError as e:
            raise ServiceConfigError(config.type, str(e)) from e

        if config.forward_long_obj:
            if not service.has_generic_stores():
                raise ServiceConfigError(
                    config.type, "forward_long_obj requires a backend with generic stores"
                )
            service = ForwardingStoreService(service)

        logger.debug("Created %r from '%s' configuration", service, config.type)
        return service

    def create_all(self, configs: list[StoreServiceConfigSchema]) -> list[StoreService]:
        """Create all services from a configuration list, preserving order."""
        return [self.create(config) for config in configs]

    def build_registry(self, config: RegistryConfigSchema) -> StoreRegistry:
        """Create every configured service, register them and initialize the registry.

        Args:
            config: Registry configuration

        Returns:
            An initialized StoreRegistry

        Raises:
            ServiceConfigError: If any service cannot be created
        """
        registry = StoreRegistry(self.create_all(config.services))
        registry.init(config.context.to_context())
        return registry
