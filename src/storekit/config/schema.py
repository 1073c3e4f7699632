# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Configuration models for wiring store services.

These Pydantic models describe which backends a process should register
and the context they are initialized with.  They are usually loaded from
JSON or YAML by the application and handed to
:class:`~storekit.config.factory.ServiceFactory`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from storekit.context import StoreContext


class StoreServiceConfigSchema(BaseModel):
    """Single store service configuration.

    Attributes:
        type: Registered backend name (e.g. "memory", "sqlite")
        order: Selection priority override (lower wins); backend default if omitted
        forward_long_obj: Wrap the service so it also offers integer-keyed stores
        config: Backend-specific constructor arguments
    """

    type: str
    order: int | None = None
    forward_long_obj: bool = False
    config: dict[str, Any] = Field(default_factory=dict)


class StoreContextSchema(BaseModel):
    """Context passed to every service's ``init``.

    Attributes:
        session_id: Identifier of the owning session
        shard_index: Index of the shard this session serves
        shard_count: Total number of shards
        hints: Free-form backend settings
    """

    session_id: str = ""
    shard_index: int = Field(default=0, ge=0)
    shard_count: int = Field(default=1, ge=1)
    hints: dict[str, Any] = Field(default_factory=dict)

    def to_context(self) -> StoreContext:
        return StoreContext(
            session_id=self.session_id,
            shard_index=self.shard_index,
            shard_count=self.shard_count,
            hints=dict(self.hints),
        )


class RegistryConfigSchema(BaseModel):
    """Complete registry configuration.

    Attributes:
        services: Services to register, in registration order
        context: Context used to initialize them
    """

    services: list[StoreServiceConfigSchema] = Field(default_factory=list)
    context: StoreContextSchema = Field(default_factory=StoreContextSchema)
