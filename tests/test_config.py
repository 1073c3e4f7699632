"""Tests for configuration-driven wiring."""

import pytest
from pydantic import ValidationError

from storekit import Capability, ServiceConfigError
from storekit.config import (
    RegistryConfigSchema,
    ServiceFactory,
    StoreContextSchema,
    StoreServiceConfigSchema,
)
from storekit.services import (
    ForwardingStoreService,
    MemoryStoreService,
    SQLiteStoreService,
    StoreService,
)


class TestServiceFactory:
    """Tests for ServiceFactory."""

    def test_registered_types_include_builtins(self):
        types = ServiceFactory.registered_types()
        assert "memory" in types
        assert "sqlite" in types

    def test_create_memory_service_with_order(self):
        service = ServiceFactory().create(StoreServiceConfigSchema(type="memory", order=4))
        assert isinstance(service, MemoryStoreService)
        assert service.order == 4

    def test_create_sqlite_service_with_config(self):
        service = ServiceFactory().create(
            StoreServiceConfigSchema(type="sqlite", config={"path": ":memory:"})
        )
        assert isinstance(service, SQLiteStoreService)
        assert service.path == ":memory:"

    def test_forward_long_obj_wraps_service(self):
        service = ServiceFactory().create(
            StoreServiceConfigSchema(type="memory", order=2, forward_long_obj=True)
        )
        assert isinstance(service, ForwardingStoreService)
        assert service.has_long_obj_stores()
        assert service.order == 2

    def test_unknown_type_raises_error(self):
        with pytest.raises(ServiceConfigError) as exc_info:
            ServiceFactory().create(StoreServiceConfigSchema(type="redis"))

        assert "redis" in str(exc_info.value)
        assert "Available types" in str(exc_info.value)

    def test_bad_kwargs_raise_config_error(self):
        with pytest.raises(ServiceConfigError) as exc_info:
            ServiceFactory().create(
                StoreServiceConfigSchema(type="memory", config={"colour": "blue"})
            )
        assert exc_info.value.service_type == "memory"

    def test_create_all_preserves_order(self):
        services = ServiceFactory().create_all(
            [
                StoreServiceConfigSchema(type="sqlite", config={"path": ":memory:"}),
                StoreServiceConfigSchema(type="memory"),
            ]
        )
        assert [type(s) for s in services] == [SQLiteStoreService, MemoryStoreService]


class TestServiceTypeConsistency:
    """Tests for _service_type consistency validation."""

    def test_register_matching_type_succeeds(self):
        class ArchiveService(MemoryStoreService):
            _service_type = "archive"

        ServiceFactory.register("archive", ArchiveService)
        try:
            service = ServiceFactory().create(StoreServiceConfigSchema(type="archive"))
            assert isinstance(service, ArchiveService)
        finally:
            ServiceFactory._registry.pop("archive", None)

    def test_register_mismatched_type_fails(self):
        with pytest.raises(ValueError, match="memory"):
            ServiceFactory.register("other", MemoryStoreService)

    def test_register_base_type_is_allowed(self):
        class Untyped(StoreService):
            pass

        ServiceFactory.register("untyped", Untyped)
        ServiceFactory._registry.pop("untyped", None)


class TestBuildRegistry:
    async def test_build_registry_selects_by_order(self):
        config = RegistryConfigSchema.model_validate(
            {
                "services": [
                    {"type": "sqlite", "order": 10, "config": {"path": ":memory:"}},
                    {"type": "memory", "order": 5, "forward_long_obj": True},
                ],
                "context": {"session_id": "s1", "shard_count": 2},
            }
        )
        registry = ServiceFactory().build_registry(config)
        try:
            generic = registry.resolve(Capability.GENERIC)
            assert isinstance(generic, ForwardingStoreService)
            assert isinstance(generic.original, MemoryStoreService)
            assert generic.original.context.session_id == "s1"
            assert generic.original.context.shard_count == 2

            store = registry.long_obj_store(str)
            await store.save_with_long(42, "x")
            assert await store.find(42) == "x"
        finally:
            await registry.dispose()

    def test_empty_config_builds_fallback_registry(self):
        registry = ServiceFactory().build_registry(RegistryConfigSchema())
        assert registry.resolve(Capability.GENERIC) is registry.fallback

    def test_loads_from_json(self):
        config = RegistryConfigSchema.model_validate_json(
            '{"services": [{"type": "memory"}]}'
        )
        assert config.services[0].type == "memory"
        assert config.services[0].forward_long_obj is False
        assert config.context.shard_count == 1


class TestContextSchema:
    def test_to_context(self):
        context = StoreContextSchema(session_id="abc", hints={"ttl": 5}).to_context()
        assert context.session_id == "abc"
        assert context.hints == {"ttl": 5}

    def test_rejects_invalid_shard_count(self):
        with pytest.raises(ValidationError):
            StoreContextSchema(shard_count=0)
