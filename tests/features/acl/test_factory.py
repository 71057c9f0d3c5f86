"""Tests for backend and service factories."""

import pytest

from neo_acl.config.settings import AclBackendType, AclSettings
from neo_acl.core.exceptions import ConfigurationError
from neo_acl.features.acl.adapters.memory_adapter import MemoryBackend
from neo_acl.features.acl.adapters.redis_adapter import RedisBackend
from neo_acl.features.acl.factory import create_acl_service, create_backend, create_bucket_names


class TestFactory:
    """Tests for wiring from settings."""

    def test_memory_backend(self):
        assert isinstance(create_backend(AclSettings(backend="memory")), MemoryBackend)

    def test_redis_backend_from_settings(self):
        settings = AclSettings(
            backend=AclBackendType.REDIS,
            redis_url="redis://cache:6379/2",
            key_prefix="tenant_acl",
            redis_max_connections=5,
        )

        backend = create_backend(settings)

        assert isinstance(backend, RedisBackend)
        assert backend.url == "redis://cache:6379/2"
        assert backend.prefix == "tenant_acl"
        assert backend.max_connections == 5
        assert backend.redis_client is None

    def test_unsupported_backend(self):
        settings = AclSettings.model_construct(backend="mongodb")

        with pytest.raises(ConfigurationError):
            create_backend(settings)

    def test_bucket_names(self):
        buckets = create_bucket_names(AclSettings(users_bucket="acl_users", meta_bucket="acl_meta"))

        assert buckets.users == "acl_users"
        assert buckets.meta == "acl_meta"
        assert buckets.parents == "parents"

    @pytest.mark.asyncio
    async def test_service_uses_configured_buckets(self):
        backend = MemoryBackend()
        acl = create_acl_service(AclSettings(users_bucket="members"), backend=backend)

        await acl.add_user_roles("u1", "admin")

        assert await backend.get("members", "u1") == {"admin"}
        assert acl.backend is backend
