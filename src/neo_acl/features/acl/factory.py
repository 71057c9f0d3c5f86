"""
Factories for the access control feature.

Build a backend and an :class:`AclService` from :class:`AclSettings`.
"""
from typing import Optional

from .adapters.memory_adapter import MemoryBackend
from .adapters.redis_adapter import RedisBackend
from .entities.buckets import BucketNames
from .entities.protocols import AclBackend
from .services.acl_service import AclService
from ...config.settings import AclBackendType, AclSettings, get_settings
from ...core.exceptions.domain import ConfigurationError


def create_bucket_names(settings: AclSettings) -> BucketNames:
    """Bucket names configured in settings."""
    return BucketNames(
        meta=settings.meta_bucket,
        parents=settings.parents_bucket,
        resources=settings.resources_bucket,
        roles=settings.roles_bucket,
        users=settings.users_bucket,
    )


def create_backend(settings: AclSettings) -> AclBackend:
    """
    Create the storage backend selected in settings.

    Args:
        settings: ACL settings

    Returns:
        Backend instance; Redis backends connect lazily on first use
    """
    if settings.backend == AclBackendType.MEMORY:
        return MemoryBackend()
    if settings.backend == AclBackendType.REDIS:
        return RedisBackend(
            url=settings.redis_url,
            prefix=settings.key_prefix,
            max_connections=settings.redis_max_connections,
            socket_timeout=settings.redis_socket_timeout,
        )
    raise ConfigurationError(
        f"Unsupported ACL backend: {settings.backend}",
        details={"backend": str(settings.backend)}
    )


def create_acl_service(
    settings: Optional[AclSettings] = None,
    backend: Optional[AclBackend] = None
) -> AclService:
    """
    Create an access control service.

    Args:
        settings: ACL settings, defaults to the cached environment settings
        backend: Backend to use instead of the one selected in settings

    Returns:
        Configured AclService instance
    """
    settings = settings or get_settings()
    return AclService(
        backend=backend or create_backend(settings),
        buckets=create_bucket_names(settings),
    )
