"""Neo-ACL - Hierarchical role-based access control for the NeoMultiTenant platform.

Users are assigned roles, roles inherit from parent roles, and roles are
granted permissions on resources. Storage is pluggable (in-memory or Redis)
and a Starlette middleware guards HTTP routes.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    AclBackendType,
    AclSettings,
    get_settings,
)

from .core.exceptions import (
    # Base Exception
    NeoAclError,

    # Common Exceptions
    ConfigurationError,
    ValidationError,
    InvalidGrantError,
    AuthenticationError,
    AuthorizationError,
    PermissionDeniedError,
    AccessCheckError,
    BackendError,
    BackendConnectionError,
    BackendTransactionError,

    # Utility Functions
    get_http_status_code,
    create_error_response,
)

from .features.acl import (
    AclService,
    AclMiddleware,
    AclBackend,
    SupportsUnions,
    MemoryBackend,
    RedisBackend,
    BucketNames,
    CompactGrant,
    WILDCARD,
    create_acl_service,
    create_backend,
)

__all__ = [
    "__version__",

    # Configuration
    "AclBackendType",
    "AclSettings",
    "get_settings",

    # Exceptions
    "NeoAclError",
    "ConfigurationError",
    "ValidationError",
    "InvalidGrantError",
    "AuthenticationError",
    "AuthorizationError",
    "PermissionDeniedError",
    "AccessCheckError",
    "BackendError",
    "BackendConnectionError",
    "BackendTransactionError",
    "get_http_status_code",
    "create_error_response",

    # Access control
    "AclService",
    "AclMiddleware",
    "AclBackend",
    "SupportsUnions",
    "MemoryBackend",
    "RedisBackend",
    "BucketNames",
    "CompactGrant",
    "WILDCARD",
    "create_acl_service",
    "create_backend",
]
