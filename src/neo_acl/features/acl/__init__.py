"""Access control feature.

Hierarchical role-based access control: users hold roles, roles inherit
from parent roles and are granted permissions on resources. State lives in
a pluggable backend (in-memory or Redis).
"""

from .adapters import MemoryBackend, RedisBackend, TransactionalBackend
from .entities import (
    WILDCARD,
    AclBackend,
    BucketNames,
    CompactGrant,
    GrantCall,
    ResourceGrant,
    SupportsUnions,
    Transaction,
)
from .factory import create_acl_service, create_backend, create_bucket_names
from .middleware import AclMiddleware
from .services import (
    AclService,
    GrantDemultiplexer,
    MutationService,
    PermissionEvaluator,
    RoleGraphResolver,
)

__all__ = [
    # Service
    "AclService",
    "GrantDemultiplexer",
    "MutationService",
    "PermissionEvaluator",
    "RoleGraphResolver",

    # Backends
    "AclBackend",
    "SupportsUnions",
    "TransactionalBackend",
    "MemoryBackend",
    "RedisBackend",

    # Entities
    "WILDCARD",
    "BucketNames",
    "CompactGrant",
    "GrantCall",
    "ResourceGrant",
    "Transaction",

    # Factories
    "create_acl_service",
    "create_backend",
    "create_bucket_names",

    # HTTP
    "AclMiddleware",
]
