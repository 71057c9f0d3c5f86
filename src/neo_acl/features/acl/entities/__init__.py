"""Access control entities package.

Backend contract, transaction builder, bucket schema and grant documents.
"""

from .buckets import (
    ALLOWS_PREFIX,
    META_ROLES_KEY,
    META_USERS_KEY,
    WILDCARD,
    BucketNames,
    allows_bucket,
    resource_from_allows_bucket,
)
from .grants import CompactGrant, GrantCall, ResourceGrant
from .protocols import AclBackend, SupportsUnions
from .transaction import MutationIntent, MutationKind, Transaction

__all__ = [
    # Bucket schema
    "ALLOWS_PREFIX",
    "META_ROLES_KEY",
    "META_USERS_KEY",
    "WILDCARD",
    "BucketNames",
    "allows_bucket",
    "resource_from_allows_bucket",

    # Grant documents
    "CompactGrant",
    "GrantCall",
    "ResourceGrant",

    # Protocols
    "AclBackend",
    "SupportsUnions",

    # Transactions
    "MutationIntent",
    "MutationKind",
    "Transaction",
]
