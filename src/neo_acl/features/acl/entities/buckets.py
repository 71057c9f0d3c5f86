"""Bucket schema for the access control store.

Layout of the logical buckets over the backend:

    meta["users"]              = {userId, ...}     every user ever assigned a role
    meta["roles"]              = {roleName, ...}   every role granted or given a parent
    users[userId]              = {roleName, ...}
    roles[roleName]            = {userId, ...}     inverse of ``users``
    parents[roleName]          = {parentRole, ...}
    resources[roleName]        = {resourceName, ...}
    allows_<resource>[role]    = {permission, ...}

User ids, role names and resource names are case sensitive. The
permission ``"*"`` grants every action on a resource.
"""

from dataclasses import dataclass

WILDCARD = "*"

META_USERS_KEY = "users"
META_ROLES_KEY = "roles"

ALLOWS_PREFIX = "allows_"


@dataclass(frozen=True)
class BucketNames:
    """Names of the fixed buckets; the permission buckets are derived per resource."""

    meta: str = "meta"
    parents: str = "parents"
    resources: str = "resources"
    roles: str = "roles"
    users: str = "users"


def allows_bucket(resource: str) -> str:
    """Name of the bucket holding the grants for ``resource``."""
    return f"{ALLOWS_PREFIX}{resource}"


def resource_from_allows_bucket(bucket: str) -> str:
    """Inverse of :func:`allows_bucket`."""
    if bucket.startswith(ALLOWS_PREFIX):
        return bucket[len(ALLOWS_PREFIX):]
    return bucket
