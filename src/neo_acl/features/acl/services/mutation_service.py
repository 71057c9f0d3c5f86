"""Mutation coordinator for the access control store.

Each public operation queues its set operations into one backend batch.
Revoking permissions and deleting roles or resources read before they
write, so they are never atomic end to end: a concurrent grant between
the read and the write can leave ``resources[role]`` out of step with the
``allows`` buckets.
"""

import asyncio
from typing import Optional, Sequence

from ..entities.buckets import META_ROLES_KEY, META_USERS_KEY, BucketNames, allows_bucket
from ..entities.protocols import AclBackend


class MutationService:
    """Writes role assignments, hierarchy edges and grants."""

    def __init__(self, backend: AclBackend, buckets: BucketNames):
        self.backend = backend
        self.buckets = buckets

    async def add_user_roles(self, user_id: str, roles: Sequence[str]) -> None:
        """Assign roles to a user and mirror the user into each role."""
        transaction = self.backend.begin()
        self.backend.add(transaction, self.buckets.meta, META_USERS_KEY, [user_id])
        self.backend.add(transaction, self.buckets.users, user_id, roles)
        for role in roles:
            self.backend.add(transaction, self.buckets.roles, role, [user_id])
        await self.backend.end(transaction)

    async def remove_user_roles(self, user_id: str, roles: Sequence[str]) -> None:
        """Unassign roles from a user."""
        transaction = self.backend.begin()
        self.backend.remove(transaction, self.buckets.users, user_id, roles)
        for role in roles:
            self.backend.remove(transaction, self.buckets.roles, role, [user_id])
        await self.backend.end(transaction)

    async def add_role_parents(self, role: str, parents: Sequence[str]) -> None:
        """Make ``role`` inherit from every role in ``parents``."""
        transaction = self.backend.begin()
        self.backend.add(transaction, self.buckets.meta, META_ROLES_KEY, [role])
        self.backend.add(transaction, self.buckets.parents, role, parents)
        await self.backend.end(transaction)

    async def remove_role_parents(self, role: str, parents: Optional[Sequence[str]] = None) -> None:
        """Remove hierarchy edges. ``parents=None`` removes all of them."""
        transaction = self.backend.begin()
        if parents is None:
            self.backend.delete(transaction, self.buckets.parents, [role])
        else:
            self.backend.remove(transaction, self.buckets.parents, role, parents)
        await self.backend.end(transaction)

    async def allow(
        self,
        roles: Sequence[str],
        resources: Sequence[str],
        permissions: Sequence[str]
    ) -> None:
        """Grant every permission to every role over every resource."""
        transaction = self.backend.begin()
        self.backend.add(transaction, self.buckets.meta, META_ROLES_KEY, roles)
        for resource in resources:
            bucket = allows_bucket(resource)
            for role in roles:
                self.backend.add(transaction, bucket, role, permissions)
        for role in roles:
            self.backend.add(transaction, self.buckets.resources, role, resources)
        await self.backend.end(transaction)

    async def remove_permissions(
        self,
        role: str,
        resources: Sequence[str],
        permissions: Optional[Sequence[str]] = None
    ) -> None:
        """Revoke permissions of ``role`` over ``resources``.

        ``permissions=None`` revokes everything. A second batch then drops
        each resource the role no longer has any permission on from
        ``resources[role]``.
        """
        transaction = self.backend.begin()
        for resource in resources:
            bucket = allows_bucket(resource)
            if permissions is None:
                self.backend.delete(transaction, bucket, [role])
                self.backend.remove(transaction, self.buckets.resources, role, [resource])
            else:
                self.backend.remove(transaction, bucket, role, permissions)
        await self.backend.end(transaction)

        remaining = await asyncio.gather(
            *(self.backend.get(allows_bucket(resource), role) for resource in resources)
        )
        cleanup = self.backend.begin()
        for resource, granted in zip(resources, remaining):
            if not granted:
                self.backend.remove(cleanup, self.buckets.resources, role, [resource])
        await self.backend.end(cleanup)

    async def remove_role(self, role: str) -> None:
        """Delete a role and all of its grants.

        Users keep the role in ``users[userId]``: finding them would need a
        scan of every user.
        """
        resources = await self.backend.get(self.buckets.resources, role)

        transaction = self.backend.begin()
        for resource in sorted(resources):
            self.backend.delete(transaction, allows_bucket(resource), [role])
        self.backend.delete(transaction, self.buckets.resources, [role])
        self.backend.delete(transaction, self.buckets.parents, [role])
        self.backend.delete(transaction, self.buckets.roles, [role])
        self.backend.remove(transaction, self.buckets.meta, META_ROLES_KEY, [role])
        await self.backend.end(transaction)

    async def remove_resource(self, resource: str) -> None:
        """Delete every grant on a resource."""
        roles = sorted(await self.backend.get(self.buckets.meta, META_ROLES_KEY))

        transaction = self.backend.begin()
        self.backend.delete(transaction, allows_bucket(resource), roles)
        for role in roles:
            self.backend.remove(transaction, self.buckets.resources, role, [resource])
        await self.backend.end(transaction)

