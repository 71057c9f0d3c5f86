"""Permission evaluation over the role hierarchy.

Grants are looked up level by level: first the roles themselves, then
their parents, then the grandparents and so on. The allow check stops as
soon as every requested permission has been found at some level, or a
level grants the wildcard.
"""

import asyncio
from typing import Dict, List, Optional, Sequence, Set, Union

from ..entities.buckets import WILDCARD, allows_bucket, resource_from_allows_bucket
from ..entities.protocols import AclBackend, SupportsUnions
from .role_graph import RoleGraphResolver


class PermissionEvaluator:
    """Answers permission queries for users and role sets."""

    def __init__(self, backend: AclBackend, resolver: RoleGraphResolver):
        self.backend = backend
        self.resolver = resolver

    async def resource_permissions(self, roles: Sequence[str], resource: str) -> Set[str]:
        """Permissions the roles and their ancestors hold on ``resource``."""
        if not roles:
            return set()

        bucket = allows_bucket(resource)
        granted: Set[str] = set()
        visited = set(roles)
        frontier = sorted(visited)
        while frontier:
            granted |= await self.backend.union(bucket, frontier)
            parents = await self.resolver.roles_parents(frontier)
            fresh = parents - visited
            visited |= fresh
            frontier = sorted(fresh)
        return granted

    async def check_permissions(
        self,
        roles: Sequence[str],
        resource: str,
        permissions: Sequence[str]
    ) -> bool:
        """True when the hierarchy above ``roles`` covers every permission."""
        bucket = allows_bucket(resource)
        remaining = list(permissions)
        visited = set(roles)
        frontier = sorted(visited)
        while True:
            granted = await self.backend.union(bucket, frontier)
            if WILDCARD in granted:
                return True

            remaining = [p for p in remaining if p not in granted]
            if not remaining:
                return True

            parents = await self.resolver.roles_parents(frontier)
            fresh = parents - visited
            if not fresh:
                return False
            visited |= fresh
            frontier = sorted(fresh)

    async def are_any_roles_allowed(
        self,
        roles: Sequence[str],
        resource: str,
        permissions: Sequence[str]
    ) -> bool:
        """True if the given roles, taken together, hold every permission."""
        if not roles:
            return False
        return await self.check_permissions(roles, resource, permissions)

    async def is_allowed(self, user_id: str, resource: str, permissions: Sequence[str]) -> bool:
        """True if the user's roles hold every permission on ``resource``."""
        roles = await self.resolver.user_roles(user_id)
        if not roles:
            return False
        return await self.check_permissions(sorted(roles), resource, permissions)

    async def allowed_permissions(
        self,
        user_id: Optional[str],
        resources: Sequence[str]
    ) -> Dict[str, List[str]]:
        """Map each resource to the permissions the user holds on it."""
        if not user_id:
            return {}

        if isinstance(self.backend, SupportsUnions):
            return await self.optimized_allowed_permissions(user_id, resources)

        roles = sorted(await self.resolver.user_roles(user_id))
        permissions = await asyncio.gather(
            *(self.resource_permissions(roles, resource) for resource in resources)
        )
        return {resource: sorted(granted) for resource, granted in zip(resources, permissions)}

    async def optimized_allowed_permissions(
        self,
        user_id: Optional[str],
        resources: Sequence[str]
    ) -> Dict[str, List[str]]:
        """Same as :meth:`allowed_permissions` using one bulk ``unions`` query."""
        if not user_id:
            return {}

        roles = await self.resolver.all_user_roles(user_id)
        buckets = [allows_bucket(resource) for resource in resources]
        if not roles:
            response: Dict[str, Set[str]] = {bucket: set() for bucket in buckets}
        elif isinstance(self.backend, SupportsUnions):
            response = await self.backend.unions(buckets, sorted(roles))
        else:
            unions = await asyncio.gather(
                *(self.backend.union(bucket, sorted(roles)) for bucket in buckets)
            )
            response = dict(zip(buckets, unions))

        return {
            resource_from_allows_bucket(bucket): sorted(granted)
            for bucket, granted in response.items()
        }

    async def roles_resources(self, roles: Sequence[str]) -> Set[str]:
        """Resources any role in the hierarchy above ``roles`` has grants on."""
        all_roles = sorted(await self.resolver.all_roles(roles))
        per_role = await asyncio.gather(
            *(self.backend.get(self.resolver.buckets.resources, role) for role in all_roles)
        )
        resources: Set[str] = set()
        for role_resources in per_role:
            resources |= role_resources
        return resources

    async def what_resources(
        self,
        roles: Sequence[str],
        permissions: Optional[Sequence[str]] = None
    ) -> Union[Dict[str, List[str]], List[str]]:
        """Resources the roles can act on.

        Without ``permissions`` returns a mapping of resource to granted
        permissions. With ``permissions`` returns the resources where at least
        one of them is granted.

        A ``"*"`` grant matches every requested permission here, as it does in
        :meth:`check_permissions`, so a resource granted only the wildcard is
        listed for any permission. This goes beyond a plain intersection of
        requested and granted names.
        """
        resources = sorted(await self.roles_resources(roles))
        granted = await asyncio.gather(
            *(self.resource_permissions(roles, resource) for resource in resources)
        )

        if permissions is None:
            return {resource: sorted(perms) for resource, perms in zip(resources, granted)}

        wanted = set(permissions)
        return [
            resource
            for resource, perms in zip(resources, granted)
            if WILDCARD in perms or wanted & perms
        ]
