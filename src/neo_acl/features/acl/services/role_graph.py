"""Role hierarchy resolution.

Roles inherit from their parents transitively. The closure is computed
breadth-first, one ``parents`` union per hierarchy level, and a visited
set keeps a cyclic hierarchy from being expanded forever.
"""

from typing import Sequence, Set

from ..entities.buckets import BucketNames
from ..entities.protocols import AclBackend


class RoleGraphResolver:
    """Reads role and user hierarchies from the backend."""

    def __init__(self, backend: AclBackend, buckets: BucketNames):
        self.backend = backend
        self.buckets = buckets

    async def user_roles(self, user_id: str) -> Set[str]:
        """Roles directly assigned to a user."""
        return await self.backend.get(self.buckets.users, user_id)

    async def role_users(self, role: str) -> Set[str]:
        """Users directly assigned a role."""
        return await self.backend.get(self.buckets.roles, role)

    async def roles_parents(self, roles: Sequence[str]) -> Set[str]:
        """Direct parents of any of the given roles."""
        if not roles:
            return set()
        return await self.backend.union(self.buckets.parents, list(roles))

    async def all_roles(self, roles: Sequence[str]) -> Set[str]:
        """The given roles plus every ancestor reachable through ``parents``."""
        closure = set(roles)
        frontier = set(roles)
        while frontier:
            parents = await self.roles_parents(sorted(frontier))
            frontier = parents - closure
            closure |= frontier
        return closure

    async def all_user_roles(self, user_id: str) -> Set[str]:
        """Every role a user holds, directly or through inheritance."""
        roles = await self.user_roles(user_id)
        if not roles:
            return set()
        return await self.all_roles(sorted(roles))
