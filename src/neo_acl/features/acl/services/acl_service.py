"""Access control service.

Public entry point of the engine. Every method accepts a single name or a
collection of names and normalizes it before handing over to the
resolver, evaluator, mutation and grant services. All state lives in the
backend; the service only holds its collaborators and bucket names.
"""

from typing import Dict, Iterable, List, Optional, Union

from ..entities.buckets import BucketNames
from ..entities.protocols import AclBackend
from ..utils.normalization import Name, Names, make_list, make_optional_list
from .grant_demultiplexer import GrantDemultiplexer, GrantDocument
from .mutation_service import MutationService
from .permission_evaluator import PermissionEvaluator
from .role_graph import RoleGraphResolver


class AclService:
    """Hierarchical role-based access control over a pluggable backend."""

    def __init__(self, backend: AclBackend, buckets: Optional[BucketNames] = None):
        self.backend = backend
        self.buckets = buckets or BucketNames()

        self.resolver = RoleGraphResolver(backend, self.buckets)
        self.evaluator = PermissionEvaluator(backend, self.resolver)
        self.mutations = MutationService(backend, self.buckets)
        self.grants = GrantDemultiplexer(self.mutations)

    # User / role assignment

    async def add_user_roles(self, user_id: Name, roles: Names) -> None:
        """Add roles to a user."""
        await self.mutations.add_user_roles(str(user_id), make_list(roles))

    async def remove_user_roles(self, user_id: Name, roles: Names) -> None:
        """Remove roles from a user."""
        await self.mutations.remove_user_roles(str(user_id), make_list(roles))

    async def user_roles(self, user_id: Name) -> List[str]:
        """Roles directly assigned to a user."""
        return sorted(await self.resolver.user_roles(str(user_id)))

    async def role_users(self, role: Name) -> List[str]:
        """Users directly assigned a role."""
        return sorted(await self.resolver.role_users(str(role)))

    async def has_role(self, user_id: Name, role: Name) -> bool:
        """Whether the user is directly assigned the role."""
        return str(role) in await self.resolver.user_roles(str(user_id))

    # Role hierarchy

    async def add_role_parents(self, role: Name, parents: Names) -> None:
        """Make ``role`` inherit from the given parent role(s)."""
        await self.mutations.add_role_parents(str(role), make_list(parents))

    async def remove_role_parents(self, role: Name, parents: Optional[Names] = None) -> None:
        """Remove parent role(s); without ``parents`` every parent is removed."""
        await self.mutations.remove_role_parents(str(role), make_optional_list(parents))

    async def remove_role(self, role: Name) -> None:
        """Remove a role and its grants. Users assigned the role keep it listed."""
        await self.mutations.remove_role(str(role))

    async def remove_resource(self, resource: Name) -> None:
        """Remove every grant on a resource."""
        await self.mutations.remove_resource(str(resource))

    # Grants

    async def allow(self, roles: Names, resources: Names, permissions: Names) -> None:
        """Grant permissions to roles over resources."""
        await self.mutations.allow(make_list(roles), make_list(resources), make_list(permissions))

    async def allow_compact(self, grants: Union[GrantDocument, Iterable[GrantDocument]]) -> int:
        """Apply compact grant documents, one ``allow`` call per resource grant."""
        return await self.grants.apply(grants)

    async def remove_allow(self, role: Name, resources: Names, permissions: Optional[Names] = None) -> None:
        """Revoke permissions; without ``permissions`` revokes everything on the resources."""
        await self.remove_permissions(role, resources, permissions)

    async def remove_permissions(
        self,
        role: Name,
        resources: Names,
        permissions: Optional[Names] = None
    ) -> None:
        """Revoke permissions of a role over resources."""
        await self.mutations.remove_permissions(
            str(role), make_list(resources), make_optional_list(permissions)
        )

    # Queries

    async def allowed_permissions(self, user_id: Optional[Name], resources: Names) -> Dict[str, List[str]]:
        """Map each resource to the permissions the user holds on it."""
        if user_id is None or user_id == "":
            return {}
        return await self.evaluator.allowed_permissions(str(user_id), make_list(resources))

    async def optimized_allowed_permissions(
        self,
        user_id: Optional[Name],
        resources: Names
    ) -> Dict[str, List[str]]:
        """:meth:`allowed_permissions` through the backend's bulk union query."""
        if user_id is None or user_id == "":
            return {}
        return await self.evaluator.optimized_allowed_permissions(str(user_id), make_list(resources))

    async def is_allowed(self, user_id: Name, resource: Name, permissions: Names) -> bool:
        """Whether the user holds every permission on the resource."""
        return await self.evaluator.is_allowed(str(user_id), str(resource), make_list(permissions))

    async def are_any_roles_allowed(self, roles: Names, resource: Name, permissions: Names) -> bool:
        """Whether the roles, together with their ancestors, hold every permission."""
        return await self.evaluator.are_any_roles_allowed(
            make_list(roles), str(resource), make_list(permissions)
        )

    async def what_resources(
        self,
        roles: Names,
        permissions: Optional[Names] = None
    ) -> Union[Dict[str, List[str]], List[str]]:
        """Resources the roles hold grants on.

        Returns a resource -> permissions mapping, or the list of resources
        holding any of ``permissions`` when they are given.
        """
        return await self.evaluator.what_resources(make_list(roles), make_optional_list(permissions))

    async def permitted_resources(
        self,
        roles: Names,
        permissions: Optional[Names] = None
    ) -> Union[Dict[str, List[str]], List[str]]:
        """Alias of :meth:`what_resources`."""
        return await self.what_resources(roles, permissions)

