"""Access control services: resolution, evaluation and mutation."""

from .acl_service import AclService
from .grant_demultiplexer import GrantDemultiplexer
from .mutation_service import MutationService
from .permission_evaluator import PermissionEvaluator
from .role_graph import RoleGraphResolver

__all__ = [
    "AclService",
    "GrantDemultiplexer",
    "MutationService",
    "PermissionEvaluator",
    "RoleGraphResolver",
]
