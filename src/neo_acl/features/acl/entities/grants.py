"""Compact grant documents.

A compact grant bundles several resource/permission pairs for the same
roles::

    [
        {"roles": ["guest", "member"],
         "allows": [
             {"resources": "blogs", "permissions": "get"},
             {"resources": ["forums", "news"], "permissions": ["get", "put", "delete"]},
         ]},
    ]
"""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator


def _as_name_list(value: Any) -> Any:
    """Accept a single name where a list of names is expected."""
    if isinstance(value, (str, int)):
        return [str(value)]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(item) if isinstance(item, int) else item for item in value]
    return value


class ResourceGrant(BaseModel):
    """Permissions granted over one or more resources."""

    resources: List[str] = Field(..., min_length=1, description="Resources the permissions apply to")
    permissions: List[str] = Field(..., min_length=1, description="Permissions to grant")

    @field_validator('resources', 'permissions', mode='before')
    @classmethod
    def normalize_names(cls, v: Any) -> Any:
        return _as_name_list(v)


class CompactGrant(BaseModel):
    """Grants shared by a group of roles."""

    roles: List[str] = Field(..., min_length=1, description="Roles receiving the grants")
    allows: List[ResourceGrant] = Field(default_factory=list, description="Resource grants")

    @field_validator('roles', mode='before')
    @classmethod
    def normalize_roles(cls, v: Any) -> Any:
        return _as_name_list(v)


class GrantCall(BaseModel):
    """One primitive ``allow(roles, resources, permissions)`` invocation."""

    roles: List[str]
    resources: List[str]
    permissions: List[str]
