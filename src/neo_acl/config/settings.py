"""
Settings for the neo-acl engine.

Environment-driven configuration for backend selection, Redis connection
parameters and bucket naming.
"""
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AclBackendType(str, Enum):
    """Supported storage backends."""
    MEMORY = "memory"
    REDIS = "redis"


class AclSettings(BaseSettings):
    """Access control settings loaded from ``NEO_ACL_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_ACL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Backend selection
    backend: AclBackendType = Field(default=AclBackendType.MEMORY, description="Storage backend")

    # Redis configuration
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    redis_max_connections: int = Field(default=50, ge=1, description="Max Redis connections")
    redis_socket_timeout: float = Field(default=3.0, gt=0, description="Redis command timeout in seconds")
    key_prefix: str = Field(default="acl", description="Prefix for every backend key")

    # Bucket names
    meta_bucket: str = Field(default="meta", description="Bucket holding the user and role registries")
    parents_bucket: str = Field(default="parents", description="Bucket holding role hierarchy edges")
    resources_bucket: str = Field(default="resources", description="Bucket holding resources per role")
    roles_bucket: str = Field(default="roles", description="Bucket holding users per role")
    users_bucket: str = Field(default="users", description="Bucket holding roles per user")

    # Middleware behaviour
    log_denied_permissions: bool = Field(
        default=False,
        description="Log the principal's allowed permissions after a denied request"
    )

    @field_validator('redis_url')
    @classmethod
    def validate_redis_url(cls, v: str) -> str:
        """Validate Redis URL scheme."""
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError(f"Invalid Redis URL: {v}. Expected redis://, rediss:// or unix://")
        return v

    @field_validator('meta_bucket', 'parents_bucket', 'resources_bucket', 'roles_bucket', 'users_bucket')
    @classmethod
    def validate_bucket_name(cls, v: str) -> str:
        """Bucket names must not be empty or collide with the permission prefix."""
        if not v:
            raise ValueError("Bucket name must not be empty")
        if v.startswith("allows_"):
            raise ValueError(f"Bucket name {v} collides with the permission bucket prefix")
        return v


@lru_cache()
def get_settings() -> AclSettings:
    """Get cached settings instance."""
    return AclSettings()
