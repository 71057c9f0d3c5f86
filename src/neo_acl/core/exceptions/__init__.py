"""Exceptions module for neo-acl.

This module provides the complete exception hierarchy for neo-acl,
organized by domain concerns and infrastructure concerns.
"""

from .base import (
    NeoAclError,
    get_http_status_code,
    create_error_response,
)

from .domain import (
    # Configuration Errors
    ConfigurationError,

    # Validation Errors
    ValidationError,
    InvalidGrantError,

    # Authentication / Authorization
    AuthenticationError,
    AuthorizationError,
    PermissionDeniedError,
    AccessCheckError,
)

from .infrastructure import (
    BackendError,
    BackendConnectionError,
    BackendTransactionError,
)

from .http_mapping import HTTP_STATUS_MAP

__all__ = [
    "NeoAclError",
    "get_http_status_code",
    "create_error_response",
    "ConfigurationError",
    "ValidationError",
    "InvalidGrantError",
    "AuthenticationError",
    "AuthorizationError",
    "PermissionDeniedError",
    "AccessCheckError",
    "BackendError",
    "BackendConnectionError",
    "BackendTransactionError",
    "HTTP_STATUS_MAP",
]
