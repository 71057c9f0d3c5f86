"""HTTP status code mapping for exceptions."""

from typing import Dict, Type

from .base import NeoAclError
from .domain import (
    AccessCheckError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    InvalidGrantError,
    PermissionDeniedError,
    ValidationError,
)
from .infrastructure import BackendConnectionError, BackendError, BackendTransactionError


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    ValidationError: 400,
    InvalidGrantError: 400,

    # 401 Unauthorized
    AuthenticationError: 401,

    # 403 Forbidden
    AuthorizationError: 403,
    PermissionDeniedError: 403,

    # 500 Internal Server Error
    AccessCheckError: 500,
    ConfigurationError: 500,
    BackendError: 500,
    BackendTransactionError: 500,

    # 503 Service Unavailable
    BackendConnectionError: 503,

    # Default for NeoAclError
    NeoAclError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Resolve the HTTP status for an exception through its class hierarchy.

    Args:
        exception: The exception instance

    Returns:
        The status of the closest mapped class, 500 when none is mapped
    """
    for exception_type in type(exception).__mro__:
        if exception_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_type]
    return 500
