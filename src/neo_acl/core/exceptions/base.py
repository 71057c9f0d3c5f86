"""Base exceptions for neo-acl.

This module defines the root of the neo-acl exception hierarchy. Every
exception carries an error code, optional details and maps onto an HTTP
status code for the middleware boundary.
"""

from typing import Any, Dict, Optional


class NeoAclError(Exception):
    """Base exception for all neo-acl errors.

    All exceptions raised by the library inherit from this class and carry
    structured error information for logging and API responses.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as resolve_status_code
    return resolve_status_code(exception)


def create_error_response(exception: NeoAclError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The neo-acl exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
