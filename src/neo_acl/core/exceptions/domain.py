"""Domain exceptions for neo-acl.

Errors raised for configuration problems, malformed grant documents and
the authentication/authorization outcomes surfaced at the HTTP boundary.
"""

from .base import NeoAclError


# Configuration Errors
class ConfigurationError(NeoAclError):
    """Raised when the engine cannot be wired from its settings."""
    pass


# Validation Errors
class ValidationError(NeoAclError):
    """Raised when an input document does not have the expected shape."""
    pass


class InvalidGrantError(ValidationError):
    """Raised when a compact grant document cannot be parsed."""
    pass


# Authentication Errors
class AuthenticationError(NeoAclError):
    """Raised when no principal can be resolved for a request."""
    pass


# Authorization Errors
class AuthorizationError(NeoAclError):
    """Base class for authorization failures."""
    pass


class PermissionDeniedError(AuthorizationError):
    """Raised when a principal lacks the permissions for a resource."""
    pass


class AccessCheckError(NeoAclError):
    """Raised when an access check could not be completed."""
    pass
