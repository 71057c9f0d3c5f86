"""Infrastructure-specific exceptions for neo-acl.

Storage adapters translate driver errors into these types so callers only
deal with one error family regardless of the backend in use.
"""

from .base import NeoAclError


# Backend Errors
class BackendError(NeoAclError):
    """Base class for storage backend errors."""
    pass


class BackendConnectionError(BackendError):
    """Raised when the backend connection fails."""
    pass


class BackendTransactionError(BackendError):
    """Raised when a queued batch cannot be applied."""
    pass
