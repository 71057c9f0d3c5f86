"""Access control middleware for FastAPI/Starlette applications.

Derives a principal, a resource and the requested actions from each
request and asks :class:`AclService` whether the request may proceed.
"""

import inspect
import logging
from typing import Any, Callable, List, Optional, Union

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .services.acl_service import AclService
from .utils.normalization import Name, Names, make_list
from ...core.exceptions import (
    AccessCheckError,
    AuthenticationError,
    NeoAclError,
    PermissionDeniedError,
    create_error_response,
    get_http_status_code,
)

module_logger = logging.getLogger(__name__)

UserIdSource = Union[Name, Callable[[Request], Any], None]


class AclMiddleware(BaseHTTPMiddleware):
    """Rejects requests whose principal lacks the permissions for the URL.

    Outcomes:
    - no principal: 401
    - principal without the permissions: 403
    - access check failure (backend error): 500
    """

    def __init__(
        self,
        app,
        acl: AclService,
        *,
        num_path_components: Optional[int] = None,
        user_id: UserIdSource = None,
        actions: Optional[Names] = None,
        logger: Optional[logging.Logger] = None,
        log_denied_permissions: bool = False,
        exempt_paths: Optional[List[str]] = None
    ):
        """Initialize access control middleware.

        Args:
            app: ASGI application
            acl: Access control service
            num_path_components: Number of leading path components forming the
                resource; the whole path when not given
            user_id: Fixed principal id, or a callable (sync or async) taking
                the request; falls back to ``request.state.user_id`` and
                ``request.state.user.id``
            actions: Fixed action(s) to check; the lower-cased HTTP method
                when not given
            logger: Logger for access decisions
            log_denied_permissions: Log the principal's allowed permissions
                on the resource after a denial
            exempt_paths: Path prefixes that skip the check
        """
        super().__init__(app)
        self.acl = acl
        self.num_path_components = num_path_components
        self.user_id = user_id
        self.actions = make_list(actions) if actions is not None else None
        self.logger = logger or module_logger
        self.log_denied_permissions = log_denied_permissions
        self.exempt_paths = exempt_paths or []

    async def dispatch(self, request: Request, call_next) -> Response:
        """Check access before passing the request on."""
        if any(request.url.path.startswith(path) for path in self.exempt_paths):
            return await call_next(request)

        user_id = await self._resolve_user_id(request)
        if user_id is None or user_id == "":
            return self._error_response(AuthenticationError("User not authenticated"))

        resource = self._resource_for(request)
        actions = self.actions or [request.method.lower()]

        self.logger.debug(f"Requesting {actions} on {resource} by user {user_id}")

        try:
            allowed = await self.acl.is_allowed(user_id, resource, actions)
        except Exception as e:
            self.logger.error(f"Error checking permissions of user {user_id} on {resource}: {e}")
            return self._error_response(AccessCheckError("Error checking permissions to access resource"))

        if not allowed:
            self.logger.debug(f"Not allowed {actions} on {resource} by user {user_id}")
            if self.log_denied_permissions:
                await self._log_allowed_permissions(user_id, resource)
            return self._error_response(
                PermissionDeniedError(
                    "Insufficient permissions to access resource",
                    details={"resource": resource, "actions": actions}
                )
            )

        self.logger.debug(f"Allowed {actions} on {resource} by user {user_id}")
        return await call_next(request)

    async def _resolve_user_id(self, request: Request) -> Optional[Name]:
        if callable(self.user_id):
            user_id = self.user_id(request)
            if inspect.isawaitable(user_id):
                user_id = await user_id
            return user_id

        if self.user_id is not None:
            return self.user_id

        user_id = getattr(request.state, "user_id", None)
        if user_id is not None:
            return user_id

        user = getattr(request.state, "user", None)
        return getattr(user, "id", None)

    def _resource_for(self, request: Request) -> str:
        path = request.url.path
        if not self.num_path_components:
            return path
        return "/".join(path.split("/")[: self.num_path_components + 1])

    async def _log_allowed_permissions(self, user_id: Name, resource: str) -> None:
        try:
            permissions = await self.acl.allowed_permissions(user_id, resource)
            self.logger.debug(f"Allowed permissions: {permissions}")
        except Exception as e:
            self.logger.warning(f"Could not load allowed permissions of user {user_id}: {e}")

    def _error_response(self, error: NeoAclError) -> JSONResponse:
        return JSONResponse(
            status_code=get_http_status_code(error),
            content=create_error_response(error)
        )
