"""
Admin session authentication middleware.

Requests to the license management and admin account APIs must carry a valid
admin session, either as `Authorization: Bearer <token>` or in the session
cookie set at login.
"""

import logging
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from accounts.infrastructure.sessions import SignedTokenSessionIssuer

logger = logging.getLogger(__name__)

PROTECTED_PREFIXES = (
    "/api/v1/licenses",
    "/api/v1/admin/",
    "/api/v1/auth/session",
)

_session_issuer = SignedTokenSessionIssuer()


def get_session_token(request: HttpRequest) -> Optional[str]:
    """Return the bearer token, falling back to the session cookie."""
    authorization = request.headers.get("Authorization", "")
    if authorization.startswith("Bearer "):
        token = authorization[len("Bearer "):].strip()
        if token:
            return token
    return request.COOKIES.get(settings.ADMIN_SESSION_COOKIE_NAME) or None


class AdminSessionMiddleware(MiddlewareMixin):
    """
    Middleware for admin session authentication.

    This middleware:
    1. Resolves the session credential on every request, if one is present
    2. Stores the identity as request.admin_session
    3. Returns 401 Unauthorized for protected paths without a valid session
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate the admin session.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        token = get_session_token(request)
        identity = _session_issuer.resolve(token) if token else None
        request.admin_session = identity  # type: ignore

        if not self._is_protected(request.path):
            return None

        if identity is None:
            logger.warning(
                "Unauthenticated request to protected path",
                extra={"path": request.path, "had_credential": bool(token)},
            )
            return JsonResponse(
                {
                    "error": {
                        "code": "UNAUTHORIZED",
                        "message": "Authentication required. Please sign in.",
                    }
                },
                status=401,
            )

        return None

    def _is_protected(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in PROTECTED_PREFIXES)
