"""
Admin Request Gate

Starlette middleware guarding the admin pages. Runs once per request,
before routing:

- auth endpoints, declared public pages and static assets pass untouched
- protected paths without a session cookie redirect to the login page
- protected paths with an invalid or expired cookie redirect to the login
  page and clear the cookie
- protected paths with a valid session pass through
"""

import re

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from auth.token_manager import SessionGuard
from core.logger import get_logger

logger = get_logger(__name__)

SESSION_COOKIE = "auth_token"
LOGIN_PATH = "/admin/login"

PROTECTED_ROUTE = re.compile(r"^/admin(?:/|$)")
AUTH_ROUTE = re.compile(r"^/api/auth")
STATIC_FILE = re.compile(r"^/favicon\.ico$|^/static/|\.(?:svg|png|jpg|jpeg|gif|webp|css|js)$")
PUBLIC_ROUTES = frozenset({LOGIN_PATH})


def is_exempt(path: str) -> bool:
    """Paths that bypass the gate regardless of session state."""
    return bool(STATIC_FILE.search(path) or AUTH_ROUTE.match(path) or path in PUBLIC_ROUTES)


def is_protected(path: str) -> bool:
    return bool(PROTECTED_ROUTE.match(path))


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE, path="/")


class AuthMiddleware(BaseHTTPMiddleware):
    """Redirects unauthenticated requests for admin pages to the login page."""

    def __init__(self, app: ASGIApp, guard: SessionGuard, login_path: str = LOGIN_PATH):
        super().__init__(app)
        self.guard = guard
        self.login_path = login_path

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path

        if is_exempt(path) or not is_protected(path):
            return await call_next(request)

        token = request.cookies.get(SESSION_COOKIE)
        if not token:
            logger.debug(f"No session for {path}, redirecting to login")
            return RedirectResponse(self.login_path)

        if not self.guard.verify(token).valid:
            logger.info(f"Invalid session for {path}, clearing cookie")
            response = RedirectResponse(self.login_path)
            clear_session_cookie(response)
            return response

        return await call_next(request)
