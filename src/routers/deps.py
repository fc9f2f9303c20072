"""
Request dependencies.

Services are built once by main.create_app() and attached to app.state;
handlers receive them through these FastAPI dependencies.
"""

from typing import Any

import orjson
from fastapi import Depends, Request

from auth import SESSION_COOKIE, CredentialVerifier, RateLimiter, SessionGuard
from core.exceptions import MalformedInput, NotAuthenticated
from core.settings import Settings
from storage import ContentStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_content_store(request: Request) -> ContentStore:
    return request.app.state.content_store


def get_credential_verifier(request: Request) -> CredentialVerifier:
    return request.app.state.credential_verifier


def get_session_guard(request: Request) -> SessionGuard:
    return request.app.state.session_guard


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def require_admin(request: Request, guard: SessionGuard = Depends(get_session_guard)) -> dict[str, Any]:
    """
    Reject API calls without a valid admin session.

    The request gate only covers admin pages, so write endpoints
    check the session themselves.
    """
    verdict = guard.verify(request.cookies.get(SESSION_COOKIE))
    if not verdict.valid:
        raise NotAuthenticated()
    return verdict.claims


async def read_json(request: Request) -> Any:
    """Decode the request body, MalformedInput if it is not JSON."""
    body = await request.body()
    try:
        return orjson.loads(body)
    except orjson.JSONDecodeError as e:
        raise MalformedInput("Request body must be valid JSON") from e
