"""
Auth Router

Login, logout and session check for the admin panel. The session token
travels only in an HTTP-only cookie.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from auth import SESSION_COOKIE, CredentialVerifier, SessionGuard
from core.exceptions import InvalidCredentials, MalformedInput
from core.logger import get_logger
from core.settings import Settings
from routers.deps import get_app_settings, get_credential_verifier, get_session_guard, read_json

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(
    request: Request,
    verifier: CredentialVerifier = Depends(get_credential_verifier),
    settings: Settings = Depends(get_app_settings),
):
    """
    Exchange the admin password for a session cookie.

    Body: {"password": "..."}

    Returns:
        {"success": true} with the session cookie set

    Raises:
        400: If the body has no password
        401: If the password is wrong
    """
    payload = await read_json(request)
    password = payload.get("password") if isinstance(payload, dict) else None
    if not isinstance(password, str):
        raise MalformedInput("Password is required")

    try:
        token = verifier.issue(password)
    except InvalidCredentials as e:
        return JSONResponse({"success": False, "error": e.message}, status_code=e.status_code)

    response = JSONResponse({"success": True})
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=verifier.token_ttl,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="strict",
    )
    return response


@router.post("/logout")
async def logout():
    """Clear the session cookie."""
    response = JSONResponse({"success": True})
    response.delete_cookie(SESSION_COOKIE, path="/")
    logger.info("Admin logged out")
    return response


@router.get("/check")
async def check(request: Request, guard: SessionGuard = Depends(get_session_guard)):
    """Report whether the caller holds a valid admin session."""
    verdict = guard.verify(request.cookies.get(SESSION_COOKIE))
    return {"isAuthenticated": verdict.valid}
