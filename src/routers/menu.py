"""
Menu Router

Public reads of the menu and category titles, and admin-only full
document saves.
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from auth import RateLimiter, client_identifier
from core.logger import get_logger
from routers.deps import get_content_store, get_rate_limiter, read_json, require_admin
from services import build_menu_view, parse_menu, parse_titles
from services.menu_format import Language
from storage import ContentStore, WriteResult
from storage.base_backend import LOCATION_NONE

logger = get_logger(__name__)

router = APIRouter(prefix="/api/menu", tags=["menu"])

MENU_CACHE_CONTROL = "public, s-maxage=60, stale-while-revalidate=300"


def _write_response(result: WriteResult, body: dict) -> JSONResponse:
    # Nothing absorbed the write: every available tier failed
    status_code = 500 if result.storage_location == LOCATION_NONE else 200
    return JSONResponse(body, status_code=status_code)


@router.get("")
async def get_menu(store: ContentStore = Depends(get_content_store)):
    """Menu items by category, from the best available tier."""
    menu = await store.menu.read()
    return JSONResponse(menu, headers={"Cache-Control": MENU_CACHE_CONTROL})


@router.post("", dependencies=[Depends(require_admin)])
async def save_menu(
    request: Request,
    store: ContentStore = Depends(get_content_store),
    limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Replace the whole menu document.

    Returns:
        {"success": bool, "message": str, "storageLocation": "remote"|"local"|"none"}

    Raises:
        400: If the body is not a non-empty menu object
        401: Without an admin session
        429: When the client exceeded the write rate limit
    """
    limiter.hit(client_identifier(request))

    menu = parse_menu(await read_json(request))
    result = await store.menu.write(menu)
    logger.info(f"Menu saved ({len(menu)} categories) -> {result.storage_location}")

    return _write_response(result, result.to_response())


@router.get("/titles")
async def get_titles(store: ContentStore = Depends(get_content_store)):
    """Category titles keyed by category."""
    return await store.titles.read()


@router.post("/titles", dependencies=[Depends(require_admin)])
async def save_titles(request: Request, store: ContentStore = Depends(get_content_store)):
    """Replace the category titles document."""
    titles = parse_titles(await read_json(request))
    result = await store.titles.write(titles)

    return _write_response(result, {"success": result.success, "message": result.message})


@router.get("/view")
async def get_menu_view(
    lang: Language = Query("en"),
    store: ContentStore = Depends(get_content_store),
):
    """Display-ready menu: titles resolved, prices formatted, dietary badges extracted."""
    menu = await store.menu.read()
    titles = await store.titles.read()
    return {
        "language": lang,
        "sections": build_menu_view(menu, titles, lang),
    }
