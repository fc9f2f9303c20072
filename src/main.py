"""
Ara Menu Server

FastAPI application serving a bilingual (English/Turkish) restaurant
menu with a password-protected admin panel for editing it.

Menu content lives in a tiered store:
- remote: Upstash-compatible Redis REST store (source of truth)
- local: same-host JSON cache
- bundled: default documents shipped in data/

Usage:
    uvicorn main:create_app --factory --host 0.0.0.0 --port 8080

Or run directly:
    python main.py
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth import AuthMiddleware, CredentialVerifier, RateLimiter, SessionGuard
from core.exceptions import MenuServerError
from core.logger import get_logger, setup_logging
from core.settings import Settings, get_allowed_origins, get_settings
from routers import admin_router, auth_router, menu_router
from storage import ContentStore, create_content_store

logger = get_logger(__name__)


def _log_startup(settings: Settings, store: ContentStore) -> None:
    logger.info("=" * 60)
    logger.info("Ara Menu Server Starting")
    logger.info("=" * 60)
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Remote store: {'Configured' if settings.has_remote_config else 'Not configured (local-only mode)'}")
    logger.info(f"Storage tiers: {', '.join(f'{k}={v}' for k, v in store.tier_status().items())}")
    logger.info(f"Data dir: {settings.data_dir}")
    logger.info(f"Cache dir: {settings.cache_dir or 'disabled'}")
    logger.info(f"Write rate limit: {settings.rate_limit_max} per {settings.rate_limit_window:g}s")
    logger.info(f"Debug: {settings.debug}")
    logger.info("=" * 60)


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(MenuServerError)
    async def menu_error_handler(request: Request, exc: MenuServerError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
            return JSONResponse({"success": False, "message": exc.public_message}, status_code=exc.status_code)
        return JSONResponse({"success": False, "message": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"success": False, "message": "Invalid request"}, status_code=400)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unexpected error on {request.method} {request.url.path}")
        return JSONResponse({"success": False, "message": "Internal server error"}, status_code=500)


def create_app(
    settings: Settings | None = None,
    content_store: ContentStore | None = None,
    rate_limiter: RateLimiter | None = None,
) -> FastAPI:
    """
    Build the application and its services.

    Services are constructed once here and shared through app.state.
    Missing JWT_SECRET or ADMIN_PASSWORD raises ConfigurationError, so a
    misconfigured process never starts serving.

    Args:
        settings: Application settings (loaded from the environment if omitted)
        content_store: Storage override, used by tests with fake tiers
        rate_limiter: Rate limiter override, used by tests with a fake clock
    """
    settings = settings or get_settings()

    # Setup logging based on settings
    setup_logging("DEBUG" if settings.debug else "INFO")

    credential_verifier = CredentialVerifier(
        admin_password=settings.admin_password,
        secret_key=settings.jwt_secret,
        token_ttl=settings.session_ttl,
    )
    session_guard = SessionGuard(settings.jwt_secret)
    store = content_store or create_content_store(settings)
    limiter = rate_limiter or RateLimiter(
        max_requests=settings.rate_limit_max,
        window=settings.rate_limit_window,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager: startup banner and storage shutdown."""
        _log_startup(settings, store)
        yield
        logger.info("Shutting down...")
        await store.close()

    app = FastAPI(
        title="Ara Menu Server",
        description="""
        Bilingual restaurant menu with a password-protected admin panel.

        ## Endpoints

        - `GET /api/menu` - Menu items by category
        - `POST /api/menu` - Replace the menu (admin, rate-limited)
        - `GET /api/menu/titles` - Category titles
        - `POST /api/menu/titles` - Replace category titles (admin)
        - `GET /api/menu/view?lang=en|tr` - Display-ready menu
        - `POST /api/auth/login`, `POST /api/auth/logout`, `GET /api/auth/check`
        """,
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.credential_verifier = credential_verifier
    app.state.session_guard = session_guard
    app.state.content_store = store
    app.state.rate_limiter = limiter

    app.add_middleware(AuthMiddleware, guard=session_guard)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(menu_router)
    app.include_router(admin_router)

    @app.get("/")
    async def root():
        """Root endpoint with server information."""
        return {
            "name": "Ara Menu Server",
            "version": "1.0.0",
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for container orchestration."""
        return {
            "status": "healthy",
            "storage": store.tier_status(),
        }

    return app


if __name__ == "__main__":
    settings = get_settings()

    uvicorn.run(
        "main:create_app",
        factory=True,
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
