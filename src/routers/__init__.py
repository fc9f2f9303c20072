"""
Routers Package

Contains FastAPI router modules for:
- Admin authentication endpoints
- Menu and category title endpoints
- Admin HTML pages
"""

from routers.admin import router as admin_router
from routers.auth import router as auth_router
from routers.menu import router as menu_router

__all__ = ["admin_router", "auth_router", "menu_router"]
