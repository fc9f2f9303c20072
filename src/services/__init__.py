"""
Services Package

Menu domain helpers:
- Write-boundary validation of the menu and titles documents
- Price, text and category title formatting for display
"""

from services.menu_format import (
    DEFAULT_CATEGORY_TITLES,
    build_menu_view,
    category_nav_label,
    category_title,
    dietary_tag,
    format_price,
    normalize_price,
    strip_dietary_tags,
    strip_html,
)
from services.menu_schema import CategoryTitle, MenuItem, parse_menu, parse_titles

__all__ = [
    "DEFAULT_CATEGORY_TITLES",
    "build_menu_view",
    "category_nav_label",
    "category_title",
    "dietary_tag",
    "format_price",
    "normalize_price",
    "strip_dietary_tags",
    "strip_html",
    "CategoryTitle",
    "MenuItem",
    "parse_menu",
    "parse_titles",
]
