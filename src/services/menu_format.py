"""
Menu text and price formatting.

One canonical price rule is shared by the write boundary (menu_schema)
and the display view, so stored and displayed prices never disagree.
"""

import re
from decimal import Decimal
from typing import Any, Literal

Language = Literal["en", "tr"]

CURRENCY_SUFFIX = "TL"

HTML_TAG = re.compile(r"<[^>]*>?")
NON_PRICE_CHARS = re.compile(r"[^0-9.]")
DIETARY_TAG = re.compile(r"\((V[gt]/?V?[gt]?)\)", re.IGNORECASE)
PARENTHESIZED = re.compile(r"\(.*?\)")

# Used for category keys without a stored title
DEFAULT_CATEGORY_TITLES: dict[str, dict[str, str]] = {
    "breakfast": {"en": "Breakfast", "tr": "Kahvaltı"},
    "salads": {"en": "Salads", "tr": "Salatalar"},
    "snacks": {"en": "Snacks", "tr": "Atıştırmalıklar"},
    "pastas": {"en": "Pastas", "tr": "Makarnalar"},
    "mainDishes": {"en": "Main Dishes", "tr": "Ana Yemekler"},
    "desserts": {"en": "Desserts", "tr": "Tatlılar"},
    "coldBeverages": {"en": "Cold Beverages", "tr": "Soğuk İçecekler"},
    "coffee": {"en": "Coffee", "tr": "Kahve"},
    "tea": {"en": "Tea", "tr": "Çay"},
}


def strip_html(text: str | None) -> str:
    if not text:
        return ""
    return HTML_TAG.sub("", text).strip()


def normalize_price(price: Any) -> str:
    """
    Reduce a price to digits and at most one decimal point.

    The first decimal point wins and later fragments are concatenated:
    "250 TL" -> "250", "250.5abc" -> "250.5", "25.0.5" -> "25.05".
    Empty or non-numeric input becomes "0".
    """
    if price is None:
        return "0"
    if isinstance(price, float):
        # Avoid exponent notation, 1e-05 must not become "105"
        price = format(Decimal(repr(price)), "f")

    numeric = NON_PRICE_CHARS.sub("", str(price))
    whole, dot, fraction = numeric.partition(".")
    if dot:
        numeric = f"{whole}.{fraction.replace('.', '')}"
    return numeric or "0"


def format_price(price: Any) -> str:
    return f"{normalize_price(price)} {CURRENCY_SUFFIX}"


def dietary_tag(ingredients: str | None) -> str | None:
    """Extract a dietary indicator such as "(Vg)" or "(Vt/Vg)" as a badge."""
    match = DIETARY_TAG.search(strip_html(ingredients))
    return match.group(1).upper() if match else None


def strip_dietary_tags(text: str | None) -> str:
    return PARENTHESIZED.sub("", strip_html(text)).strip()


def _lookup_title(category_key: str, language: Language, titles: dict[str, dict[str, str]]) -> str:
    for table in (titles, DEFAULT_CATEGORY_TITLES):
        title = table.get(category_key)
        if title:
            return title.get(language) or title.get("en") or category_key
    return category_key


def category_title(category_key: str, language: Language, titles: dict[str, dict[str, str]]) -> str:
    """Section heading: stored title, then built-in default, then the raw key."""
    return _lookup_title(category_key, language, titles).upper()


def category_nav_label(category_key: str, language: Language, titles: dict[str, dict[str, str]]) -> str:
    """Same lookup as category_title, without the uppercasing."""
    return _lookup_title(category_key, language, titles)


def build_menu_view(
    menu: dict[str, list[dict[str, Any]]],
    titles: dict[str, dict[str, str]],
    language: Language,
) -> list[dict[str, Any]]:
    """
    Flatten the stored documents into display-ready sections.

    Category and item order follow the stored document.
    """
    sections = []
    for category_key, items in menu.items():
        rendered_items = []
        for item in items if isinstance(items, list) else []:
            if not isinstance(item, dict):
                continue
            ingredients = item.get(f"ingredients_{language}")
            rendered_items.append(
                {
                    "name": strip_html(item.get(f"name_{language}")),
                    "description": strip_html(item.get(f"description_{language}")),
                    "ingredients": strip_dietary_tags(ingredients),
                    "badge": dietary_tag(ingredients),
                    "price": format_price(item.get("price")),
                }
            )

        sections.append(
            {
                "key": category_key,
                "title": category_title(category_key, language, titles),
                "navLabel": category_nav_label(category_key, language, titles),
                "items": rendered_items,
            }
        )
    return sections
