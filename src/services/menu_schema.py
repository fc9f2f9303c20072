"""
Write-boundary validation for the menu documents.

Admin saves replace a whole document, so each payload is validated and
cleaned here before it reaches the content store: HTML is stripped from
text fields and prices are normalized.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from core.exceptions import MalformedInput
from services.menu_format import normalize_price, strip_html


class MenuItem(BaseModel):
    """A single dish or drink."""

    model_config = ConfigDict(extra="ignore")

    name_en: str
    description_en: str = ""
    ingredients_en: str | None = None
    name_tr: str
    description_tr: str = ""
    ingredients_tr: str | None = None
    price: str

    @field_validator("name_en", "name_tr", "description_en", "description_tr", mode="after")
    @classmethod
    def _clean_text(cls, value: str) -> str:
        return strip_html(value)

    @field_validator("ingredients_en", "ingredients_tr", mode="after")
    @classmethod
    def _clean_optional_text(cls, value: str | None) -> str | None:
        return strip_html(value) if value is not None else None

    @field_validator("price", mode="before")
    @classmethod
    def _clean_price(cls, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValueError("price must be a string or number")
        return normalize_price(value)


class CategoryTitle(BaseModel):
    """Bilingual heading for one category."""

    model_config = ConfigDict(extra="ignore")

    en: str
    tr: str

    @field_validator("en", "tr", mode="after")
    @classmethod
    def _clean_text(cls, value: str) -> str:
        return strip_html(value)


_menu_adapter = TypeAdapter(dict[str, list[MenuItem]])
_titles_adapter = TypeAdapter(dict[str, CategoryTitle])


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def _check_category_keys(payload: dict[str, Any]) -> None:
    for key in payload:
        if not key.strip():
            raise MalformedInput("Category keys must not be blank")


def parse_menu(payload: Any) -> dict[str, list[dict[str, Any]]]:
    """
    Validate and clean a full menu document.

    Raises:
        MalformedInput: If the payload is not a non-empty object of
            category -> list of items, or an item is invalid
    """
    if not isinstance(payload, dict) or not payload:
        raise MalformedInput("Invalid menu data")
    _check_category_keys(payload)

    try:
        menu = _menu_adapter.validate_python(payload)
    except ValidationError as e:
        raise MalformedInput(f"Invalid menu data: {_describe(e)}") from e

    return {
        category: [item.model_dump(exclude_none=True) for item in items]
        for category, items in menu.items()
    }


def parse_titles(payload: Any) -> dict[str, dict[str, str]]:
    """
    Validate and clean a category titles document.

    Raises:
        MalformedInput: If the payload is not an object of
            category -> {en, tr}
    """
    if not isinstance(payload, dict):
        raise MalformedInput("Invalid titles payload")
    _check_category_keys(payload)

    try:
        titles = _titles_adapter.validate_python(payload)
    except ValidationError as e:
        raise MalformedInput(f"Invalid titles payload: {_describe(e)}") from e

    return {category: title.model_dump() for category, title in titles.items()}
