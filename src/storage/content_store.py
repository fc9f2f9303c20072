"""
Content Store

Tiered persistence for the two menu documents (items by category and
category titles). Reads walk the tiers in priority order and settle on
the first one holding the document; writes go to every available tier
and report which of them absorbed the change.

Reads never fail: when every tier is down or empty the built-in default
document is returned.
"""

import copy
from dataclasses import dataclass, field
from typing import Any

from core.exceptions import StorageTierFailure
from core.logger import get_logger
from storage.base_backend import LOCATION_LOCAL, LOCATION_NONE, LOCATION_REMOTE, StorageBackend

logger = get_logger(__name__)

MENU_KEY = "ara-kafe-menu-data"
TITLES_KEY = "ara-kafe-menu-titles"

BUNDLED_FILENAMES = {
    MENU_KEY: "menu-data.json",
    TITLES_KEY: "category-titles.json",
}


@dataclass
class TierOutcome:
    """Result of writing to a single tier."""

    tier: str
    ok: bool
    error: str | None = None


@dataclass
class WriteResult:
    """Outcome of a multi-tier write, reported back to the admin."""

    success: bool
    storage_location: str
    message: str
    tiers: list[TierOutcome] = field(default_factory=list)

    def to_response(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "storageLocation": self.storage_location,
        }


class DocumentStore:
    """
    Read/write access to one document across an ordered list of tiers.

    Args:
        key: Fixed key the document is stored under
        backends: Tiers in priority order (remote first)
        default: Document returned when no tier yields one
        label: Human readable name used in messages and logs
    """

    def __init__(
        self,
        key: str,
        backends: list[StorageBackend],
        default: dict[str, Any] | None = None,
        label: str = "document",
    ):
        self.key = key
        self.backends = list(backends)
        self.default = default or {}
        self.label = label

    async def read(self) -> dict[str, Any]:
        for backend in self.backends:
            if not backend.is_available:
                continue

            try:
                document = await backend.get(self.key)
            except StorageTierFailure as e:
                logger.error(f"Loading {self.label} failed, trying next tier: {e}")
                continue

            if document is not None:
                logger.debug(f"{self.label.capitalize()} loaded from {backend.name}")
                return document

        logger.warning(f"No stored {self.label} found, serving built-in default")
        return copy.deepcopy(self.default)

    async def write(self, document: dict[str, Any]) -> WriteResult:
        outcomes: list[TierOutcome] = []

        for backend in self.backends:
            if not backend.is_available:
                continue

            try:
                await backend.set(self.key, document)
            except StorageTierFailure as e:
                logger.warning(f"Saving {self.label} failed: {e}")
                outcomes.append(TierOutcome(backend.name, ok=False, error=str(e)))
                continue

            logger.info(f"{self.label.capitalize()} saved to {backend.name}")
            outcomes.append(TierOutcome(backend.name, ok=True))

        return self._summarize(outcomes)

    def _summarize(self, outcomes: list[TierOutcome]) -> WriteResult:
        durable = {b.name for b in self.backends if b.is_durable}
        saved = [o.tier for o in outcomes if o.ok]
        errors = [o.error for o in outcomes if not o.ok]

        success = any(tier in durable for tier in saved)
        if success:
            location = LOCATION_REMOTE
        elif saved:
            location = LOCATION_LOCAL
        else:
            location = LOCATION_NONE

        if errors:
            message = f"Warning: {'; '.join(errors)}. Changes may not be saved properly."
        elif success:
            message = f"Successfully saved {self.label} to the remote store. Changes are now live for all users."
        else:
            message = f"Saved {self.label} to local storage only. The remote store is not configured."

        return WriteResult(
            success=success,
            storage_location=location,
            message=message,
            tiers=outcomes,
        )


class ContentStore:
    """The menu and category-title documents over one shared set of tiers."""

    def __init__(self, backends: list[StorageBackend]):
        self.backends = list(backends)
        self.menu = DocumentStore(MENU_KEY, self.backends, label="menu")
        self.titles = DocumentStore(TITLES_KEY, self.backends, label="category titles")

    def tier_status(self) -> dict[str, str]:
        return {b.name: "available" if b.is_available else "unavailable" for b in self.backends}

    async def close(self) -> None:
        for backend in self.backends:
            await backend.close()
