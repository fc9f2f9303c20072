"""
Abstract Storage Backend Interface

Defines the interface shared by every storage tier the content store
falls back through: the remote key-value store, the local cache and the
bundled default files.
"""

from abc import ABC, abstractmethod
from typing import Any

# Reported back to the admin as the place a write actually landed
LOCATION_REMOTE = "remote"
LOCATION_LOCAL = "local"
LOCATION_NONE = "none"


class StorageBackend(ABC):
    """
    Abstract base class for storage tiers.

    Implementations raise StorageTierFailure for any I/O, network or
    decoding problem. A key that simply is not there is not a failure:
    get() returns None.
    """

    #: Short tier name used in logs and write reports
    name: str = "backend"

    #: LOCATION_REMOTE for the durable source of truth, LOCATION_LOCAL otherwise
    location: str = LOCATION_LOCAL

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether this tier is configured in the current deployment."""
        pass

    @property
    def is_durable(self) -> bool:
        return self.location == LOCATION_REMOTE

    @abstractmethod
    async def get(self, key: str) -> dict[str, Any] | None:
        """
        Load the document stored under key.

        Args:
            key: Document key

        Returns:
            The decoded document, or None if nothing is stored
        """
        pass

    @abstractmethod
    async def set(self, key: str, document: dict[str, Any]) -> None:
        """
        Replace the document stored under key.

        Args:
            key: Document key
            document: Full document, written wholesale
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
