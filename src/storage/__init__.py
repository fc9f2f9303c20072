"""
Storage Package

Tiered persistence for menu content:
- RemoteBackend: Upstash-compatible Redis REST store (source of truth)
- LocalCacheBackend: same-host JSON cache
- BundledFileBackend: default documents shipped in data/
"""

from core.settings import Settings

from .base_backend import StorageBackend
from .content_store import (
    BUNDLED_FILENAMES,
    MENU_KEY,
    TITLES_KEY,
    ContentStore,
    DocumentStore,
    TierOutcome,
    WriteResult,
)
from .file_backends import BundledFileBackend, LocalCacheBackend
from .remote_backend import RemoteBackend


def create_content_store(settings: Settings) -> ContentStore:
    """
    Build the content store with tiers in priority order.

    Args:
        settings: Application settings

    Returns:
        ContentStore over remote, local cache and bundled tiers
    """
    return ContentStore(
        [
            RemoteBackend(
                settings.kv_rest_api_url,
                settings.kv_rest_api_token,
                timeout=settings.remote_timeout,
            ),
            LocalCacheBackend(settings.cache_dir),
            BundledFileBackend(settings.data_dir, BUNDLED_FILENAMES),
        ]
    )


__all__ = [
    "StorageBackend",
    "RemoteBackend",
    "LocalCacheBackend",
    "BundledFileBackend",
    "ContentStore",
    "DocumentStore",
    "TierOutcome",
    "WriteResult",
    "MENU_KEY",
    "TITLES_KEY",
    "BUNDLED_FILENAMES",
    "create_content_store",
]
