"""
File Storage Backends

Two on-disk tiers:
- LocalCacheBackend: a cache directory holding one JSON file per key,
  consulted when the remote store is unreachable.
- BundledFileBackend: the default documents shipped in data/, read as
  the last resort and mirrored on every save where the filesystem is
  writable.
"""

import asyncio
import os
from pathlib import Path
from typing import Any

import orjson

from core.exceptions import StorageTierFailure
from storage.base_backend import LOCATION_LOCAL, StorageBackend


def read_json_document(path: Path, tier: str) -> dict[str, Any] | None:
    """Load a JSON object from path, None if the file does not exist."""
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise StorageTierFailure(tier, f"cannot read {path}: {e.strerror or e}") from e

    try:
        document = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise StorageTierFailure(tier, f"{path} is not valid JSON") from e

    if not isinstance(document, dict):
        raise StorageTierFailure(tier, f"{path} does not hold a JSON object")
    return document


def write_json_document(path: Path, document: dict[str, Any], tier: str) -> None:
    """Atomically replace path with the pretty-printed document."""
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(orjson.dumps(document, option=orjson.OPT_INDENT_2))
        os.replace(tmp_path, path)
    except OSError as e:
        raise StorageTierFailure(tier, f"cannot write {path}: {e.strerror or e}") from e


class LocalCacheBackend(StorageBackend):
    """Same-host cache directory, disabled when cache_dir is None."""

    name = "local"
    location = LOCATION_LOCAL

    def __init__(self, cache_dir: str | Path | None):
        self.cache_dir = Path(cache_dir) if cache_dir else None

    @property
    def is_available(self) -> bool:
        return self.cache_dir is not None

    def _path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    async def get(self, key: str) -> dict[str, Any] | None:
        return await asyncio.to_thread(read_json_document, self._path_for(key), self.name)

    async def set(self, key: str, document: dict[str, Any]) -> None:
        await asyncio.to_thread(write_json_document, self._path_for(key), document, self.name)


class BundledFileBackend(StorageBackend):
    """
    Default documents shipped with the deployment.

    Each document key maps to a fixed file name inside data_dir. Many
    hosting targets mount the application read-only, so failed writes
    here are expected and only reported.
    """

    name = "bundled"
    location = LOCATION_LOCAL

    def __init__(self, data_dir: str | Path, filenames: dict[str, str]):
        self.data_dir = Path(data_dir)
        self.filenames = dict(filenames)

    @property
    def is_available(self) -> bool:
        return True

    def _path_for(self, key: str) -> Path:
        filename = self.filenames.get(key)
        if filename is None:
            raise StorageTierFailure(self.name, f"no bundled file for key {key}")
        return self.data_dir / filename

    async def get(self, key: str) -> dict[str, Any] | None:
        return await asyncio.to_thread(read_json_document, self._path_for(key), self.name)

    async def set(self, key: str, document: dict[str, Any]) -> None:
        await asyncio.to_thread(write_json_document, self._path_for(key), document, self.name)
