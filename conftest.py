"""Shared fixtures: settings on tmp dirs, in-memory remote tier, test client."""

import copy
from typing import Any

import orjson
import pytest
from fastapi.testclient import TestClient

from core.exceptions import StorageTierFailure
from core.settings import Settings
from main import create_app
from storage import (
    BUNDLED_FILENAMES,
    MENU_KEY,
    TITLES_KEY,
    BundledFileBackend,
    ContentStore,
    LocalCacheBackend,
    StorageBackend,
)
from storage.base_backend import LOCATION_REMOTE

ADMIN_PASSWORD = "kahve-ve-cay"
JWT_SECRET = "test-secret-key-0123456789abcdef"


class MemoryBackend(StorageBackend):
    """In-memory stand-in for the remote store."""

    name = "remote"
    location = LOCATION_REMOTE

    def __init__(self, available: bool = True, failing: bool = False):
        self.available = available
        self.failing = failing
        self.documents: dict[str, dict[str, Any]] = {}
        self.writes = 0

    @property
    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> dict[str, Any] | None:
        if self.failing:
            raise StorageTierFailure(self.name, "connection refused")
        document = self.documents.get(key)
        return copy.deepcopy(document) if document is not None else None

    async def set(self, key: str, document: dict[str, Any]) -> None:
        if self.failing:
            raise StorageTierFailure(self.name, "connection refused")
        self.writes += 1
        self.documents[key] = copy.deepcopy(document)


@pytest.fixture
def sample_menu() -> dict[str, Any]:
    return {
        "breakfast": [
            {
                "name_en": "Menemen",
                "description_en": "Eggs with tomatoes and peppers",
                "ingredients_en": "Egg, tomato, pepper (Vt)",
                "name_tr": "Menemen",
                "description_tr": "Domatesli ve biberli yumurta",
                "ingredients_tr": "Yumurta, domates, biber (Vt)",
                "price": "220",
            }
        ],
        "coffee": [
            {
                "name_en": "Turkish Coffee",
                "description_en": "Served with Turkish delight",
                "name_tr": "Türk Kahvesi",
                "description_tr": "Lokum ile",
                "price": "90",
            }
        ],
    }


@pytest.fixture
def sample_titles() -> dict[str, dict[str, str]]:
    return {
        "breakfast": {"en": "Morning", "tr": "Sabah"},
        "coffee": {"en": "Coffee", "tr": "Kahve"},
    }


@pytest.fixture
def data_dir(tmp_path, sample_menu, sample_titles):
    path = tmp_path / "data"
    path.mkdir()
    (path / BUNDLED_FILENAMES[MENU_KEY]).write_bytes(orjson.dumps(sample_menu))
    (path / BUNDLED_FILENAMES[TITLES_KEY]).write_bytes(orjson.dumps(sample_titles))
    return path


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def settings(data_dir, cache_dir) -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret=JWT_SECRET,
        admin_password=ADMIN_PASSWORD,
        kv_rest_api_url="",
        kv_rest_api_token="",
        data_dir=str(data_dir),
        cache_dir=str(cache_dir),
        environment="development",
    )


@pytest.fixture
def remote() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def content_store(remote, data_dir, cache_dir) -> ContentStore:
    return ContentStore(
        [
            remote,
            LocalCacheBackend(cache_dir),
            BundledFileBackend(data_dir, BUNDLED_FILENAMES),
        ]
    )


@pytest.fixture
def app(settings, content_store):
    return create_app(settings, content_store=content_store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    response = client.post("/api/auth/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client
