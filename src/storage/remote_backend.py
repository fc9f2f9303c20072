"""
Remote Storage Backend

Talks to an Upstash-compatible Redis REST endpoint. Each command is a
POST of a JSON array (["GET", key] / ["SET", key, value]) with a bearer
token; the reply is {"result": ...} or {"error": "..."}.

Documents are stored as JSON strings so any Redis client can read them.
"""

from typing import Any

import httpx
import orjson

from core.exceptions import StorageTierFailure
from core.logger import get_logger
from storage.base_backend import LOCATION_REMOTE, StorageBackend

logger = get_logger(__name__)


class RemoteBackend(StorageBackend):
    """Durable key-value tier backed by Redis over REST."""

    name = "remote"
    location = LOCATION_REMOTE

    def __init__(
        self,
        url: str,
        token: str,
        timeout: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the remote backend.

        Args:
            url: REST endpoint, empty when not configured
            token: Bearer token for the endpoint
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.url = url.rstrip("/")
        self._client: httpx.AsyncClient | None = None

        if url and token:
            self._client = httpx.AsyncClient(
                headers={"Authorization": f"Bearer {token}"},
                timeout=timeout,
                transport=transport,
            )
            logger.debug(f"Remote store client created for {self.url} (timeout {timeout:g}s)")

    @property
    def is_available(self) -> bool:
        return self._client is not None

    async def _command(self, *args: str) -> Any:
        if self._client is None:
            raise StorageTierFailure(self.name, "remote store is not configured")

        try:
            response = await self._client.post(self.url, content=orjson.dumps(list(args)))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise StorageTierFailure(self.name, f"request failed: {e!r}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise StorageTierFailure(self.name, f"unreadable reply (HTTP {response.status_code})") from e

        if response.is_error or (isinstance(payload, dict) and payload.get("error")):
            error = payload.get("error") if isinstance(payload, dict) else None
            raise StorageTierFailure(self.name, f"HTTP {response.status_code}: {error or 'request rejected'}")

        if not isinstance(payload, dict) or "result" not in payload:
            raise StorageTierFailure(self.name, "reply has no result")

        return payload["result"]

    async def get(self, key: str) -> dict[str, Any] | None:
        result = await self._command("GET", key)
        if result is None:
            return None

        if isinstance(result, str):
            try:
                result = orjson.loads(result)
            except orjson.JSONDecodeError as e:
                raise StorageTierFailure(self.name, f"stored value for {key} is not JSON") from e

        if not isinstance(result, dict):
            raise StorageTierFailure(self.name, f"stored value for {key} is not an object")

        return result

    async def set(self, key: str, document: dict[str, Any]) -> None:
        await self._command("SET", key, orjson.dumps(document).decode("utf-8"))

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
