"""
Write Rate Limiter

Coarse in-memory sliding-window limiter for the menu mutation endpoint.
Single-process only: state resets on restart and is not shared between
server instances.
"""

import threading
import time
from collections import deque
from typing import Callable

from starlette.requests import Request

from core.exceptions import RateLimitExceeded
from core.logger import get_logger

logger = get_logger(__name__)

UNKNOWN_CLIENT = "unknown"


def client_identifier(request: Request) -> str:
    """Derive the rate-limit key from X-Forwarded-For, else a sentinel."""
    forwarded_for = request.headers.get("x-forwarded-for", "")
    client = forwarded_for.split(",")[0].strip()
    return client or UNKNOWN_CLIENT


class RateLimiter:
    """
    Allows at most `max_requests` writes per `window` seconds per client.

    Args:
        max_requests: Ceiling within one window
        window: Window length in seconds
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        max_requests: int = 10,
        window: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def hit(self, client_id: str) -> None:
        """
        Record a write attempt for client_id.

        Raises:
            RateLimitExceeded: If the client already used up its window
        """
        now = self._clock()
        window_start = now - self.window

        with self._lock:
            self._purge(window_start)

            hits = self._hits.setdefault(client_id, deque())
            if len(hits) >= self.max_requests:
                logger.warning(f"Rate limit exceeded for client {client_id}")
                raise RateLimitExceeded()

            hits.append(now)

    def _purge(self, window_start: float) -> None:
        # Caller holds the lock
        for client_id in list(self._hits):
            hits = self._hits[client_id]
            while hits and hits[0] <= window_start:
                hits.popleft()
            if not hits:
                del self._hits[client_id]
