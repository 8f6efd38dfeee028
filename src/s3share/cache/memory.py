"""In-memory secret cache with per-key TTL."""

import threading
import time
from datetime import timedelta
from typing import Callable, Dict, Tuple

from s3share.error_handling.errors import CacheMissError


class InMemorySecretCache:
    """
    Process-local stand-in for Redis, used for development and tests.

    Entries carry a monotonic deadline and are evicted lazily when read.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: str, ttl: timedelta) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl.total_seconds())

    def get(self, key: str) -> str:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                raise CacheMissError(f"key {key} not found")
            value, deadline = entry
            if self._clock() >= deadline:
                del self._entries[key]
                raise CacheMissError(f"key {key} expired")
            return value

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for _, deadline in self._entries.values() if now < deadline)
