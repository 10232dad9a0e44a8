"""A small thread safe cache with a fixed time to live per entry."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class TTLCache(Generic[K, V]):
    """Map keys to values that expire ``ttl_seconds`` after being stored.

    ``clock`` must be monotonic; tests pass a fake one to move time forward.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[K, Tuple[V, float]] = {}

    def get(self, key: K) -> Optional[V]:
        """Return the cached value, or ``None`` if it is missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + self.ttl_seconds)

    def expiry(self, key: K) -> Optional[float]:
        """Return the clock reading at which ``key`` expires, if it is cached."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry[1]:
                del self._entries[key]
                return None
            return entry[1]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"TTLCache(ttl_seconds={self.ttl_seconds!r}, entries={len(self)})"


AnyCache = TTLCache[str, Any]
