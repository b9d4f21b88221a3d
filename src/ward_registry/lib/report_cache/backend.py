"""Cache storage backends.

A backend is anything that implements :class:`CacheBackend`. The
default :class:`InMemoryCacheBackend` keeps entries in process memory
with per-entry TTL expiry; :class:`~ward_registry.lib.report_cache.redis_backend.RedisCacheBackend`
shares one key space between API workers.
"""

import fnmatch
import threading
import time
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """Minimal key-value contract the report cache relies on."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def delete_by_pattern(self, pattern: str) -> int: ...

    async def close(self) -> None: ...


class InMemoryCacheBackend:
    """Thread-safe TTL cache held in process memory.

    Every write sweeps out expired entries, and the store never holds more
    than ``max_entries`` keys: the least recently used key is evicted to
    make room.

    Args:
        max_entries: Upper bound on stored keys. None means unbounded.
    """

    def __init__(self, max_entries: int | None = 10_000) -> None:
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()
        self._max_entries = max_entries

    async def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.pop(key, None)
            if entry is None:
                return None
            value, expires_at = entry
            if time.monotonic() >= expires_at:
                return None
            # Re-insert to mark as most recently used.
            self._entries[key] = entry
            return value

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        now = time.monotonic()
        with self._lock:
            self._purge_expired(now)
            self._entries.pop(key, None)
            if self._max_entries is not None:
                while self._entries and len(self._entries) >= self._max_entries:
                    del self._entries[next(iter(self._entries))]
            self._entries[key] = (value, now + ttl_seconds)

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def delete_by_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern.

        Returns:
            Number of keys removed.
        """
        with self._lock:
            matched = [key for key in self._entries if fnmatch.fnmatchcase(key, pattern)]
            for key in matched:
                del self._entries[key]
            return len(matched)

    async def close(self) -> None:
        with self._lock:
            self._entries.clear()

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
