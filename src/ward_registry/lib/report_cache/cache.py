"""Advisory report cache.

Wraps a :class:`CacheBackend` so that backend failures never reach the
caller: reads degrade to a miss and writes or invalidations are dropped,
each with a warning in the log.
"""

from typing import TYPE_CHECKING, Any

from loguru import logger

from ward_registry.lib.report_cache.backend import CacheBackend, InMemoryCacheBackend
from ward_registry.lib.report_cache.keys import PrintEntity, invalidation_patterns
from ward_registry.lib.report_cache.redis_backend import RedisCacheBackend

if TYPE_CHECKING:
    from ward_registry.core.config import Settings


class ReportCache:
    """TTL cache in front of report read endpoints.

    Args:
        backend: Storage backend. Defaults to an in-process TTL store.
        ttl_seconds: Default time-to-live for new entries.
        enabled: When False every read is a miss and writes are ignored.
    """

    def __init__(
        self,
        backend: CacheBackend | None = None,
        ttl_seconds: int = 300,
        enabled: bool = True,
    ) -> None:
        self.backend: CacheBackend = backend if backend is not None else InMemoryCacheBackend()
        self.ttl_seconds = ttl_seconds
        self.enabled = enabled

    async def get(self, key: str) -> Any | None:
        if not self.enabled:
            return None
        try:
            value = await self.backend.get(key)
        except Exception as exc:
            logger.warning("Report cache read failed for {}: {}", key, exc)
            return None
        logger.debug("Report cache {} for {}", "hit" if value is not None else "miss", key)
        return value

    async def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        if not self.enabled:
            return
        try:
            await self.backend.set(key, value, ttl_seconds or self.ttl_seconds)
        except Exception as exc:
            logger.warning("Report cache write failed for {}: {}", key, exc)

    async def invalidate_pattern(self, pattern: str) -> int:
        """Delete entries matching a glob pattern.

        Returns:
            Number of entries removed (0 if the backend failed).
        """
        try:
            removed = await self.backend.delete_by_pattern(pattern)
        except Exception as exc:
            logger.warning("Report cache invalidation failed for {}: {}", pattern, exc)
            return 0
        logger.debug("Invalidated {} report cache entries matching {}", removed, pattern)
        return removed

    async def invalidate_entity(self, entity: PrintEntity) -> int:
        """Clear every cached report affected by a print-status change of ``entity``."""
        total = 0
        for pattern in invalidation_patterns(entity):
            total += await self.invalidate_pattern(pattern)
        return total

    async def close(self) -> None:
        """Release the backend's resources (connections, stored entries)."""
        try:
            await self.backend.close()
        except Exception as exc:
            logger.warning("Report cache backend did not close cleanly: {}", exc)


def build_backend(settings: "Settings") -> CacheBackend:
    """Pick the storage backend: Redis when ``redis_url`` is set, else in-process."""
    if settings.redis_url:
        logger.info("Report cache backed by Redis")
        return RedisCacheBackend.from_url(settings.redis_url)
    return InMemoryCacheBackend(max_entries=settings.cache_max_entries)


_report_cache: ReportCache | None = None


def get_report_cache() -> ReportCache:
    """Return the process-wide report cache, creating it from settings on first use."""
    global _report_cache  # noqa: PLW0603
    if _report_cache is None:
        from ward_registry.core.config import get_settings

        settings = get_settings()
        _report_cache = ReportCache(
            backend=build_backend(settings),
            ttl_seconds=settings.cache_ttl_seconds,
            enabled=settings.cache_enabled,
        )
    return _report_cache


async def close_report_cache() -> None:
    """Close and drop the process-wide cache instance (on application shutdown)."""
    global _report_cache  # noqa: PLW0603
    if _report_cache is not None:
        await _report_cache.close()
        _report_cache = None


def reset_report_cache() -> None:
    """Drop the process-wide cache instance without closing it (used in tests)."""
    global _report_cache  # noqa: PLW0603
    _report_cache = None
