"""Report response cache with glob-pattern invalidation."""

from ward_registry.lib.report_cache.backend import CacheBackend, InMemoryCacheBackend
from ward_registry.lib.report_cache.cache import (
    ReportCache,
    build_backend,
    close_report_cache,
    get_report_cache,
    reset_report_cache,
)
from ward_registry.lib.report_cache.keys import (
    INVALIDATION_PATTERNS,
    REPORTS_DOMAIN,
    PrintEntity,
    build_cache_key,
    invalidation_patterns,
)
from ward_registry.lib.report_cache.redis_backend import RedisCacheBackend

__all__ = [
    "INVALIDATION_PATTERNS",
    "REPORTS_DOMAIN",
    "CacheBackend",
    "InMemoryCacheBackend",
    "PrintEntity",
    "RedisCacheBackend",
    "ReportCache",
    "build_backend",
    "build_cache_key",
    "close_report_cache",
    "get_report_cache",
    "invalidation_patterns",
    "reset_report_cache",
]
