"""Cache key construction and per-entity invalidation patterns.

Keys follow ``<domain>:<endpoint>:<params>`` where ``params`` is a
sorted, URL-encoded ``key=value`` list with empty values dropped, so the
same logical request always maps to the same key.
"""

import enum
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

REPORTS_DOMAIN = "reports"


class PrintEntity(enum.StrEnum):
    """Entity classes whose print status can change."""

    HOUSEHOLD = "household"
    WARD_LEADER = "ward_leader"
    BARANGAY_COORDINATOR = "barangay_coordinator"


_STATISTICS_PATTERN = f"{REPORTS_DOMAIN}:print-statistics*"

INVALIDATION_PATTERNS: dict[PrintEntity, tuple[str, ...]] = {
    PrintEntity.HOUSEHOLD: (
        f"{REPORTS_DOMAIN}:households:*",
        f"{REPORTS_DOMAIN}:household:*",
        f"{REPORTS_DOMAIN}:leader:households:*",
        _STATISTICS_PATTERN,
    ),
    PrintEntity.WARD_LEADER: (
        f"{REPORTS_DOMAIN}:ward-leaders:*",
        f"{REPORTS_DOMAIN}:leader:*",
        f"{REPORTS_DOMAIN}:barangay-coordinators:*",
        _STATISTICS_PATTERN,
    ),
    PrintEntity.BARANGAY_COORDINATOR: (
        f"{REPORTS_DOMAIN}:barangay-coordinators:*",
        _STATISTICS_PATTERN,
    ),
}


def _normalize(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, enum.Enum):
        value = value.value
    text = str(value).strip()
    return text or None


def build_cache_key(endpoint: str, params: Mapping[str, Any] | None = None, *, domain: str = REPORTS_DOMAIN) -> str:
    """Build a deterministic cache key for a read endpoint.

    Args:
        endpoint: Endpoint name, e.g. ``ward-leaders`` or ``household:members``.
        params: Filter and pagination parameters.
        domain: Key namespace.

    Returns:
        The cache key.
    """
    normalized = sorted(
        (name.lower(), text) for name, value in (params or {}).items() if (text := _normalize(value)) is not None
    )
    return f"{domain}:{endpoint}:{urlencode(normalized)}"


def invalidation_patterns(entity: PrintEntity) -> tuple[str, ...]:
    """Return the glob patterns to clear after an entity's print status changes."""
    return INVALIDATION_PATTERNS[entity]
