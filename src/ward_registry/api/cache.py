"""Read-through report caching for API endpoints.

A request carrying ``Cache-Control: no-cache`` or ``no-store`` skips the
cache entirely. Responses carry ``X-Cache: HIT`` or ``X-Cache: MISS``.
"""

from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ward_registry.lib.report_cache import ReportCache

CACHE_HEADER = "X-Cache"


def cache_bypassed(request: Request) -> bool:
    """Return True when the client asked not to be served from cache."""
    directives = request.headers.get("cache-control", "").lower()
    return "no-cache" in directives or "no-store" in directives


async def cached_response(
    request: Request,
    cache: ReportCache,
    key: str,
    produce: Callable[[], Awaitable[BaseModel]],
) -> JSONResponse:
    """Serve ``key`` from cache or build, store and return a fresh payload.

    Args:
        request: The incoming request.
        cache: Report cache.
        key: Cache key for this request.
        produce: Coroutine factory building the response model on a miss.

    Returns:
        JSON response with the ``X-Cache`` header set.
    """
    bypass = cache_bypassed(request)
    if not bypass:
        cached = await cache.get(key)
        if cached is not None:
            return JSONResponse(content=cached, headers={CACHE_HEADER: "HIT"})

    payload = (await produce()).model_dump(mode="json", by_alias=True)
    if not bypass:
        await cache.set(key, payload)
    return JSONResponse(content=payload, headers={CACHE_HEADER: "MISS"})
