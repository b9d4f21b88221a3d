"""Redis cache backend shared by every API worker."""

import json
from typing import Any

from redis.asyncio import Redis


class RedisCacheBackend:
    """Store report payloads in Redis as JSON strings with a native TTL.

    Pattern deletes walk the key space with ``SCAN`` and remove matches in
    chunks of ``scan_count`` keys, so they never block the server the way
    ``KEYS`` does.

    Args:
        client: Redis client created with ``decode_responses=True``.
        scan_count: ``COUNT`` hint for ``SCAN`` and the ``DEL`` chunk size.
    """

    def __init__(self, client: Redis, *, scan_count: int = 500) -> None:
        self._client = client
        self._scan_count = scan_count

    @classmethod
    def from_url(cls, url: str, *, scan_count: int = 500) -> "RedisCacheBackend":
        """Build a backend from a ``redis://`` URL. No connection is opened until first use."""
        return cls(Redis.from_url(url, decode_responses=True), scan_count=scan_count)

    async def get(self, key: str) -> Any | None:
        raw = await self._client.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        await self._client.set(key, json.dumps(value), ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    async def delete_by_pattern(self, pattern: str) -> int:
        """Delete every key matching a Redis glob pattern.

        Returns:
            Number of keys removed.
        """
        removed = 0
        batch: list[str] = []
        async for key in self._client.scan_iter(match=pattern, count=self._scan_count):
            batch.append(key)
            if len(batch) >= self._scan_count:
                removed += await self._client.delete(*batch)
                batch = []
        if batch:
            removed += await self._client.delete(*batch)
        return removed

    async def close(self) -> None:
        await self._client.aclose()
