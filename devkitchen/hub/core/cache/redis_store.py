# devkitchen/hub/core/cache/redis_store.py
"""
Redis cache store.

Values are stored as JSON strings. Connection and timeout errors from
redis-py are reported as CacheBackendUnavailable so repositories can
degrade to the persistent store.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from devkitchen.hub.core.errors import CacheBackendUnavailable

logger = logging.getLogger(__name__)

_UNAVAILABLE = (RedisConnectionError, RedisTimeoutError, OSError)

# Characters with special meaning in SCAN MATCH patterns
_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


class RedisCacheStore:
    """
    Cache store backed by a redis.asyncio client.

    Args:
        client: ``redis.asyncio.Redis`` created with ``decode_responses=True``.
        scan_count: Batch size hint for prefix scans.
    """

    def __init__(self, client: Any, scan_count: int = 500) -> None:
        self._client = client
        self._scan_count = scan_count

    @property
    def client(self) -> Any:
        return self._client

    async def get(self, key: str) -> Any | None:
        try:
            data = await self._client.get(key)
        except _UNAVAILABLE as exc:
            raise CacheBackendUnavailable("get", exc) from exc

        if data is None:
            return None

        try:
            return json.loads(data)
        except (TypeError, ValueError):
            logger.warning("Discarding undecodable cache entry '%s'", key)
            return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        data = json.dumps(value, default=str)
        try:
            await self._client.set(key, data, ex=ttl or None)
        except _UNAVAILABLE as exc:
            raise CacheBackendUnavailable("set", exc) from exc

    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        try:
            # A multi-key DEL is atomic on the server
            return int(await self._client.delete(*keys))
        except _UNAVAILABLE as exc:
            raise CacheBackendUnavailable("delete", exc) from exc

    async def delete_prefix(self, prefix: str) -> int:
        pattern = _GLOB_SPECIAL.sub(r"\\\1", prefix) + "*"
        removed = 0
        batch: list[str] = []

        try:
            async for key in self._client.scan_iter(
                match=pattern, count=self._scan_count
            ):
                batch.append(key)
                if len(batch) >= self._scan_count:
                    removed += int(await self._client.unlink(*batch))
                    batch = []
            if batch:
                removed += int(await self._client.unlink(*batch))
        except _UNAVAILABLE as exc:
            raise CacheBackendUnavailable("delete_prefix", exc) from exc

        return removed

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except _UNAVAILABLE as exc:
            logger.warning("Redis ping failed: %s", exc)
            return False


async def create_redis_client(redis_url: str) -> Any:
    """
    Create a redis.asyncio client and check the connection.

    Raises:
        CacheBackendUnavailable: If the server does not answer PING.
    """
    import redis.asyncio as redis

    logger.info("Connecting to Redis")
    client = redis.from_url(redis_url, decode_responses=True)
    try:
        await client.ping()
    except _UNAVAILABLE as exc:
        raise CacheBackendUnavailable("connect", exc) from exc
    logger.info("Redis connected")
    return client
