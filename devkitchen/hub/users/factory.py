from __future__ import annotations

import logging
import time
from typing import Any

from devkitchen.hub.contracts.cache import CacheStore
from devkitchen.hub.contracts.repository import UserRepository, UserStore
from devkitchen.hub.core.errors import CacheBackendUnavailable
from devkitchen.hub.users.repository import CachedUserRepository, DatabaseUserRepository

logger = logging.getLogger(__name__)

_PROBE_VALUE = "probe"


async def is_cache_available(cache: CacheStore | None) -> bool:
    """Round-trip a short-lived probe key through the cache."""
    if cache is None:
        return False

    probe_key = f"user_repository_probe:{time.time_ns()}"
    try:
        await cache.set(probe_key, _PROBE_VALUE, 5)
        retrieved = await cache.get(probe_key)
        await cache.delete(probe_key)
    except CacheBackendUnavailable as exc:
        logger.warning("Cache is not available: %s", exc)
        return False

    if retrieved != _PROBE_VALUE:
        logger.warning(
            "Cache probe failed - value mismatch",
            extra={"expected": _PROBE_VALUE, "retrieved": retrieved},
        )
        return False
    return True


async def create_user_repository(
    store: UserStore,
    cache: CacheStore | None,
    *,
    force_cache: bool | None = None,
    prefix: str = "user",
    ttl: int | None = 900,
    negative_ttl: int | None = None,
) -> UserRepository:
    """
    Pick the cached or database repository.

    ``force_cache`` overrides detection; otherwise the cache is probed and
    the database repository is used when it does not answer.

    Raises:
        ValueError: If the cached variant is forced without a cache store.
    """
    if force_cache is None:
        use_cache = await is_cache_available(cache)
    else:
        use_cache = force_cache

    if use_cache:
        if cache is None:
            raise ValueError("Cached user repository requested without a cache store")
        logger.info("Using cached user repository (prefix '%s')", prefix)
        return CachedUserRepository(
            store, cache, prefix=prefix, ttl=ttl, negative_ttl=negative_ttl
        )

    logger.info("Using database user repository")
    return DatabaseUserRepository(store)


async def get_cache_info(cache: CacheStore | None) -> dict[str, Any]:
    """Cache configuration and status for diagnostics."""
    return {
        "cache_store": type(cache).__name__ if cache is not None else None,
        "is_available": await is_cache_available(cache),
    }
