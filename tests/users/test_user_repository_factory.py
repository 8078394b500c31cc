from __future__ import annotations

import pytest

from devkitchen.hub.core.errors import CacheBackendUnavailable
from devkitchen.hub.users import (
    CachedUserRepository,
    DatabaseUserRepository,
    create_user_repository,
    get_cache_info,
    is_cache_available,
)


class UnreachableCache:
    async def get(self, key):
        raise CacheBackendUnavailable("get")

    async def set(self, key, value, ttl=None):
        raise CacheBackendUnavailable("set")

    async def delete(self, *keys):
        raise CacheBackendUnavailable("delete")

    async def delete_prefix(self, prefix):
        raise CacheBackendUnavailable("delete_prefix")

    async def ping(self):
        return False


class ForgetfulCache(UnreachableCache):
    """Accepts writes but never returns them."""

    async def set(self, key, value, ttl=None):
        return None

    async def get(self, key):
        return None

    async def delete(self, *keys):
        return 0


@pytest.mark.asyncio
async def test_probe_leaves_no_keys_behind(cache):
    assert await is_cache_available(cache) is True
    assert cache.keys() == []


@pytest.mark.asyncio
async def test_probe_fails_without_cache():
    assert await is_cache_available(None) is False
    assert await is_cache_available(UnreachableCache()) is False
    assert await is_cache_available(ForgetfulCache()) is False


@pytest.mark.asyncio
async def test_working_cache_gives_cached_repository(user_store, cache):
    repo = await create_user_repository(user_store, cache, prefix="u", ttl=60)

    assert isinstance(repo, CachedUserRepository)
    assert repo.prefix == "u"


@pytest.mark.asyncio
async def test_unreachable_cache_gives_database_repository(user_store):
    repo = await create_user_repository(user_store, UnreachableCache())

    assert isinstance(repo, DatabaseUserRepository)


@pytest.mark.asyncio
async def test_force_cache_skips_probe(user_store):
    repo = await create_user_repository(user_store, ForgetfulCache(), force_cache=True)

    assert isinstance(repo, CachedUserRepository)


@pytest.mark.asyncio
async def test_force_no_cache(user_store, cache):
    repo = await create_user_repository(user_store, cache, force_cache=False)

    assert isinstance(repo, DatabaseUserRepository)


@pytest.mark.asyncio
async def test_forced_cache_without_store_is_rejected(user_store):
    with pytest.raises(ValueError):
        await create_user_repository(user_store, None, force_cache=True)


@pytest.mark.asyncio
async def test_cache_info(cache):
    assert await get_cache_info(cache) == {
        "cache_store": "MemoryCacheStore",
        "is_available": True,
    }
    assert await get_cache_info(None) == {"cache_store": None, "is_available": False}
