from __future__ import annotations

import pytest

from devkitchen.hub.contracts.cache import CacheStore
from devkitchen.hub.core.cache import MemoryCacheStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_set_get_delete() -> None:
    store = MemoryCacheStore()

    await store.set("user:id:1", {"id": 1})

    assert await store.get("user:id:1") == {"id": 1}
    assert await store.delete("user:id:1", "user:id:2") == 1
    assert await store.get("user:id:1") is None


@pytest.mark.asyncio
async def test_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    store = MemoryCacheStore(timer=clock)

    await store.set("k", "v", ttl=10)
    clock.now += 9
    assert await store.get("k") == "v"

    clock.now += 1
    assert await store.get("k") is None
    assert len(store) == 0


@pytest.mark.asyncio
async def test_values_are_copied() -> None:
    store = MemoryCacheStore()
    value = {"roles": ["admin"]}

    await store.set("k", value)
    value["roles"].append("owner")
    fetched = await store.get("k")
    fetched["roles"].append("guest")

    assert await store.get("k") == {"roles": ["admin"]}


@pytest.mark.asyncio
async def test_delete_prefix_only_touches_namespace() -> None:
    store = MemoryCacheStore()
    await store.set("user:id:1", 1)
    await store.set("user:email:a@x.com", 1)
    await store.set("users_archive:id:1", 1)
    await store.set("organization:id:1", 1)

    assert await store.delete_prefix("user:") == 2
    assert sorted(store.keys()) == ["organization:id:1", "users_archive:id:1"]


@pytest.mark.asyncio
async def test_satisfies_protocol() -> None:
    store = MemoryCacheStore()

    assert isinstance(store, CacheStore)
    assert await store.ping() is True


@pytest.mark.asyncio
async def test_expired_entries_are_dropped_and_not_counted() -> None:
    clock = FakeClock()
    store = MemoryCacheStore(timer=clock)

    for i in range(1000):
        await store.set(f"user:id:{i}", {"id": i}, ttl=60)
    clock.now += 10_000
    await store.set("user:id:fresh", {"id": "fresh"}, ttl=60)

    assert len(store) == 1
    assert await store.delete_prefix("user:") == 1


@pytest.mark.asyncio
async def test_delete_ignores_expired_entries() -> None:
    clock = FakeClock()
    store = MemoryCacheStore(timer=clock)

    await store.set("k", "v", ttl=5)
    clock.now += 5

    assert await store.delete("k") == 0


@pytest.mark.asyncio
async def test_entries_keep_their_own_ttl() -> None:
    clock = FakeClock()
    store = MemoryCacheStore(timer=clock)

    await store.set("user:id:1", {"id": 1}, ttl=900)
    await store.set("user:email:ghost@x.com", {"__not_found__": True}, ttl=30)
    await store.set("pinned", 1)
    clock.now += 60

    assert sorted(store.keys()) == ["pinned", "user:id:1"]


@pytest.mark.asyncio
async def test_bounded_size() -> None:
    store = MemoryCacheStore(maxsize=2)

    await store.set("a", 1, ttl=10)
    await store.set("b", 2, ttl=100)
    await store.set("c", 3, ttl=100)

    assert len(store) == 2
    assert await store.get("a") is None
