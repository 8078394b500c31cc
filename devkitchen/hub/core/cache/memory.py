from __future__ import annotations

import copy
import math
import time
from typing import Any, Callable, NamedTuple

from cachetools import TLRUCache


class _Entry(NamedTuple):
    value: Any
    ttl: int | None


def _time_to_use(key: str, entry: _Entry, now: float) -> float:
    return now + entry.ttl if entry.ttl else math.inf


class MemoryCacheStore:
    """
    In-process cache store.

    Intended for development, tests and single-process deployments. Each
    entry carries its own TTL, so found users and negative markers can
    expire at different times. Values are deep-copied on the way in and out
    so callers never share state with the cache.

    Args:
        maxsize: Entry bound; expired entries go first, then the least
            recently used.
        timer: Clock used for expiry.
    """

    def __init__(
        self,
        maxsize: int = 10_000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: TLRUCache[str, _Entry] = TLRUCache(
            maxsize=maxsize, ttu=_time_to_use, timer=timer
        )

    async def get(self, key: str) -> Any | None:
        entry = self._cache.get(key)
        if entry is None:
            return None
        return copy.deepcopy(entry.value)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        self._cache[key] = _Entry(copy.deepcopy(value), ttl or None)

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self._cache.pop(key, None) is not None:
                removed += 1
        return removed

    async def delete_prefix(self, prefix: str) -> int:
        self._cache.expire()
        doomed = [k for k in self._cache if k.startswith(prefix)]
        for key in doomed:
            del self._cache[key]
        return len(doomed)

    async def ping(self) -> bool:
        return True

    def keys(self) -> list[str]:
        self._cache.expire()
        return list(self._cache)

    def __len__(self) -> int:
        self._cache.expire()
        return len(self._cache)
