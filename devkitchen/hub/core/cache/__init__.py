"""Cache store implementations."""

from devkitchen.hub.core.cache.memory import MemoryCacheStore
from devkitchen.hub.core.cache.redis_store import RedisCacheStore, create_redis_client

__all__ = [
    "MemoryCacheStore",
    "RedisCacheStore",
    "create_redis_client",
]
