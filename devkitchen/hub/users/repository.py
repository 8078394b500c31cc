# devkitchen/hub/users/repository.py
"""
User repositories.

CachedUserRepository puts a cache-aside layer in front of the persistent
store. DatabaseUserRepository has the same contract without a cache and is
used when no cache backend is available.
"""
from __future__ import annotations

import logging
from typing import Any

from devkitchen.hub.contracts.cache import CacheStore
from devkitchen.hub.contracts.entity import User
from devkitchen.hub.contracts.repository import UserStore
from devkitchen.hub.core.errors import CacheBackendUnavailable, NotFound

logger = logging.getLogger(__name__)

NOT_FOUND_MARKER: dict[str, Any] = {"__not_found__": True}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _is_not_found_marker(value: Any) -> bool:
    return isinstance(value, dict) and value.get("__not_found__") is True


class CachedUserRepository:
    """
    Cache-aside user lookups with alias-aware invalidation.

    Cache keys:
        <prefix>:id:<user id>
        <prefix>:email:<lower-cased email>
        <prefix>:aliases:<user id>   (every alias key written for the user)

    A successful lookup writes both keys with the same TTL, so a user
    fetched by email is also served by id and the other way round, and
    records them in the alias index.
    ``invalidate`` deletes every alias of a user in one multi-key delete.

    If the cache backend is unreachable, lookups fall through to the store
    and the degradation is logged. Invalidation does not degrade: it raises
    CacheBackendUnavailable, because the caller cannot otherwise know the
    cache still holds the old value.

    Args:
        store: Persistent user store.
        cache: Cache store shared with other repositories.
        prefix: Cache namespace of this repository.
        ttl: Seconds a found user stays cached.
        negative_ttl: Seconds a missing user is remembered; None disables.
    """

    def __init__(
        self,
        store: UserStore,
        cache: CacheStore,
        *,
        prefix: str = "user",
        ttl: int | None = 900,
        negative_ttl: int | None = None,
    ) -> None:
        if not prefix or ":" in prefix:
            raise ValueError(f"Invalid cache prefix {prefix!r}")
        self._store = store
        self._cache = cache
        self._prefix = prefix
        self._ttl = ttl
        self._negative_ttl = negative_ttl

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def cache(self) -> CacheStore:
        return self._cache

    # ---- keys ----------------------------------------------------

    def id_key(self, user_id: int) -> str:
        return f"{self._prefix}:id:{user_id}"

    def email_key(self, email: str) -> str:
        return f"{self._prefix}:email:{normalize_email(email)}"

    def aliases_key(self, user_id: int) -> str:
        return f"{self._prefix}:aliases:{user_id}"

    def _alias_keys(self, user: User) -> list[str]:
        return [self.id_key(user.id), self.email_key(user.email)]

    async def _cached_aliases(self, user_id: int) -> set[str]:
        cached = await self._cache_get(self.aliases_key(user_id))
        if not isinstance(cached, list):
            return set()
        return {k for k in cached if isinstance(k, str)}

    # ---- lookups -------------------------------------------------

    async def find_by_email_with_role(self, email: str) -> User:
        email = normalize_email(email)
        return await self._find(self.email_key(email), email=email)

    async def find_by_id_with_role(self, user_id: int) -> User:
        return await self._find(self.id_key(user_id), id=user_id)

    async def _find(self, key: str, **criteria: Any) -> User:
        logger.debug("Looking up user in cache", extra={"cache_key": key})

        cached = await self._cache_get(key)
        if _is_not_found_marker(cached):
            logger.debug("Negative cache hit", extra={"cache_key": key})
            raise NotFound("user", **criteria)
        if cached is not None:
            logger.debug("Cache hit", extra={"cache_key": key})
            return User.model_validate(cached)

        logger.debug("Cache miss, querying store", extra={"cache_key": key})
        try:
            user = await self._store.find_one(**criteria)
        except NotFound:
            if self._negative_ttl:
                await self._cache_set(key, NOT_FOUND_MARKER, self._negative_ttl)
            raise

        # Index first: every alias present in the cache must be listed there
        aliases = self._alias_keys(user)
        index = await self._cached_aliases(user.id) | set(aliases)
        await self._cache_set(self.aliases_key(user.id), sorted(index), self._ttl)

        snapshot = user.model_dump(mode="json")
        for alias in aliases:
            await self._cache_set(alias, snapshot, self._ttl)

        return user

    async def _cache_get(self, key: str) -> Any | None:
        try:
            return await self._cache.get(key)
        except CacheBackendUnavailable as exc:
            logger.warning(
                "Cache unavailable, reading user from store: %s",
                exc,
                extra={"cache_key": key},
            )
            return None

    async def _cache_set(self, key: str, value: Any, ttl: int | None) -> None:
        # Writing the same snapshot twice on a race is harmless
        try:
            await self._cache.set(key, value, ttl)
        except CacheBackendUnavailable as exc:
            logger.warning(
                "Cache unavailable, user not cached: %s",
                exc,
                extra={"cache_key": key},
            )

    # ---- invalidation --------------------------------------------

    async def invalidate(self, user_id: int) -> None:
        """
        Remove every cached alias of a user. Invalidating a user that is
        not cached is a no-op.

        Keys come from the user's alias index (every alias written since the
        last invalidation), the cached snapshot and the store's current
        email, so email keys from before an email change go too.
        """
        keys = {self.id_key(user_id), self.aliases_key(user_id)}

        index = await self._cache.get(self.aliases_key(user_id))
        if isinstance(index, list):
            keys.update(k for k in index if isinstance(k, str))

        cached = await self._cache.get(self.id_key(user_id))
        if isinstance(cached, dict) and cached.get("email"):
            keys.add(self.email_key(cached["email"]))

        try:
            current = await self._store.find_one(id=user_id)
        except NotFound:
            logger.debug("User %s absent from store during invalidation", user_id)
        else:
            keys.add(self.email_key(current.email))

        removed = await self._cache.delete(*sorted(keys))

        logger.info(
            "User cache invalidated for %s",
            user_id,
            extra={"user_id": user_id, "keys_cleared": sorted(keys), "removed": removed},
        )

    async def clear_all(self) -> int:
        """Remove every entry in this repository's namespace."""
        removed = await self._cache.delete_prefix(f"{self._prefix}:")
        logger.info(
            "All user caches cleared",
            extra={"prefix": self._prefix, "removed": removed},
        )
        return removed


class DatabaseUserRepository:
    """User lookups straight from the store; cache operations are no-ops."""

    def __init__(self, store: UserStore) -> None:
        self._store = store

    async def find_by_email_with_role(self, email: str) -> User:
        logger.debug("Querying user by email directly from store")
        return await self._store.find_one(email=normalize_email(email))

    async def find_by_id_with_role(self, user_id: int) -> User:
        logger.debug("Querying user %s directly from store", user_id)
        return await self._store.find_one(id=user_id)

    async def invalidate(self, user_id: int) -> None:
        logger.debug("Cache invalidation requested for %s but no cache present", user_id)

    async def clear_all(self) -> int:
        logger.debug("Clear all requested but no cache present")
        return 0
