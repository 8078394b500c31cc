from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from devkitchen.hub.contracts.cache import CacheStore
from devkitchen.hub.contracts.entity import User
from devkitchen.hub.contracts.repository import UserRepository
from devkitchen.hub.core.errors import CacheBackendUnavailable, NotFound
from devkitchen.hub.users.factory import get_cache_info

logger = logging.getLogger(__name__)


class UserService:
    """Application-facing user operations on top of a user repository."""

    def __init__(
        self,
        repository: UserRepository,
        cache: CacheStore | None = None,
    ) -> None:
        self._repository = repository
        self._cache = cache

    @property
    def repository(self) -> UserRepository:
        return self._repository

    async def get_authenticated_user_data(self, email: str) -> User:
        """User for a login response; failures are logged and re-raised."""
        try:
            return await self._repository.find_by_email_with_role(email)
        except NotFound as exc:
            logger.error(
                "Failed to get user data: %s",
                exc,
                extra={"email": email},
            )
            raise

    async def find_user_by_email(self, email: str) -> User:
        return await self._repository.find_by_email_with_role(email)

    async def find_user_by_id(self, user_id: int) -> User:
        return await self._repository.find_by_id_with_role(user_id)

    async def invalidate_user_cache(self, user_id: int) -> None:
        await self._repository.invalidate(user_id)

    async def clear_all_user_cache(self) -> int:
        return await self._repository.clear_all()

    async def handle_user_written(self, user_id: int) -> None:
        """
        Hook for after a user row is updated or deleted.

        The write already happened, so a cache outage is reported rather
        than failing the caller; entries then age out through their TTL.
        """
        try:
            await self._repository.invalidate(user_id)
        except CacheBackendUnavailable as exc:
            logger.warning(
                "Failed to invalidate user cache after write: %s",
                exc,
                extra={"user_id": user_id},
            )

    async def debug_info(self) -> dict[str, Any]:
        return {
            "repository_class": type(self._repository).__name__,
            "cache_info": await get_cache_info(self._cache),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @staticmethod
    def format_user_for_response(user: User) -> dict[str, Any]:
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": (
                {
                    "id": user.role.id,
                    "name": user.role.name,
                    "description": user.role.description,
                }
                if user.role
                else None
            ),
            "created_at": user.created_at.isoformat() if user.created_at else None,
            "updated_at": user.updated_at.isoformat() if user.updated_at else None,
        }
