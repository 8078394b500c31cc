"""User identity lookups with cache-aside and invalidation."""

from devkitchen.hub.users.factory import (
    create_user_repository,
    get_cache_info,
    is_cache_available,
)
from devkitchen.hub.users.repository import (
    CachedUserRepository,
    DatabaseUserRepository,
)
from devkitchen.hub.users.service import UserService
from devkitchen.hub.users.store import SqlUserStore

__all__ = [
    "CachedUserRepository",
    "DatabaseUserRepository",
    "SqlUserStore",
    "UserService",
    "create_user_repository",
    "get_cache_info",
    "is_cache_available",
]
