from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from devkitchen.hub.contracts.entity import User


@runtime_checkable
class UserStore(Protocol):
    """Persistent store for users (source of truth)."""

    async def find_one(self, **criteria: Any) -> User:
        """Return the user matching all criteria with its role, or raise NotFound."""
        ...


@runtime_checkable
class UserRepository(Protocol):
    """Identity lookups used by the rest of the application."""

    async def find_by_email_with_role(self, email: str) -> User: ...

    async def find_by_id_with_role(self, user_id: int) -> User: ...

    async def invalidate(self, user_id: int) -> None: ...

    async def clear_all(self) -> int: ...
