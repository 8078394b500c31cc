# tests/conftest.py
from __future__ import annotations

from typing import Any

import pytest

from devkitchen.hub.contracts.entity import Organization, Role, User
from devkitchen.hub.core.cache import MemoryCacheStore
from devkitchen.hub.core.errors import NotFound


class FakeUserStore:
    """In-memory user store that records every query."""

    def __init__(self, users: list[User] | None = None) -> None:
        self.users: dict[int, User] = {u.id: u for u in users or []}
        self.queries: list[dict[str, Any]] = []

    async def find_one(self, **criteria: Any) -> User:
        self.queries.append(criteria)
        for user in self.users.values():
            if all(
                (getattr(user, k).lower() == str(v).lower() if k == "email" else getattr(user, k) == v)
                for k, v in criteria.items()
            ):
                return user.model_copy(deep=True)
        raise NotFound("user", **criteria)

    def update(self, user: User) -> None:
        self.users[user.id] = user


@pytest.fixture
def admin_role() -> Role:
    return Role(id=1, name="admin", description="Administrator")


@pytest.fixture
def user(admin_role: Role) -> User:
    return User(id=7, name="Alice", email="a@x.com", role=admin_role)


@pytest.fixture
def user_store(user: User) -> FakeUserStore:
    return FakeUserStore([user])


@pytest.fixture
def cache() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture
def organization() -> Organization:
    return Organization(id=1, name="Acme Imóveis", organization_type="real_estate")
