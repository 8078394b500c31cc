from __future__ import annotations

import pytest

from devkitchen.hub.core.errors import NotFound
from devkitchen.hub.users import DatabaseUserRepository


@pytest.mark.asyncio
async def test_every_lookup_hits_store(user_store):
    repo = DatabaseUserRepository(user_store)

    await repo.find_by_email_with_role("A@x.com")
    await repo.find_by_id_with_role(7)

    assert user_store.queries == [{"email": "a@x.com"}, {"id": 7}]


@pytest.mark.asyncio
async def test_missing_user_raises_not_found(user_store):
    repo = DatabaseUserRepository(user_store)

    with pytest.raises(NotFound):
        await repo.find_by_id_with_role(404)


@pytest.mark.asyncio
async def test_cache_operations_are_noops(user_store):
    repo = DatabaseUserRepository(user_store)

    await repo.invalidate(7)

    assert await repo.clear_all() == 0
    assert user_store.queries == []
