from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from devkitchen.hub.contracts.entity import User
from devkitchen.hub.core.errors import NotFound
from devkitchen.hub.db.models.user import UserRecord
from devkitchen.hub.db.session import session_scope

logger = logging.getLogger(__name__)

_LOOKUP_COLUMNS = ("id", "email", "tenant_id")


def build_user_query(**criteria: Any) -> Select[tuple[UserRecord]]:
    """
    SELECT for one user with its role eagerly loaded.

    Email comparison is case-insensitive so that it agrees with the
    normalised email cache keys.
    """
    unknown = set(criteria) - set(_LOOKUP_COLUMNS)
    if unknown:
        raise ValueError(f"Unsupported user lookup criteria: {sorted(unknown)}")
    if not criteria:
        raise ValueError("At least one lookup criterion is required")

    stmt = select(UserRecord).options(selectinload(UserRecord.role))
    for column, value in criteria.items():
        if column == "email":
            stmt = stmt.where(func.lower(UserRecord.email) == str(value).strip().lower())
        else:
            stmt = stmt.where(getattr(UserRecord, column) == value)
    return stmt.order_by(UserRecord.id).limit(1)


class SqlUserStore:
    """User store backed by SQLAlchemy (the source of truth)."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def find_one(self, **criteria: Any) -> User:
        stmt = build_user_query(**criteria)

        async with session_scope(self._sessionmaker) as session:
            record = (await session.execute(stmt)).scalars().first()
            if record is None:
                logger.debug("No user row for %s", criteria)
                raise NotFound("user", **criteria)
            return User.model_validate(record)
