from __future__ import annotations

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devkitchen.hub.contracts.entity import RealEstate
from devkitchen.hub.db.models.real_estate import RealEstateRecord
from devkitchen.hub.db.session import session_scope


class RealEstateRepository(Protocol):
    async def find_by_organization_id(self, organization_id: int) -> RealEstate | None: ...


class SqlRealEstateRepository:
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def find_by_organization_id(self, organization_id: int) -> RealEstate | None:
        stmt = (
            select(RealEstateRecord)
            .where(RealEstateRecord.organization_id == organization_id)
            .limit(1)
        )
        async with session_scope(self._sessionmaker) as session:
            record = (await session.execute(stmt)).scalars().first()
            return RealEstate.model_validate(record) if record is not None else None
