from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from devkitchen.hub.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RealEstateRecord(Base):
    __tablename__ = "real_estates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # Organizations belong to another module; no FK across module boundaries
    organization_id: Mapped[int] = mapped_column(Integer, index=True, unique=True)
    creci: Mapped[str] = mapped_column(String, nullable=False)
    state_registration: Mapped[str | None] = mapped_column(String, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )
