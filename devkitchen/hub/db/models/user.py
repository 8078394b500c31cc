from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devkitchen.hub.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RoleRecord(Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    password: Mapped[str] = mapped_column(String, nullable=False)

    role_id: Mapped[int | None] = mapped_column(
        ForeignKey(f"{Base.metadata.schema}.roles.id"), nullable=True
    )
    # Loaded explicitly by the store; lazy loads fail loudly under asyncio
    role: Mapped[RoleRecord | None] = relationship(lazy="raise")

    preferences: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    tenant_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )


# Lookups compare lower(email), so uniqueness must too
Index("uq_users_email_lower", func.lower(UserRecord.email), unique=True)
