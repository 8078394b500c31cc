from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

from devkitchen.hub.core.config import settings


class Base(DeclarativeBase):
    """Shared SQLAlchemy declarative base."""

    metadata = MetaData(schema=settings.database_schema)
