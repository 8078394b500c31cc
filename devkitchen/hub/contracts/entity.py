# devkitchen/hub/contracts/entity.py
"""
Entity contracts shared across modules.

Every entity carries a stable ``id`` and a ``kind`` tag. The kind selects
which extension listeners apply and which cache namespace a repository uses.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


@runtime_checkable
class Entity(Protocol):
    """Anything with an identity and a kind tag."""

    kind: ClassVar[str]

    @property
    def id(self) -> Any: ...


def entity_kind(entity: Any) -> str:
    """Return the kind tag of an entity, or raise TypeError."""
    kind = getattr(entity, "kind", None)
    if not isinstance(kind, str) or not kind:
        raise TypeError(
            f"{type(entity).__name__} has no 'kind' tag; pass kind= explicitly"
        )
    return kind


class Role(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None


class User(BaseModel):
    """A user with its role relation attached."""

    model_config = ConfigDict(from_attributes=True)

    kind: ClassVar[str] = "user"

    id: int
    name: str
    email: str
    role: Role | None = None
    preferences: dict[str, Any] = Field(default_factory=dict)
    tenant_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Organization(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: ClassVar[str] = "organization"

    id: int
    name: str
    organization_type: str | None = None
    email: str | None = None
    active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RealEstate(BaseModel):
    """Real-estate profile attached to an organization by the real_estate module."""

    model_config = ConfigDict(from_attributes=True)

    kind: ClassVar[str] = "real_estate"

    id: int
    organization_id: int
    creci: str
    state_registration: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
