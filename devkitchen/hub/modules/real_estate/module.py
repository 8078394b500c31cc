# devkitchen/hub/modules/real_estate/module.py
"""
Real estate module.

Adds the real-estate profile of an organization to the organization's
extension data, without the organization module knowing about it.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from devkitchen.hub.contracts.entity import Organization
from devkitchen.hub.contracts.extension import ListenerRegistry
from devkitchen.hub.core.extension.event import ExtensionDataEvent
from devkitchen.hub.modules.real_estate.repository import (
    RealEstateRepository,
    SqlRealEstateRepository,
)

logger = logging.getLogger(__name__)


class RealEstateModule:
    name = "real_estate"
    version = "1.0.0"

    def __init__(
        self,
        repository: RealEstateRepository | None = None,
        namespace: str = "realEstate",
    ) -> None:
        self._repository = repository
        self.namespace = namespace

    def configure(self, config: Mapping[str, Any]) -> None:
        self.namespace = config.get("namespace", self.namespace)

    @property
    def repository(self) -> RealEstateRepository:
        if self._repository is None:
            from devkitchen.hub.db.session import get_async_sessionmaker

            self._repository = SqlRealEstateRepository(get_async_sessionmaker())
        return self._repository

    def register(self, registry: ListenerRegistry) -> None:
        registry.register(
            Organization.kind,
            self.inject_real_estate_data,
            name=f"{self.name}.inject_real_estate_data",
        )

    async def inject_real_estate_data(
        self,
        event: ExtensionDataEvent,
        organization: Organization,
        args: Mapping[str, Any],
    ) -> None:
        real_estate = await self.repository.find_by_organization_id(organization.id)
        if real_estate is None:
            logger.debug("Organization %s is not a real estate", organization.id)
            return

        event.add_extension_data(
            self.namespace,
            {
                "id": real_estate.id,
                "creci": real_estate.creci,
                "state_registration": real_estate.state_registration,
                "created_at": real_estate.created_at,
                "updated_at": real_estate.updated_at,
            },
        )


module = RealEstateModule()
