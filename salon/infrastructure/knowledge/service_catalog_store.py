from __future__ import annotations

from typing import Iterable

from salon.application.ports.service_catalog import ServiceCatalogPort
from salon.domain.entities.service_catalog import Service
from salon.infrastructure.knowledge.service_catalog_data import SERVICE_CATALOG


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, catalog: Iterable[Service] | None = None) -> None:
        self._services = tuple(catalog if catalog is not None else SERVICE_CATALOG)
        self._by_id = {service.id: service for service in self._services}
        if len(self._by_id) != len(self._services):
            raise ValueError("Service ids must be unique within the catalog")
        if any(service.price < 0 for service in self._services):
            raise ValueError("Service prices must be non-negative")

    def list_services(self) -> list[Service]:
        return list(self._services)

    def get_service(self, service_id: str) -> Service | None:
        return self._by_id.get(service_id.strip())
