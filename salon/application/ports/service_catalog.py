from __future__ import annotations

from abc import ABC, abstractmethod

from salon.domain.entities.service_catalog import Service


class ServiceCatalogPort(ABC):
    @abstractmethod
    def list_services(self) -> list[Service]:
        """All offerable services, in catalog order."""
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: str) -> Service | None:
        """Get service by id. Returns None if not in the catalog."""
        raise NotImplementedError
