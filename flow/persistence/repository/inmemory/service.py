"""In-memory service repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from flow.domain.model import Service
from flow.domain.repository import ServiceRepository, ServiceSortOrder
from flow.domain.value import Email, ServiceId


class InMemoryServiceRepository(ServiceRepository):
    """In-memory implementation of ServiceRepository for testing."""

    def __init__(self) -> None:
        self._services: dict[ServiceId, Service] = {}

    def _matching(self, search: Optional[str]) -> list[Service]:
        services = list(self._services.values())
        if search:
            needle = search.lower()
            services = [s for s in services if needle in s.name.lower()]
        return services

    async def find_by_id(self, service_id: ServiceId) -> Optional[Service]:
        """Find a service by ID."""
        return self._services.get(service_id)

    async def find_by_email(self, email: Email) -> Optional[Service]:
        """Find a service by email."""
        for service in self._services.values():
            if service.email == email:
                return service
        return None

    async def find_by_ids(self, service_ids: Sequence[ServiceId]) -> list[Service]:
        """Find several services at once."""
        return [
            self._services[sid] for sid in set(service_ids) if sid in self._services
        ]

    async def find_all(
        self,
        search: Optional[str] = None,
        sort: ServiceSortOrder = ServiceSortOrder.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Service]:
        """Find services with search and pagination."""
        services = self._matching(search)

        if sort == ServiceSortOrder.OLDEST:
            services.sort(key=lambda s: s.created_at)
        elif sort == ServiceSortOrder.TOP:
            services.sort(key=lambda s: (s.upvotes, s.created_at), reverse=True)
        else:
            services.sort(key=lambda s: s.created_at, reverse=True)

        return services[offset : offset + limit]

    async def count(self, search: Optional[str] = None) -> int:
        """Count services matching a name search."""
        return len(self._matching(search))

    async def save(self, service: Service) -> Service:
        """Save a service; updates keep the stored upvote count.

        Raises:
            IntegrityError: If another service has the same email
        """
        for other in self._services.values():
            if other.id != service.id and other.email == service.email:
                raise IntegrityError("Duplicate service", None, Exception())

        existing = self._services.get(service.id)
        if existing:
            service = service.model_copy(update={"upvotes": existing.upvotes})
        self._services[service.id] = service
        return service

    async def delete(self, service_id: ServiceId) -> None:
        """Delete a service."""
        self._services.pop(service_id, None)

    async def set_refresh_token(
        self, account_id: UUID, refresh_token: Optional[str]
    ) -> None:
        """Replace the service's stored refresh token."""
        service = self._services.get(ServiceId(account_id))
        if service:
            self._services[service.id] = service.model_copy(
                update={"refresh_token": refresh_token}
            )

    async def increment_upvotes(self, service_id: ServiceId) -> None:
        """Increment a service's upvotes by 1."""
        service = self._services.get(service_id)
        if service:
            self._services[service_id] = service.model_copy(
                update={"upvotes": service.upvotes + 1}
            )

    async def decrement_upvotes(self, service_id: ServiceId) -> None:
        """Decrement a service's upvotes by 1 (minimum 0)."""
        service = self._services.get(service_id)
        if service:
            self._services[service_id] = service.model_copy(
                update={"upvotes": max(service.upvotes - 1, 0)}
            )
