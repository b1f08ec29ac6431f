"""Service repository interface."""

from abc import abstractmethod
from enum import Enum
from typing import Optional, Sequence

from flow.domain.model import Service
from flow.domain.repository.account import AccountRepository
from flow.domain.value import Email, ServiceId


class ServiceSortOrder(str, Enum):
    """Sort order for service listings."""

    NEWEST = "newest"  # created_at DESC
    OLDEST = "oldest"  # created_at ASC
    TOP = "top"  # upvotes DESC, created_at DESC


class ServiceRepository(AccountRepository):
    """Repository for Service aggregate.

    Defines the contract for service persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, service_id: ServiceId) -> Optional[Service]:
        """Find a service by ID."""
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[Service]:
        """Find a service by email."""
        pass

    @abstractmethod
    async def find_by_ids(self, service_ids: Sequence[ServiceId]) -> list[Service]:
        """Find several services at once (batch query)."""
        pass

    @abstractmethod
    async def find_all(
        self,
        search: Optional[str] = None,
        sort: ServiceSortOrder = ServiceSortOrder.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Service]:
        """Find services with search and pagination.

        Args:
            search: Case-insensitive substring of the service name
            sort: Sort order
            limit: Maximum number of services to return
            offset: Number of services to skip

        Returns:
            List of services matching the criteria
        """
        pass

    @abstractmethod
    async def count(self, search: Optional[str] = None) -> int:
        """Count services matching a name search."""
        pass

    @abstractmethod
    async def save(self, service: Service) -> Service:
        """Save a service (create or update).

        Raises:
            IntegrityError: If email is already taken
        """
        pass

    @abstractmethod
    async def delete(self, service_id: ServiceId) -> None:
        """Delete a service (hard delete)."""
        pass

    @abstractmethod
    async def increment_upvotes(self, service_id: ServiceId) -> None:
        """Atomically increment upvotes by 1."""
        pass

    @abstractmethod
    async def decrement_upvotes(self, service_id: ServiceId) -> None:
        """Atomically decrement upvotes by 1, never below 0."""
        pass
