"""Target repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional

from flow.domain.model import Target
from flow.domain.value import (
    ServiceId,
    TargetId,
    TargetStatus,
    TargetType,
    UserId,
    VoteDelta,
)


class TargetSortOrder(str, Enum):
    """Sort order for target listings."""

    VOTES = "votes"  # net_votes DESC, created_at DESC
    NEWEST = "newest"  # created_at DESC
    OLDEST = "oldest"  # created_at ASC


class TargetRepository(ABC):
    """Repository for feedback, issues and bugs.

    Counter mutations (apply_vote_delta, adjust_comment_count) must be atomic
    at the storage level: an "add n" update, never read-then-write.
    """

    @abstractmethod
    async def find_by_id(self, target_id: TargetId) -> Optional[Target]:
        """Find a target by ID.

        Args:
            target_id: The target's unique identifier

        Returns:
            The target if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_for_service(
        self,
        service_id: ServiceId,
        target_type: TargetType,
        search: Optional[str] = None,
        sort: TargetSortOrder = TargetSortOrder.VOTES,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Target]:
        """Find a service's targets of one kind.

        Args:
            service_id: Owning service
            target_type: Feedback, issue or bug
            search: Case-insensitive substring of title or description
            sort: Sort order
            limit: Maximum number of targets to return
            offset: Number of targets to skip

        Returns:
            List of targets matching the criteria
        """
        pass

    @abstractmethod
    async def count_for_service(
        self,
        service_id: ServiceId,
        target_type: TargetType,
        search: Optional[str] = None,
    ) -> int:
        """Count a service's targets of one kind matching a search."""
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UserId,
        target_type: TargetType,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Target]:
        """Find targets of one kind opened by a user, newest first."""
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UserId, target_type: TargetType) -> int:
        """Count targets of one kind opened by a user."""
        pass

    @abstractmethod
    async def count_by_type_for_service(
        self, service_id: ServiceId
    ) -> dict[TargetType, int]:
        """Count a service's targets grouped by kind.

        Returns:
            Mapping of kind to count; kinds with no targets may be absent
        """
        pass

    @abstractmethod
    async def count_by_service_for_author(
        self, author_id: UserId
    ) -> dict[ServiceId, dict[TargetType, int]]:
        """Count a user's targets grouped by service and kind."""
        pass

    @abstractmethod
    async def find_created_since(
        self, service_id: ServiceId, since: datetime
    ) -> list[tuple[TargetType, datetime]]:
        """List (kind, created_at) for a service's targets created at or after ``since``."""
        pass

    @abstractmethod
    async def find_ids_for_service(self, service_id: ServiceId) -> list[TargetId]:
        """List IDs of every target filed against a service."""
        pass

    @abstractmethod
    async def save(self, target: Target) -> Target:
        """Save a new target."""
        pass

    @abstractmethod
    async def delete(self, target_id: TargetId) -> None:
        """Delete a target (hard delete)."""
        pass

    @abstractmethod
    async def update_status(
        self, target_id: TargetId, status: TargetStatus
    ) -> Optional[Target]:
        """Set a target's status.

        Returns:
            Updated target, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def apply_vote_delta(self, target_id: TargetId, delta: VoteDelta) -> None:
        """Atomically add a vote delta to the target's counters.

        Args:
            target_id: Target to update
            delta: Amounts to add to upvotes, downvotes and net_votes
        """
        pass

    @abstractmethod
    async def adjust_comment_count(self, target_id: TargetId, amount: int) -> None:
        """Atomically add ``amount`` (may be negative) to comment_count, never below 0."""
        pass
