"""In-memory target repository for testing."""

from collections import defaultdict
from datetime import datetime
from typing import Optional

from flow.domain.model import Target
from flow.domain.model.common import utcnow
from flow.domain.repository import TargetRepository, TargetSortOrder
from flow.domain.value import (
    ServiceId,
    TargetId,
    TargetStatus,
    TargetType,
    UserId,
    VoteDelta,
)


class InMemoryTargetRepository(TargetRepository):
    """In-memory implementation of TargetRepository for testing."""

    def __init__(self) -> None:
        self._targets: dict[TargetId, Target] = {}

    def _matching(
        self, service_id: ServiceId, target_type: TargetType, search: Optional[str]
    ) -> list[Target]:
        targets = [
            t
            for t in self._targets.values()
            if t.service_id == service_id and t.target_type == target_type
        ]
        if search:
            needle = search.lower()
            targets = [
                t
                for t in targets
                if needle in t.title.lower() or needle in t.description.lower()
            ]
        return targets

    async def find_by_id(self, target_id: TargetId) -> Optional[Target]:
        """Find a target by ID."""
        return self._targets.get(target_id)

    async def find_for_service(
        self,
        service_id: ServiceId,
        target_type: TargetType,
        search: Optional[str] = None,
        sort: TargetSortOrder = TargetSortOrder.VOTES,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Target]:
        """Find a service's targets of one kind."""
        targets = self._matching(service_id, target_type, search)

        if sort == TargetSortOrder.NEWEST:
            targets.sort(key=lambda t: t.created_at, reverse=True)
        elif sort == TargetSortOrder.OLDEST:
            targets.sort(key=lambda t: t.created_at)
        else:
            targets.sort(key=lambda t: (t.net_votes, t.created_at), reverse=True)

        return targets[offset : offset + limit]

    async def count_for_service(
        self,
        service_id: ServiceId,
        target_type: TargetType,
        search: Optional[str] = None,
    ) -> int:
        """Count a service's targets of one kind matching a search."""
        return len(self._matching(service_id, target_type, search))

    async def find_by_author(
        self,
        author_id: UserId,
        target_type: TargetType,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Target]:
        """Find targets of one kind opened by a user, newest first."""
        targets = [
            t
            for t in self._targets.values()
            if t.opened_by == author_id and t.target_type == target_type
        ]
        targets.sort(key=lambda t: t.created_at, reverse=True)
        return targets[offset : offset + limit]

    async def count_by_author(self, author_id: UserId, target_type: TargetType) -> int:
        """Count targets of one kind opened by a user."""
        return sum(
            1
            for t in self._targets.values()
            if t.opened_by == author_id and t.target_type == target_type
        )

    async def count_by_type_for_service(
        self, service_id: ServiceId
    ) -> dict[TargetType, int]:
        """Count a service's targets grouped by kind."""
        counts: dict[TargetType, int] = defaultdict(int)
        for target in self._targets.values():
            if target.service_id == service_id:
                counts[target.target_type] += 1
        return dict(counts)

    async def count_by_service_for_author(
        self, author_id: UserId
    ) -> dict[ServiceId, dict[TargetType, int]]:
        """Count a user's targets grouped by service and kind."""
        grouped: dict[ServiceId, dict[TargetType, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        for target in self._targets.values():
            if target.opened_by == author_id:
                grouped[target.service_id][target.target_type] += 1
        return {sid: dict(counts) for sid, counts in grouped.items()}

    async def find_created_since(
        self, service_id: ServiceId, since: datetime
    ) -> list[tuple[TargetType, datetime]]:
        """List (kind, created_at) for a service's recent targets."""
        return [
            (t.target_type, t.created_at)
            for t in self._targets.values()
            if t.service_id == service_id and t.created_at >= since
        ]

    async def find_ids_for_service(self, service_id: ServiceId) -> list[TargetId]:
        """List IDs of every target filed against a service."""
        return [t.id for t in self._targets.values() if t.service_id == service_id]

    async def save(self, target: Target) -> Target:
        """Save a target."""
        self._targets[target.id] = target
        return target

    async def delete(self, target_id: TargetId) -> None:
        """Delete a target."""
        self._targets.pop(target_id, None)

    async def update_status(
        self, target_id: TargetId, status: TargetStatus
    ) -> Optional[Target]:
        """Set a target's status."""
        target = self._targets.get(target_id)
        if target is None:
            return None
        updated = target.model_copy(update={"status": status, "updated_at": utcnow()})
        self._targets[target_id] = updated
        return updated

    async def apply_vote_delta(self, target_id: TargetId, delta: VoteDelta) -> None:
        """Add a vote delta to the target's counters."""
        target = self._targets.get(target_id)
        if target is None:
            return
        self._targets[target_id] = target.model_copy(
            update={
                "upvotes": max(target.upvotes + delta.upvotes, 0),
                "downvotes": max(target.downvotes + delta.downvotes, 0),
                "net_votes": target.net_votes + delta.net_votes,
            }
        )

    async def adjust_comment_count(self, target_id: TargetId, amount: int) -> None:
        """Add ``amount`` to comment_count, never below 0."""
        target = self._targets.get(target_id)
        if target is None:
            return
        self._targets[target_id] = target.model_copy(
            update={"comment_count": max(target.comment_count + amount, 0)}
        )
