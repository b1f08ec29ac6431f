"""PostgreSQL implementation of Target repository."""

from collections import defaultdict
from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import delete, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

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
from flow.persistence.mappers import row_to_target, target_to_dict
from flow.persistence.tables import targets_table


class PostgresTargetRepository(TargetRepository):
    """PostgreSQL implementation of TargetRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _matching(
        service_id: ServiceId, target_type: TargetType, search: Optional[str]
    ):
        conditions = [
            targets_table.c.service_id == service_id,
            targets_table.c.kind == target_type.value,
        ]
        if search:
            # autoescape keeps % and _ in the search literal
            conditions.append(
                or_(
                    targets_table.c.title.icontains(search, autoescape=True),
                    targets_table.c.description.icontains(search, autoescape=True),
                )
            )
        return conditions

    async def find_by_id(self, target_id: TargetId) -> Optional[Target]:
        """Find a target by ID."""
        stmt = select(targets_table).where(targets_table.c.id == target_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_target(row._asdict()) if row else None

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
        with logfire.span(
            "target_repository.find_for_service",
            service_id=str(service_id),
            target_type=target_type.value,
            search=search,
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            stmt = select(targets_table).where(
                *self._matching(service_id, target_type, search)
            )

            if sort == TargetSortOrder.NEWEST:
                stmt = stmt.order_by(desc(targets_table.c.created_at))
            elif sort == TargetSortOrder.OLDEST:
                stmt = stmt.order_by(targets_table.c.created_at)
            else:
                stmt = stmt.order_by(
                    desc(targets_table.c.net_votes), desc(targets_table.c.created_at)
                )

            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            return [row_to_target(row._asdict()) for row in result.fetchall()]

    async def count_for_service(
        self,
        service_id: ServiceId,
        target_type: TargetType,
        search: Optional[str] = None,
    ) -> int:
        """Count a service's targets of one kind matching a search."""
        stmt = (
            select(func.count())
            .select_from(targets_table)
            .where(*self._matching(service_id, target_type, search))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_author(
        self,
        author_id: UserId,
        target_type: TargetType,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Target]:
        """Find targets of one kind opened by a user, newest first."""
        stmt = (
            select(targets_table)
            .where(
                targets_table.c.opened_by == author_id,
                targets_table.c.kind == target_type.value,
            )
            .order_by(desc(targets_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_target(row._asdict()) for row in result.fetchall()]

    async def count_by_author(self, author_id: UserId, target_type: TargetType) -> int:
        """Count targets of one kind opened by a user."""
        stmt = (
            select(func.count())
            .select_from(targets_table)
            .where(
                targets_table.c.opened_by == author_id,
                targets_table.c.kind == target_type.value,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_type_for_service(
        self, service_id: ServiceId
    ) -> dict[TargetType, int]:
        """Count a service's targets grouped by kind."""
        stmt = (
            select(targets_table.c.kind, func.count())
            .where(targets_table.c.service_id == service_id)
            .group_by(targets_table.c.kind)
        )
        result = await self.session.execute(stmt)
        return {TargetType(kind): count for kind, count in result.all()}

    async def count_by_service_for_author(
        self, author_id: UserId
    ) -> dict[ServiceId, dict[TargetType, int]]:
        """Count a user's targets grouped by service and kind."""
        stmt = (
            select(targets_table.c.service_id, targets_table.c.kind, func.count())
            .where(targets_table.c.opened_by == author_id)
            .group_by(targets_table.c.service_id, targets_table.c.kind)
        )
        result = await self.session.execute(stmt)

        grouped: dict[ServiceId, dict[TargetType, int]] = defaultdict(dict)
        for service_id, kind, count in result.all():
            grouped[ServiceId(service_id)][TargetType(kind)] = count
        return dict(grouped)

    async def find_created_since(
        self, service_id: ServiceId, since: datetime
    ) -> list[tuple[TargetType, datetime]]:
        """List (kind, created_at) for a service's recent targets."""
        stmt = select(targets_table.c.kind, targets_table.c.created_at).where(
            targets_table.c.service_id == service_id,
            targets_table.c.created_at >= since,
        )
        result = await self.session.execute(stmt)
        return [(TargetType(kind), created_at) for kind, created_at in result.all()]

    async def find_ids_for_service(self, service_id: ServiceId) -> list[TargetId]:
        """List IDs of every target filed against a service."""
        stmt = select(targets_table.c.id).where(
            targets_table.c.service_id == service_id
        )
        result = await self.session.execute(stmt)
        return [TargetId(target_id) for target_id in result.scalars().all()]

    async def save(self, target: Target) -> Target:
        """Insert a new target."""
        with logfire.span(
            "target_repository.save",
            target_id=str(target.id),
            target_type=target.target_type.value,
        ):
            stmt = targets_table.insert().values(**target_to_dict(target))
            await self.session.execute(stmt)
            await self.session.flush()
            return target

    async def delete(self, target_id: TargetId) -> None:
        """Delete a target (hard delete)."""
        stmt = delete(targets_table).where(targets_table.c.id == target_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def update_status(
        self, target_id: TargetId, status: TargetStatus
    ) -> Optional[Target]:
        """Set a target's status."""
        stmt = (
            update(targets_table)
            .where(targets_table.c.id == target_id)
            .values(status=status.value, updated_at=utcnow())
            .returning(*targets_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_target(row._asdict()) if row else None

    async def apply_vote_delta(self, target_id: TargetId, delta: VoteDelta) -> None:
        """Atomically add a vote delta to the target's counters."""
        stmt = (
            update(targets_table)
            .where(targets_table.c.id == target_id)
            .values(
                upvotes=func.greatest(targets_table.c.upvotes + delta.upvotes, 0),
                downvotes=func.greatest(targets_table.c.downvotes + delta.downvotes, 0),
                net_votes=targets_table.c.net_votes + delta.net_votes,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def adjust_comment_count(self, target_id: TargetId, amount: int) -> None:
        """Atomically add ``amount`` to comment_count, never below 0."""
        stmt = (
            update(targets_table)
            .where(targets_table.c.id == target_id)
            .values(
                comment_count=func.greatest(targets_table.c.comment_count + amount, 0)
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
