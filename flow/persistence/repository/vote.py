"""PostgreSQL implementations of the vote ledgers."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from flow.domain.model import ServiceVote, Vote
from flow.domain.model.common import utcnow
from flow.domain.repository import ServiceVoteRepository, VoteRepository
from flow.domain.value import ServiceId, TargetId, TargetType, UserId, VoteId, VoteType
from flow.persistence.mappers import (
    row_to_service_vote,
    row_to_vote,
    service_vote_to_dict,
    vote_to_dict,
)
from flow.persistence.tables import service_votes_table, votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    The unique constraint on (voter_id, target_type, target_id) turns a
    racing second insert into an IntegrityError.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_voter_and_target(
        self,
        voter_id: UserId,
        target_type: TargetType,
        target_id: TargetId,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.voter_id == voter_id,
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def switch_vote_type(
        self, vote_id: VoteId, expected: VoteType, new: VoteType
    ) -> Optional[Vote]:
        """Change a vote's direction if it still holds ``expected``."""
        stmt = (
            update(votes_table)
            .where(
                votes_table.c.id == vote_id,
                votes_table.c.vote_type == expected.value,
            )
            .values(vote_type=new.value, updated_at=utcnow())
            .returning(*votes_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_vote(row._asdict()) if row else None

    async def delete_if_matches(self, vote_id: VoteId, expected: VoteType) -> bool:
        """Delete a vote if it still holds ``expected``."""
        stmt = delete(votes_table).where(
            votes_table.c.id == vote_id,
            votes_table.c.vote_type == expected.value,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_target(self, target_type: TargetType, target_id: TargetId) -> int:
        """Delete every vote on a target."""
        stmt = delete(votes_table).where(
            votes_table.c.target_type == target_type.value,
            votes_table.c.target_id == target_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]


class PostgresServiceVoteRepository(ServiceVoteRepository):
    """PostgreSQL implementation of ServiceVoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_voter_and_service(
        self, voter_id: UserId, service_id: ServiceId
    ) -> Optional[ServiceVote]:
        """Find a user's upvote on a service."""
        stmt = select(service_votes_table).where(
            service_votes_table.c.voter_id == voter_id,
            service_votes_table.c.service_id == service_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_service_vote(row._asdict()) if row else None

    async def save(self, vote: ServiceVote) -> ServiceVote:
        """Insert a service upvote."""
        stmt = insert(service_votes_table).values(**service_vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def delete_by_voter_and_service(
        self, voter_id: UserId, service_id: ServiceId
    ) -> bool:
        """Delete a user's upvote on a service."""
        stmt = delete(service_votes_table).where(
            service_votes_table.c.voter_id == voter_id,
            service_votes_table.c.service_id == service_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_service(self, service_id: ServiceId) -> int:
        """Delete every upvote on a service."""
        stmt = delete(service_votes_table).where(
            service_votes_table.c.service_id == service_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def find_created_since(
        self, service_id: ServiceId, since: datetime
    ) -> list[datetime]:
        """List creation times of a service's upvotes at or after ``since``."""
        stmt = select(service_votes_table.c.created_at).where(
            service_votes_table.c.service_id == service_id,
            service_votes_table.c.created_at >= since,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
