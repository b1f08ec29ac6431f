"""In-memory vote repositories for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from flow.domain.model import ServiceVote, Vote
from flow.domain.model.common import utcnow
from flow.domain.repository import ServiceVoteRepository, VoteRepository
from flow.domain.value import ServiceId, TargetId, TargetType, UserId, VoteId, VoteType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[VoteId, Vote] = {}

    async def find_by_voter_and_target(
        self,
        voter_id: UserId,
        target_type: TargetType,
        target_id: TargetId,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target."""
        for vote in self._votes.values():
            if (
                vote.voter_id == voter_id
                and vote.target_type == target_type
                and vote.target_id == target_id
            ):
                return vote
        return None

    async def save(self, vote: Vote) -> Vote:
        """Save a new vote.

        Raises:
            IntegrityError: If the voter already has a vote on this target
        """
        if await self.find_by_voter_and_target(
            vote.voter_id, vote.target_type, vote.target_id
        ):
            raise IntegrityError("Duplicate vote", None, Exception())
        self._votes[vote.id] = vote
        return vote

    async def switch_vote_type(
        self, vote_id: VoteId, expected: VoteType, new: VoteType
    ) -> Optional[Vote]:
        """Change a vote's direction if it still holds ``expected``."""
        vote = self._votes.get(vote_id)
        if vote is None or vote.vote_type != expected:
            return None
        updated = vote.model_copy(update={"vote_type": new, "updated_at": utcnow()})
        self._votes[vote_id] = updated
        return updated

    async def delete_if_matches(self, vote_id: VoteId, expected: VoteType) -> bool:
        """Delete a vote if it still holds ``expected``."""
        vote = self._votes.get(vote_id)
        if vote is None or vote.vote_type != expected:
            return False
        del self._votes[vote_id]
        return True

    async def delete_by_target(self, target_type: TargetType, target_id: TargetId) -> int:
        """Delete every vote on a target."""
        doomed = [
            v.id
            for v in self._votes.values()
            if v.target_type == target_type and v.target_id == target_id
        ]
        for vote_id in doomed:
            del self._votes[vote_id]
        return len(doomed)


class InMemoryServiceVoteRepository(ServiceVoteRepository):
    """In-memory implementation of ServiceVoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[ServiceVote] = []

    async def find_by_voter_and_service(
        self, voter_id: UserId, service_id: ServiceId
    ) -> Optional[ServiceVote]:
        """Find a user's upvote on a service."""
        for vote in self._votes:
            if vote.voter_id == voter_id and vote.service_id == service_id:
                return vote
        return None

    async def save(self, vote: ServiceVote) -> ServiceVote:
        """Save a new service upvote."""
        if await self.find_by_voter_and_service(vote.voter_id, vote.service_id):
            raise IntegrityError("Duplicate service vote", None, Exception())
        self._votes.append(vote)
        return vote

    async def delete_by_voter_and_service(
        self, voter_id: UserId, service_id: ServiceId
    ) -> bool:
        """Delete a user's upvote on a service."""
        vote = await self.find_by_voter_and_service(voter_id, service_id)
        if vote is None:
            return False
        self._votes.remove(vote)
        return True

    async def delete_by_service(self, service_id: ServiceId) -> int:
        """Delete every upvote on a service."""
        before = len(self._votes)
        self._votes = [v for v in self._votes if v.service_id != service_id]
        return before - len(self._votes)

    async def find_created_since(
        self, service_id: ServiceId, since: datetime
    ) -> list[datetime]:
        """List creation times of a service's recent upvotes."""
        return [
            v.created_at
            for v in self._votes
            if v.service_id == service_id and v.created_at >= since
        ]
