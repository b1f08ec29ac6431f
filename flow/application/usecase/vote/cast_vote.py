"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel
from flow.domain.service import TargetService, VoteService
from flow.domain.value import TargetId, TargetType, UserId, VoteType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    target_type: TargetType
    target_id: str  # UUID string
    voter_id: str  # User ID from authenticated user
    direction: VoteType


class CastVoteResponse(CamelModel):
    """Voter's direction after the call and the target's counters."""

    vote_type: VoteType | None
    upvotes: int
    downvotes: int
    net_votes: int


class CastVoteUseCase:
    """Use case for upvoting or downvoting a feedback or issue.

    Voting the same direction again retracts the vote; voting the other
    direction switches it.
    """

    def __init__(self, vote_service: VoteService, target_service: TargetService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            target_service: Target domain service
        """
        self.vote_service = vote_service
        self.target_service = target_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Raises:
            ValidationError: If the target kind can't be voted on
            NotFoundError: If the target doesn't exist
            ConflictError: If a concurrent vote won the race
        """
        target_id = TargetId(UUID(request.target_id))

        vote_type = await self.vote_service.cast_vote(
            voter_id=UserId(UUID(request.voter_id)),
            target_id=target_id,
            target_type=request.target_type,
            direction=request.direction,
        )

        target = await self.target_service.get_target(target_id, request.target_type)
        return CastVoteResponse(
            vote_type=vote_type,
            upvotes=target.upvotes,
            downvotes=target.downvotes,
            net_votes=target.net_votes,
        )
