"""Get vote use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel
from flow.domain.service import VoteService
from flow.domain.value import TargetId, TargetType, UserId, VoteType


class GetVoteRequest(BaseModel):
    """Get vote request."""

    target_type: TargetType
    target_id: str
    voter_id: str


class GetVoteResponse(CamelModel):
    """Current vote direction, or None."""

    vote_type: VoteType | None


class GetVoteUseCase:
    """Use case for reading the caller's vote on a target."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetVoteRequest) -> GetVoteResponse:
        vote_type = await self.vote_service.get_vote(
            UserId(UUID(request.voter_id)),
            TargetId(UUID(request.target_id)),
            request.target_type,
        )
        return GetVoteResponse(vote_type=vote_type)
