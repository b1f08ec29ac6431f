"""Service upvote use cases."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel
from flow.domain.service import VoteService
from flow.domain.value import ServiceId, UserId


class ServiceUpvoteRequest(BaseModel):
    """Service upvote request."""

    service_id: str
    voter_id: str  # User ID from authenticated user


class ServiceUpvoteResponse(CamelModel):
    """Service upvote state after the call."""

    service_id: str
    upvotes: int
    has_upvoted: bool


class UpvoteServiceUseCase:
    """Use case for a user upvoting a service."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: ServiceUpvoteRequest) -> ServiceUpvoteResponse:
        """Upvote a service.

        Raises:
            NotFoundError: If the service doesn't exist
            ConflictError: If the user already upvoted it
        """
        service = await self.vote_service.upvote_service(
            UserId(UUID(request.voter_id)), ServiceId(UUID(request.service_id))
        )
        return ServiceUpvoteResponse(
            service_id=str(service.id), upvotes=service.upvotes, has_upvoted=True
        )


class RemoveServiceUpvoteUseCase:
    """Use case for a user withdrawing their upvote from a service."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: ServiceUpvoteRequest) -> ServiceUpvoteResponse:
        """Remove an upvote.

        Raises:
            NotFoundError: If the service or the upvote doesn't exist
        """
        service = await self.vote_service.remove_service_upvote(
            UserId(UUID(request.voter_id)), ServiceId(UUID(request.service_id))
        )
        return ServiceUpvoteResponse(
            service_id=str(service.id), upvotes=service.upvotes, has_upvoted=False
        )
