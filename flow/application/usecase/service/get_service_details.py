"""Get service details use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel, CountsInfo, ServiceInfo
from flow.domain.error import NotFoundError
from flow.domain.service import ServiceAccountService, TargetService, VoteService
from flow.domain.value import ServiceId, UserId


class GetServiceDetailsRequest(BaseModel):
    """Get service details request."""

    service_id: str  # UUID string
    viewer_id: str | None = None  # User ID if the caller is a logged-in user


class GetServiceDetailsResponse(CamelModel):
    """Service profile with content counts."""

    service: ServiceInfo
    counts: CountsInfo
    has_upvoted: bool


class GetServiceDetailsUseCase:
    """Use case for a service's public page."""

    def __init__(
        self,
        service_account_service: ServiceAccountService,
        target_service: TargetService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get service details use case.

        Args:
            service_account_service: Service account domain service
            target_service: Target domain service
            vote_service: Vote domain service
        """
        self.service_account_service = service_account_service
        self.target_service = target_service
        self.vote_service = vote_service

    async def execute(
        self, request: GetServiceDetailsRequest
    ) -> GetServiceDetailsResponse:
        """Execute get service details flow.

        Raises:
            NotFoundError: If the service doesn't exist
        """
        service_id = ServiceId(UUID(request.service_id))
        service = await self.service_account_service.get_service_by_id(service_id)
        if service is None:
            raise NotFoundError("Service", request.service_id)

        counts = await self.target_service.count_for_service(service_id)

        has_upvoted = False
        if request.viewer_id:
            has_upvoted = await self.vote_service.has_upvoted_service(
                UserId(UUID(request.viewer_id)), service_id
            )

        return GetServiceDetailsResponse(
            service=ServiceInfo.from_service(service),
            counts=CountsInfo.from_counts(counts),
            has_upvoted=has_upvoted,
        )
