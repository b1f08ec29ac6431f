"""Get user profile use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel, CountsInfo, UserInfo
from flow.domain.error import NotFoundError
from flow.domain.model import TargetCounts
from flow.domain.service import ServiceAccountService, TargetService, UserService
from flow.domain.value import UserId


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    user_id: str  # UUID string


class ServiceContributionInfo(CamelModel):
    """What the user filed against one service."""

    service_id: str
    service_name: str
    counts: CountsInfo


class GetUserProfileResponse(CamelModel):
    """User profile with contribution stats."""

    user: UserInfo
    services: list[ServiceContributionInfo]
    totals: CountsInfo


class GetUserProfileUseCase:
    """Use case for a user's profile and per-service activity."""

    def __init__(
        self,
        user_service: UserService,
        target_service: TargetService,
        service_account_service: ServiceAccountService,
    ) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
            target_service: Target domain service
            service_account_service: Service account domain service
        """
        self.user_service = user_service
        self.target_service = target_service
        self.service_account_service = service_account_service

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Execute get user profile flow.

        Steps:
        1. Load the user
        2. Count the user's feedbacks, issues and bugs per service
        3. Resolve service names in one batch

        Raises:
            NotFoundError: If the user doesn't exist
        """
        user_id = UserId(UUID(request.user_id))
        user = await self.user_service.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError("User", request.user_id)

        per_service = await self.target_service.counts_by_service_for_author(user_id)
        services = await self.service_account_service.get_services_by_ids(
            list(per_service)
        )

        contributions = [
            ServiceContributionInfo(
                service_id=str(service_id),
                service_name=services[service_id].name,
                counts=CountsInfo.from_counts(counts),
            )
            for service_id, counts in per_service.items()
            if service_id in services
        ]
        contributions.sort(key=lambda c: c.counts.total, reverse=True)

        totals = TargetCounts(
            feedbacks=sum(c.counts.feedbacks for c in contributions),
            issues=sum(c.counts.issues for c in contributions),
            bugs=sum(c.counts.bugs for c in contributions),
        )

        return GetUserProfileResponse(
            user=UserInfo.from_user(user),
            services=contributions,
            totals=CountsInfo.from_counts(totals),
        )
