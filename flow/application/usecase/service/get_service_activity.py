"""Get service activity use case."""

import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from flow.application.usecase.common import CamelModel
from flow.domain.error import NotAuthorizedError, NotFoundError
from flow.domain.service import ActivityService, ServiceAccountService
from flow.domain.value import ServiceId


class GetServiceActivityRequest(BaseModel):
    """Get service activity request."""

    service_id: str
    requester_id: str  # Service ID from authenticated service
    days: int | None = Field(default=None)


class ActivityDay(CamelModel):
    """Activity on one day."""

    date: datetime.date
    upvotes: int
    feedbacks: int
    issues: int
    bugs: int


class GetServiceActivityResponse(CamelModel):
    """Daily activity, oldest day first."""

    service_id: str
    days: int
    activity: list[ActivityDay]


class GetServiceActivityUseCase:
    """Use case for a service's activity dashboard."""

    def __init__(
        self,
        service_account_service: ServiceAccountService,
        activity_service: ActivityService,
    ) -> None:
        self.service_account_service = service_account_service
        self.activity_service = activity_service

    async def execute(
        self, request: GetServiceActivityRequest
    ) -> GetServiceActivityResponse:
        """Execute get service activity flow.

        Raises:
            NotAuthorizedError: If the requester isn't this service
            NotFoundError: If the service doesn't exist
        """
        if request.service_id != request.requester_id:
            raise NotAuthorizedError(
                "service", request.service_id, request.requester_id
            )

        service = await self.service_account_service.get_service_by_id(
            ServiceId(UUID(request.service_id))
        )
        if service is None:
            raise NotFoundError("Service", request.service_id)

        buckets = await self.activity_service.get_activity(service, request.days)

        return GetServiceActivityResponse(
            service_id=request.service_id,
            days=len(buckets),
            activity=[ActivityDay(**bucket.model_dump()) for bucket in buckets],
        )
