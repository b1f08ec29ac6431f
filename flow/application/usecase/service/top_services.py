"""Top services use case."""

from pydantic import BaseModel, Field

from flow.application.usecase.common import CamelModel, ServiceInfo
from flow.config import ActivitySettings, PaginationSettings
from flow.domain.service import ServiceAccountService


class TopServicesRequest(BaseModel):
    """Top services request."""

    limit: int | None = Field(default=None, ge=1)


class TopServicesResponse(CamelModel):
    """Most upvoted services."""

    services: list[ServiceInfo]


class TopServicesUseCase:
    """Use case for the most upvoted services."""

    def __init__(
        self,
        service_account_service: ServiceAccountService,
        activity_settings: ActivitySettings,
        pagination_settings: PaginationSettings,
    ) -> None:
        self.service_account_service = service_account_service
        self.activity_settings = activity_settings
        self.pagination_settings = pagination_settings

    async def execute(self, request: TopServicesRequest) -> TopServicesResponse:
        limit = min(
            request.limit or self.activity_settings.top_services_limit,
            self.pagination_settings.max_limit,
        )
        services = await self.service_account_service.top_services(limit)
        return TopServicesResponse(
            services=[ServiceInfo.from_service(s) for s in services]
        )
