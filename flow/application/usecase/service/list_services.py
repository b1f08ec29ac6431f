"""List services use case."""

import logfire
from pydantic import BaseModel, Field

from flow.application.usecase.common import (
    Page,
    ServiceInfo,
    page_offset,
    resolve_limit,
)
from flow.config import PaginationSettings
from flow.domain.repository import ServiceSortOrder
from flow.domain.service import ServiceAccountService


class ListServicesRequest(BaseModel):
    """List services request."""

    search: str | None = None  # Case-insensitive name substring
    sort: ServiceSortOrder = ServiceSortOrder.NEWEST
    page: int = Field(default=1, ge=1)
    limit: int | None = None


class ListServicesUseCase:
    """Use case for browsing services with search and pagination."""

    def __init__(
        self,
        service_account_service: ServiceAccountService,
        pagination_settings: PaginationSettings,
    ) -> None:
        self.service_account_service = service_account_service
        self.pagination_settings = pagination_settings

    async def execute(self, request: ListServicesRequest) -> Page[ServiceInfo]:
        """List one page of services."""
        limit = resolve_limit(request.limit, self.pagination_settings)
        search = request.search.strip() if request.search else None

        services, total = await self.service_account_service.list_services(
            search=search or None,
            sort=request.sort,
            limit=limit,
            offset=page_offset(request.page, limit),
        )

        logfire.info("Services listed", count=len(services), total=total)
        return Page[ServiceInfo].build(
            [ServiceInfo.from_service(s) for s in services], total, request.page, limit
        )
