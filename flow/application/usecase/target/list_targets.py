"""List targets use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from flow.application.usecase.common import (
    Page,
    TargetInfo,
    page_offset,
    resolve_limit,
)
from flow.config import PaginationSettings
from flow.domain.error import NotFoundError
from flow.domain.repository import TargetSortOrder
from flow.domain.service import ServiceAccountService, TargetService
from flow.domain.value import ServiceId, TargetType


class ListTargetsRequest(BaseModel):
    """List targets request."""

    service_id: str
    target_type: TargetType
    search: str | None = None  # Case-insensitive title/description substring
    sort: TargetSortOrder = TargetSortOrder.VOTES
    page: int = Field(default=1, ge=1)
    limit: int | None = None


class ListTargetsUseCase:
    """Use case for listing a service's feedbacks, issues or bugs."""

    def __init__(
        self,
        target_service: TargetService,
        service_account_service: ServiceAccountService,
        pagination_settings: PaginationSettings,
    ) -> None:
        self.target_service = target_service
        self.service_account_service = service_account_service
        self.pagination_settings = pagination_settings

    async def execute(self, request: ListTargetsRequest) -> Page[TargetInfo]:
        """List one page of targets.

        Raises:
            NotFoundError: If the service doesn't exist
        """
        service_id = ServiceId(UUID(request.service_id))
        if await self.service_account_service.get_service_by_id(service_id) is None:
            raise NotFoundError("Service", request.service_id)

        limit = resolve_limit(request.limit, self.pagination_settings)
        targets, total = await self.target_service.list_for_service(
            service_id=service_id,
            target_type=request.target_type,
            search=request.search,
            sort=request.sort,
            limit=limit,
            offset=page_offset(request.page, limit),
        )

        logfire.info(
            "Targets listed",
            target_type=request.target_type.value,
            count=len(targets),
            total=total,
        )
        return Page[TargetInfo].build(
            [TargetInfo.from_target(t) for t in targets], total, request.page, limit
        )
