"""List user targets use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from flow.application.usecase.common import (
    Page,
    TargetInfo,
    page_offset,
    resolve_limit,
)
from flow.config import PaginationSettings
from flow.domain.error import NotFoundError
from flow.domain.service import TargetService, UserService
from flow.domain.value import TargetType, UserId


class ListUserTargetsRequest(BaseModel):
    """List user targets request."""

    user_id: str
    target_type: TargetType
    page: int = Field(default=1, ge=1)
    limit: int | None = None


class ListUserTargetsUseCase:
    """Use case for listing the feedbacks, issues or bugs a user opened."""

    def __init__(
        self,
        user_service: UserService,
        target_service: TargetService,
        pagination_settings: PaginationSettings,
    ) -> None:
        self.user_service = user_service
        self.target_service = target_service
        self.pagination_settings = pagination_settings

    async def execute(self, request: ListUserTargetsRequest) -> Page[TargetInfo]:
        """List the user's targets of one kind, newest first.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        user_id = UserId(UUID(request.user_id))
        if await self.user_service.get_user_by_id(user_id) is None:
            raise NotFoundError("User", request.user_id)

        limit = resolve_limit(request.limit, self.pagination_settings)
        targets, total = await self.target_service.list_by_author(
            author_id=user_id,
            target_type=request.target_type,
            limit=limit,
            offset=page_offset(request.page, limit),
        )
        return Page[TargetInfo].build(
            [TargetInfo.from_target(t) for t in targets], total, request.page, limit
        )
