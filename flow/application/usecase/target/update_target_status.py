"""Update target status use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import TargetInfo
from flow.domain.error import ValidationError
from flow.domain.service import TargetService
from flow.domain.value import ServiceId, TargetId, TargetType


class UpdateTargetStatusRequest(BaseModel):
    """Update target status request."""

    target_type: TargetType = TargetType.ISSUE
    target_id: str
    requester_id: str  # Service ID from authenticated service
    status: str | None  # Validated against TargetStatus by the domain


class UpdateTargetStatusUseCase:
    """Use case for a service moving one of its issues through its workflow."""

    def __init__(self, target_service: TargetService) -> None:
        self.target_service = target_service

    async def execute(self, request: UpdateTargetStatusRequest) -> TargetInfo:
        """Execute update status flow.

        Raises:
            ValidationError: If the status is missing or invalid
            NotFoundError: If no target of that kind exists
            NotAuthorizedError: If the requester doesn't own the target
        """
        if not request.status:
            raise ValidationError("Status is required.")

        target = await self.target_service.get_target(
            TargetId(UUID(request.target_id)), request.target_type
        )
        updated = await self.target_service.update_status(
            target, request.status, ServiceId(UUID(request.requester_id))
        )
        return TargetInfo.from_target(updated)
