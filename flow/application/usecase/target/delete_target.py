"""Delete target use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel
from flow.domain.service import TargetService
from flow.domain.value import TargetId, TargetType, UserId


class DeleteTargetRequest(BaseModel):
    """Delete target request."""

    target_type: TargetType
    target_id: str
    requester_id: str  # User ID from authenticated user


class DeleteTargetResponse(CamelModel):
    """Deleted target reference."""

    target_id: str
    target_type: TargetType


class DeleteTargetUseCase:
    """Use case for a user deleting a target they opened."""

    def __init__(self, target_service: TargetService) -> None:
        self.target_service = target_service

    async def execute(self, request: DeleteTargetRequest) -> DeleteTargetResponse:
        """Delete the target with its votes, comments and likes.

        Raises:
            NotFoundError: If no target of that kind exists
            NotAuthorizedError: If the requester didn't open it
        """
        target = await self.target_service.get_target(
            TargetId(UUID(request.target_id)), request.target_type
        )
        await self.target_service.delete_target(
            target, UserId(UUID(request.requester_id))
        )
        return DeleteTargetResponse(
            target_id=request.target_id, target_type=request.target_type
        )
