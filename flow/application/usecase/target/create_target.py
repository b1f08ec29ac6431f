"""Create target use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import TargetInfo
from flow.domain.error import NotFoundError
from flow.domain.service import ServiceAccountService, TargetService
from flow.domain.value import ServiceId, TargetType, UserId


class CreateTargetRequest(BaseModel):
    """Create target request."""

    target_type: TargetType
    service_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    title: str
    description: str


class CreateTargetUseCase:
    """Use case for filing a feedback, issue or bug against a service."""

    def __init__(
        self,
        target_service: TargetService,
        service_account_service: ServiceAccountService,
    ) -> None:
        """Initialize create target use case.

        Args:
            target_service: Target domain service
            service_account_service: Service account domain service
        """
        self.target_service = target_service
        self.service_account_service = service_account_service

    async def execute(self, request: CreateTargetRequest) -> TargetInfo:
        """Execute create target flow.

        Raises:
            NotFoundError: If the service doesn't exist
            ValidationError: If title or description is blank
        """
        service_id = ServiceId(UUID(request.service_id))

        service = await self.service_account_service.get_service_by_id(service_id)
        if service is None:
            raise NotFoundError("Service", request.service_id)

        target = await self.target_service.create_target(
            target_type=request.target_type,
            service_id=service_id,
            author_id=UserId(UUID(request.author_id)),
            title=request.title,
            description=request.description,
        )
        return TargetInfo.from_target(target)
