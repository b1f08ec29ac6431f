"""Delete service use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from flow.application.usecase.common import CamelModel
from flow.domain.error import NotAuthorizedError, NotFoundError
from flow.domain.service import ServiceAccountService, TargetService, VoteService
from flow.domain.value import ServiceId


class DeleteServiceRequest(BaseModel):
    """Delete service request."""

    service_id: str
    requester_id: str  # Service ID from authenticated service


class DeleteServiceResponse(CamelModel):
    """What the cascade removed."""

    service_id: str
    deleted_targets: int
    deleted_upvotes: int


class DeleteServiceUseCase:
    """Use case for a service deleting its account and everything filed against it."""

    def __init__(
        self,
        service_account_service: ServiceAccountService,
        target_service: TargetService,
        vote_service: VoteService,
    ) -> None:
        self.service_account_service = service_account_service
        self.target_service = target_service
        self.vote_service = vote_service

    async def execute(self, request: DeleteServiceRequest) -> DeleteServiceResponse:
        """Execute delete service flow.

        Steps:
        1. Verify ownership
        2. Delete every target with its votes, comments and likes
        3. Delete the service's upvotes
        4. Delete the service

        Raises:
            NotAuthorizedError: If the requester isn't this service
            NotFoundError: If the service doesn't exist
        """
        if request.service_id != request.requester_id:
            raise NotAuthorizedError(
                "service", request.service_id, request.requester_id
            )

        service_id = ServiceId(UUID(request.service_id))
        if await self.service_account_service.get_service_by_id(service_id) is None:
            raise NotFoundError("Service", request.service_id)

        with logfire.span("delete_service.execute", service_id=request.service_id):
            deleted_targets = await self.target_service.delete_all_for_service(service_id)
            deleted_upvotes = await self.vote_service.delete_service_votes(service_id)
            await self.service_account_service.delete_service(service_id)

        return DeleteServiceResponse(
            service_id=request.service_id,
            deleted_targets=deleted_targets,
            deleted_upvotes=deleted_upvotes,
        )
