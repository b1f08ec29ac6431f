"""Update service use case."""

from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from flow.application.usecase.common import ServiceInfo
from flow.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from flow.domain.service import CredentialService, ServiceAccountService
from flow.domain.value import Email, ServiceId


class UpdateServiceRequest(BaseModel):
    """Update service request. Unset fields are left unchanged."""

    service_id: str
    requester_id: str  # Service ID from authenticated service
    name: str | None = None
    email: str | None = None
    description: str | None = None
    service_link: str | None = None
    logo_url: str | None = None
    password: str | None = None


class UpdateServiceUseCase:
    """Use case for a service editing its own profile."""

    def __init__(
        self,
        service_account_service: ServiceAccountService,
        credential_service: CredentialService,
    ) -> None:
        self.service_account_service = service_account_service
        self.credential_service = credential_service

    async def execute(self, request: UpdateServiceRequest) -> ServiceInfo:
        """Execute update service flow.

        Raises:
            NotAuthorizedError: If the requester isn't this service
            NotFoundError: If the service doesn't exist
            ValidationError: If a new value is blank or invalid
            ConflictError: If the new email is taken
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

        for label, value in (("Name", request.name), ("Description", request.description)):
            if value is not None and not value.strip():
                raise ValidationError(f"{label} cannot be empty.")

        email = None
        if request.email is not None:
            try:
                email = Email(request.email)
            except PydanticValidationError:
                raise ValidationError("Email address is invalid")

        password_hash = None
        if request.password:
            password_hash = await self.credential_service.hash_password(request.password)

        updated = await self.service_account_service.update_service(
            service,
            name=request.name.strip() if request.name else None,
            email=email,
            description=request.description.strip() if request.description else None,
            service_link=request.service_link,
            logo_url=request.logo_url,
            password_hash=password_hash,
        )
        return ServiceInfo.from_service(updated)
