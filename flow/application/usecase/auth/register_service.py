"""Register service use case."""

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from flow.application.usecase.common import ServiceInfo
from flow.domain.error import ValidationError
from flow.domain.service import CredentialService, ServiceAccountService
from flow.domain.value import Email


class RegisterServiceRequest(BaseModel):
    """Register service request."""

    name: str
    email: str
    password: str
    description: str
    service_link: str | None = None
    logo_url: str | None = None


class RegisterServiceUseCase:
    """Use case for creating a service account."""

    def __init__(
        self,
        service_account_service: ServiceAccountService,
        credential_service: CredentialService,
    ) -> None:
        self.service_account_service = service_account_service
        self.credential_service = credential_service

    async def execute(self, request: RegisterServiceRequest) -> ServiceInfo:
        """Execute service registration.

        Raises:
            ValidationError: If a required field is missing or invalid
            ConflictError: If the email is taken
        """
        fields = (request.name, request.email, request.password, request.description)
        if any(not value or not value.strip() for value in fields):
            raise ValidationError("Name, email, password and description are required.")

        try:
            email = Email(request.email)
        except PydanticValidationError:
            raise ValidationError("Email address is invalid")

        password_hash = await self.credential_service.hash_password(request.password)
        service = await self.service_account_service.register_service(
            name=request.name.strip(),
            email=email,
            password_hash=password_hash,
            description=request.description.strip(),
            service_link=request.service_link or None,
            logo_url=request.logo_url or None,
        )
        return ServiceInfo.from_service(service)
