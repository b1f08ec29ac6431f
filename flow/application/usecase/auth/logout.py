"""Logout use case."""

from pydantic import BaseModel

from flow.domain.model import Principal
from flow.domain.service import CredentialService


class LogoutRequest(BaseModel):
    """Logout request."""

    principal: Principal


class LogoutUseCase:
    """Use case for ending a principal's session."""

    def __init__(self, credential_service: CredentialService) -> None:
        self.credential_service = credential_service

    async def execute(self, request: LogoutRequest) -> None:
        """Clear the principal's stored refresh token."""
        await self.credential_service.end_session(request.principal)
