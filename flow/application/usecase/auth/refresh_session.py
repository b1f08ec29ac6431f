"""Refresh session use case."""

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel
from flow.domain.service import CredentialService
from flow.domain.value import PrincipalKind


class RefreshSessionRequest(BaseModel):
    """Refresh session request."""

    kind: PrincipalKind  # Kind the endpoint serves
    refresh_token: str | None = None


class RefreshSessionResponse(CamelModel):
    """Rotated token pair."""

    access_token: str
    refresh_token: str


class RefreshSessionUseCase:
    """Use case for rotating a refresh token."""

    def __init__(self, credential_service: CredentialService) -> None:
        self.credential_service = credential_service

    async def execute(self, request: RefreshSessionRequest) -> RefreshSessionResponse:
        """Execute refresh flow.

        Raises:
            AuthenticationError: If the token is missing, invalid, reused, or
                belongs to the other principal kind
        """
        _, tokens = await self.credential_service.refresh(
            request.refresh_token, kind=request.kind
        )
        return RefreshSessionResponse(
            access_token=tokens.access_token, refresh_token=tokens.refresh_token
        )
