"""Get current principal use case."""

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel
from flow.domain.service import PrincipalResolver
from flow.domain.value import PrincipalKind


class GetCurrentPrincipalRequest(BaseModel):
    """Get current principal request."""

    token: str | None  # Access token from cookie or header


class GetCurrentPrincipalResponse(CamelModel):
    """The authenticated principal."""

    kind: PrincipalKind
    id: str
    name: str
    email: str


class GetCurrentPrincipalUseCase:
    """Use case for resolving the caller of /auth/me."""

    def __init__(self, principal_resolver: PrincipalResolver) -> None:
        self.principal_resolver = principal_resolver

    async def execute(
        self, request: GetCurrentPrincipalRequest
    ) -> GetCurrentPrincipalResponse:
        """Resolve the access token to a user or service.

        Raises:
            AuthenticationError: If the token doesn't resolve
        """
        principal = await self.principal_resolver.resolve(request.token)
        return GetCurrentPrincipalResponse(
            kind=principal.kind,
            id=str(principal.id),
            name=principal.name,
            email=principal.email,
        )
