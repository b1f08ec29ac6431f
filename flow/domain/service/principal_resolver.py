"""Principal resolution for incoming requests."""

from uuid import UUID

import logfire

from flow.domain.error import AuthenticationError, PrincipalKindError
from flow.domain.model import Principal
from flow.domain.repository import AccountRepository
from flow.domain.value import PrincipalKind
from flow.util.jwt import JWTError, MalformedTokenError

from .base import DomainService
from .token_service import TokenService


class PrincipalResolver(DomainService):
    """Turns an access token into exactly one principal, or fails.

    Tokens name their principal kind, so resolution is a single lookup in
    the matching store. A subject that is absent from that store never falls
    through to the other kind.
    """

    def __init__(
        self,
        token_service: TokenService,
        account_repositories: dict[PrincipalKind, AccountRepository],
    ) -> None:
        """Initialize principal resolver.

        Args:
            token_service: Token domain service
            account_repositories: Principal store for each kind
        """
        self.token_service = token_service
        self.account_repositories = account_repositories

    async def resolve(self, token: str | None) -> Principal:
        """Resolve the principal behind an access token.

        Args:
            token: Access token from cookie or Authorization header

        Returns:
            The authenticated user or service

        Raises:
            AuthenticationError: If the token is missing, invalid, expired,
                malformed, or names no existing principal
        """
        with logfire.span("principal_resolver.resolve"):
            if not token:
                raise AuthenticationError("Unauthorized request! No token provided.")

            try:
                payload = self.token_service.verify_access_token(token)
            except MalformedTokenError as e:
                logfire.warn("Malformed access token", error=str(e))
                raise AuthenticationError("Invalid token structure.")
            except JWTError as e:
                logfire.info("Access token rejected", error=str(e))
                raise AuthenticationError("Invalid or expired access token.")

            try:
                principal_id = UUID(payload.sub)
            except ValueError:
                logfire.warn("Access token subject is not a UUID", subject=payload.sub)
                raise AuthenticationError("Invalid token structure.")

            repository = self.account_repositories[payload.kind]
            account = await repository.find_by_id(principal_id)
            if account is None:
                logfire.warn(
                    "No principal for token subject",
                    principal_id=payload.sub,
                    kind=payload.kind.value,
                )
                raise AuthenticationError("Unauthorized request! Principal not found.")

            return Principal.from_account(account)

    async def resolve_optional(self, token: str | None) -> Principal | None:
        """Resolve a principal for endpoints where authentication is optional.

        Returns:
            The principal, or None if the token is absent or unusable
        """
        if not token:
            return None
        try:
            return await self.resolve(token)
        except AuthenticationError:
            return None

    async def require_user(self, token: str | None, action: str) -> Principal:
        """Resolve a principal and require it to be a user.

        Raises:
            AuthenticationError: If unauthenticated
            PrincipalKindError: If the principal is a service
        """
        principal = await self.resolve(token)
        if not principal.is_user:
            raise PrincipalKindError(action=action, required=PrincipalKind.USER.value)
        return principal

    async def require_service(self, token: str | None, action: str) -> Principal:
        """Resolve a principal and require it to be a service.

        Raises:
            AuthenticationError: If unauthenticated
            PrincipalKindError: If the principal is a user
        """
        principal = await self.resolve(token)
        if not principal.is_service:
            raise PrincipalKindError(action=action, required=PrincipalKind.SERVICE.value)
        return principal
