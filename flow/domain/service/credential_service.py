"""Credential domain service: passwords and refresh-token sessions."""

import asyncio
from uuid import UUID

import logfire
from pydantic import BaseModel

from flow.config import AuthSettings
from flow.domain.error import AuthenticationError
from flow.domain.model import Account, Principal
from flow.domain.repository import AccountRepository
from flow.domain.value import PrincipalKind
from flow.util.jwt import JWTError
from flow.util.password import hash_password, verify_password

from .base import DomainService
from .token_service import TokenService


class SessionTokens(BaseModel):
    """Access/refresh token pair handed to a client."""

    access_token: str
    refresh_token: str


class CredentialService(DomainService):
    """Hashes passwords and manages the single active refresh token per account.

    Issuing a session replaces any stored refresh token, so logging in
    elsewhere ends earlier sessions. A refresh is accepted only if the
    presented token byte-equals the stored one, which rejects reuse of a
    rotated-out token.
    """

    def __init__(
        self,
        token_service: TokenService,
        account_repositories: dict[PrincipalKind, AccountRepository],
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize credential service.

        Args:
            token_service: Token domain service
            account_repositories: Principal store for each kind
            auth_settings: Authentication settings
        """
        self.token_service = token_service
        self.account_repositories = account_repositories
        self.auth_settings = auth_settings

    async def hash_password(self, password: str) -> str:
        """Hash a password off the event loop (bcrypt is CPU-bound)."""
        return await asyncio.to_thread(
            hash_password, password, self.auth_settings.bcrypt_rounds
        )

    async def verify_password(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash off the event loop."""
        return await asyncio.to_thread(verify_password, password, password_hash)

    async def start_session(self, account: Account) -> SessionTokens:
        """Issue an access/refresh pair and persist the refresh token.

        Args:
            account: User or service logging in

        Returns:
            New session tokens
        """
        with logfire.span(
            "credential_service.start_session",
            principal_id=str(account.id),
            kind=account.kind.value,
        ):
            access_token = self.token_service.create_access_token(account)
            refresh_token = self.token_service.create_refresh_token(account)

            repository = self.account_repositories[account.kind]
            await repository.set_refresh_token(account.id, refresh_token)

            logfire.info(
                "Session started",
                principal_id=str(account.id),
                kind=account.kind.value,
            )
            return SessionTokens(access_token=access_token, refresh_token=refresh_token)

    async def refresh(
        self, incoming_token: str | None, kind: PrincipalKind | None = None
    ) -> tuple[Account, SessionTokens]:
        """Rotate a refresh token.

        Args:
            incoming_token: Refresh token presented by the client
            kind: Principal kind the token must belong to, if restricted

        Returns:
            The account and its new session tokens

        Raises:
            AuthenticationError: If the token is missing, invalid, expired,
                or no longer the account's active refresh token
        """
        with logfire.span("credential_service.refresh"):
            if not incoming_token:
                raise AuthenticationError("Unauthorized request! No refresh token provided.")

            try:
                payload = self.token_service.verify_refresh_token(incoming_token)
                account_id = UUID(payload.sub)
            except (JWTError, ValueError) as e:
                logfire.warn("Refresh token rejected", error=str(e))
                raise AuthenticationError("Invalid or expired refresh token.")

            if kind is not None and payload.kind != kind:
                logfire.warn(
                    "Refresh token kind mismatch",
                    expected=kind.value,
                    actual=payload.kind.value,
                )
                raise AuthenticationError("Invalid or expired refresh token.")

            repository = self.account_repositories[payload.kind]
            account = await repository.find_by_id(account_id)

            if account is None or account.refresh_token != incoming_token:
                logfire.warn(
                    "Refresh token not active for account",
                    principal_id=payload.sub,
                    kind=payload.kind.value,
                    account_found=account is not None,
                )
                raise AuthenticationError("Invalid or expired refresh token.")

            tokens = await self.start_session(account)
            logfire.info(
                "Refresh token rotated",
                principal_id=str(account.id),
                kind=account.kind.value,
            )
            return account, tokens

    async def end_session(self, principal: Principal) -> None:
        """Clear the stored refresh token.

        Access tokens already issued stay valid until they expire.
        """
        with logfire.span(
            "credential_service.end_session",
            principal_id=str(principal.id),
            kind=principal.kind.value,
        ):
            repository = self.account_repositories[principal.kind]
            await repository.set_refresh_token(principal.id, None)
            logfire.info(
                "Session ended", principal_id=str(principal.id), kind=principal.kind.value
            )
