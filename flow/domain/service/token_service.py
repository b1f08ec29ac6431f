"""JWT token domain service."""

from datetime import timedelta

import logfire

from flow.config import AuthSettings
from flow.domain.model import Account
from flow.util.jwt import TokenPayload, create_token, verify_token

from .base import DomainService


class TokenService(DomainService):
    """Issues and verifies access and refresh tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize token service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_access_token(
        self, account: Account, expires_in: timedelta | None = None
    ) -> str:
        """Create a short-lived access token for an account.

        Args:
            account: User or service the token is issued to
            expires_in: Override the configured lifetime

        Returns:
            JWT token string
        """
        with logfire.span(
            "token_service.create_access_token",
            principal_id=str(account.id),
            kind=account.kind.value,
        ):
            return create_token(
                subject=str(account.id),
                kind=account.kind,
                token_type="access",
                settings=self.auth_settings,
                claims={"email": str(account.email), "name": account.display_name},
                expires_in=expires_in,
            )

    def create_refresh_token(self, account: Account) -> str:
        """Create a long-lived refresh token for an account."""
        with logfire.span(
            "token_service.create_refresh_token",
            principal_id=str(account.id),
            kind=account.kind.value,
        ):
            return create_token(
                subject=str(account.id),
                kind=account.kind,
                token_type="refresh",
                settings=self.auth_settings,
            )

    def verify_access_token(self, token: str) -> TokenPayload:
        """Verify an access token.

        Raises:
            JWTError: If token is invalid, expired or not an access token
            MalformedTokenError: If token lacks subject or kind
        """
        return verify_token(token, "access", self.auth_settings)

    def verify_refresh_token(self, token: str) -> TokenPayload:
        """Verify a refresh token.

        Raises:
            JWTError: If token is invalid, expired or not a refresh token
        """
        return verify_token(token, "refresh", self.auth_settings)
