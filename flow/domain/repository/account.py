"""Account repository interface shared by both principal stores."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from flow.domain.model import Account
from flow.domain.value import Email


class AccountRepository(ABC):
    """Lookup and session-state operations every principal store provides.

    The credential service and the principal resolver address the user and
    service stores through this interface, selected by PrincipalKind.
    """

    @abstractmethod
    async def find_by_id(self, account_id: UUID) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find an account by its (unique per kind) email.

        Args:
            email: Normalized email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def set_refresh_token(
        self, account_id: UUID, refresh_token: Optional[str]
    ) -> None:
        """Replace the stored refresh token.

        Args:
            account_id: The account's unique identifier
            refresh_token: New token, or None to end the session
        """
        pass
