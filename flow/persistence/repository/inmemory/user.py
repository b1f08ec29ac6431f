"""In-memory user repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from flow.domain.model import User
from flow.domain.repository import UserRepository
from flow.domain.value import Email, UserId, Username


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once."""
        return [self._users[uid] for uid in set(user_ids) if uid in self._users]

    async def save(self, user: User) -> User:
        """Save a user.

        Raises:
            IntegrityError: If another user has the same username or email
        """
        for other in self._users.values():
            if other.id != user.id and (
                other.username == user.username or other.email == user.email
            ):
                raise IntegrityError("Duplicate user", None, Exception())

        self._users[user.id] = user
        return user

    async def set_refresh_token(
        self, account_id: UUID, refresh_token: Optional[str]
    ) -> None:
        """Replace the user's stored refresh token."""
        user = self._users.get(UserId(account_id))
        if user:
            self._users[user.id] = user.model_copy(update={"refresh_token": refresh_token})
