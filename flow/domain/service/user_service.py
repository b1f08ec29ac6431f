"""User domain service."""

from typing import Sequence
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from flow.domain.error import ConflictError
from flow.domain.model import User
from flow.domain.model.common import utcnow
from flow.domain.repository import UserRepository
from flow.domain.value import Email, UserId, Username

from .base import DomainService


class UserService(DomainService):
    """Domain service for user accounts."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_user_by_id(self, user_id: UserId) -> User | None:
        """Get a user by ID."""
        with logfire.span("user_service.get_user_by_id", user_id=str(user_id)):
            return await self.user_repository.find_by_id(user_id)

    async def get_user_by_email(self, email: Email) -> User | None:
        """Get a user by email."""
        return await self.user_repository.find_by_email(email)

    async def get_user_by_username(self, username: Username) -> User | None:
        """Get a user by username."""
        return await self.user_repository.find_by_username(username)

    async def get_users_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Get several users keyed by ID (unknown IDs are absent)."""
        if not user_ids:
            return {}
        users = await self.user_repository.find_by_ids(list(set(user_ids)))
        return {user.id: user for user in users}

    async def register_user(
        self,
        username: Username,
        email: Email,
        fullname: str,
        password_hash: str,
    ) -> User:
        """Create a user account.

        Args:
            username: Unique username
            email: Unique email
            fullname: Display name
            password_hash: bcrypt hash of the password

        Returns:
            Created user

        Raises:
            ConflictError: If the username or email is taken
        """
        with logfire.span(
            "user_service.register_user", username=username.root
        ):
            if await self.user_repository.find_by_username(username):
                logfire.warn("Username already taken", username=username.root)
                raise ConflictError("User with this email or username already exists.")
            if await self.user_repository.find_by_email(email):
                logfire.warn("Email already registered for a user")
                raise ConflictError("User with this email or username already exists.")

            now = utcnow()
            user = User(
                id=UserId(uuid4()),
                username=username,
                email=email,
                fullname=fullname,
                password_hash=password_hash,
                refresh_token=None,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.user_repository.save(user)
            except IntegrityError:
                # Lost a race with a concurrent registration
                logfire.warn("Duplicate user on insert", username=username.root)
                raise ConflictError("User with this email or username already exists.")

            logfire.info("User registered", user_id=str(saved.id), username=username.root)
            return saved

    async def update_user(
        self,
        user: User,
        fullname: str | None = None,
        email: Email | None = None,
        password_hash: str | None = None,
    ) -> User:
        """Update a user's profile fields.

        Args:
            user: Current user state
            fullname: New display name
            email: New email (must be unused)
            password_hash: New password hash

        Returns:
            Updated user

        Raises:
            ConflictError: If the new email belongs to another user
        """
        with logfire.span("user_service.update_user", user_id=str(user.id)):
            updates: dict = {"updated_at": utcnow()}

            if email is not None and email != user.email:
                other = await self.user_repository.find_by_email(email)
                if other and other.id != user.id:
                    raise ConflictError("Email is already in use by another user.")
                updates["email"] = email
            if fullname is not None:
                updates["fullname"] = fullname
            if password_hash is not None:
                updates["password_hash"] = password_hash

            updated = User.model_validate({**user.model_dump(), **updates})

            try:
                saved = await self.user_repository.save(updated)
            except IntegrityError:
                raise ConflictError("Email is already in use by another user.")

            logfire.info(
                "User updated",
                user_id=str(user.id),
                fields=sorted(k for k in updates if k != "updated_at"),
            )
            return saved
