"""Update user use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from flow.application.usecase.common import UserInfo
from flow.domain.error import (
    AuthenticationError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from flow.domain.service import CredentialService, UserService
from flow.domain.value import Email, UserId


class UpdateUserRequest(BaseModel):
    """Update user request."""

    user_id: str  # User being updated
    requester_id: str  # User ID from authenticated user
    current_password: str
    fullname: str | None = None
    email: str | None = None
    new_password: str | None = None


class UpdateUserUseCase:
    """Use case for a user editing their own account."""

    def __init__(
        self, user_service: UserService, credential_service: CredentialService
    ) -> None:
        self.user_service = user_service
        self.credential_service = credential_service

    async def execute(self, request: UpdateUserRequest) -> UserInfo:
        """Execute update user flow.

        Raises:
            NotAuthorizedError: If the requester isn't the user
            NotFoundError: If the user doesn't exist
            AuthenticationError: If the current password is wrong
            ValidationError: If a new value is invalid
            ConflictError: If the new email is taken
        """
        if request.user_id != request.requester_id:
            raise NotAuthorizedError("user", request.user_id, request.requester_id)

        user = await self.user_service.get_user_by_id(UserId(UUID(request.user_id)))
        if user is None:
            raise NotFoundError("User", request.user_id)

        if not request.current_password:
            raise ValidationError("Current password is required.")
        if not await self.credential_service.verify_password(
            request.current_password, user.password_hash
        ):
            logfire.warn("User update rejected - wrong password", user_id=request.user_id)
            raise AuthenticationError("Current password is incorrect.")

        email = None
        if request.email is not None:
            try:
                email = Email(request.email)
            except PydanticValidationError:
                raise ValidationError("Email address is invalid")

        fullname = None
        if request.fullname is not None:
            fullname = request.fullname.strip()
            if not fullname:
                raise ValidationError("Full name cannot be empty.")

        password_hash = None
        if request.new_password:
            password_hash = await self.credential_service.hash_password(
                request.new_password
            )

        updated = await self.user_service.update_user(
            user, fullname=fullname, email=email, password_hash=password_hash
        )
        return UserInfo.from_user(updated)
