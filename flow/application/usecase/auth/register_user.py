"""Register user use case."""

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from flow.application.usecase.common import UserInfo
from flow.domain.error import ValidationError
from flow.domain.service import CredentialService, UserService
from flow.domain.value import Email, Username


class RegisterUserRequest(BaseModel):
    """Register user request."""

    username: str
    email: str
    fullname: str
    password: str


class RegisterUserUseCase:
    """Use case for creating a user account."""

    def __init__(
        self, user_service: UserService, credential_service: CredentialService
    ) -> None:
        """Initialize register user use case.

        Args:
            user_service: User domain service
            credential_service: Credential domain service (password hashing)
        """
        self.user_service = user_service
        self.credential_service = credential_service

    async def execute(self, request: RegisterUserRequest) -> UserInfo:
        """Execute user registration.

        Raises:
            ValidationError: If a field is missing or invalid
            ConflictError: If the username or email is taken
        """
        fields = (request.username, request.email, request.fullname, request.password)
        if any(not value or not value.strip() for value in fields):
            raise ValidationError("All fields are required.")

        try:
            username = Username(request.username)
            email = Email(request.email)
        except PydanticValidationError as e:
            raise ValidationError(e.errors()[0]["msg"].removeprefix("Value error, "))

        password_hash = await self.credential_service.hash_password(request.password)
        user = await self.user_service.register_user(
            username=username,
            email=email,
            fullname=request.fullname.strip(),
            password_hash=password_hash,
        )
        return UserInfo.from_user(user)
