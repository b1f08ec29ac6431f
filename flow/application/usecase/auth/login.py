"""Login use case for users and services."""

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from flow.application.usecase.common import CamelModel, ServiceInfo, UserInfo
from flow.domain.error import AuthenticationError, NotFoundError, ValidationError
from flow.domain.model import Account, Service, User
from flow.domain.service import CredentialService, ServiceAccountService, UserService
from flow.domain.value import Email, PrincipalKind, Username


class LoginRequest(BaseModel):
    """Login request.

    Users may log in with either email or username; services use email.
    """

    kind: PrincipalKind
    email: str | None = None
    username: str | None = None
    password: str


class LoginResponse(CamelModel):
    """Login response with the session tokens."""

    kind: PrincipalKind
    user: UserInfo | None = None
    service: ServiceInfo | None = None
    access_token: str
    refresh_token: str


class LoginUseCase:
    """Use case for password login of either principal kind."""

    def __init__(
        self,
        user_service: UserService,
        service_account_service: ServiceAccountService,
        credential_service: CredentialService,
    ) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
            service_account_service: Service account domain service
            credential_service: Credential domain service
        """
        self.user_service = user_service
        self.service_account_service = service_account_service
        self.credential_service = credential_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Steps:
        1. Look up the account by email (or username for users)
        2. Verify the password
        3. Start a session, replacing any earlier refresh token

        Raises:
            ValidationError: If no identifier or password was given
            NotFoundError: If no account matches
            AuthenticationError: If the password is wrong
        """
        if not request.password or not (request.email or request.username):
            raise ValidationError("Email or username and password are required.")

        account = await self._find_account(request)

        with logfire.span(
            "login.execute", kind=request.kind.value, principal_id=str(account.id)
        ):
            if not await self.credential_service.verify_password(
                request.password, account.password_hash
            ):
                logfire.warn(
                    "Login rejected - wrong password",
                    kind=request.kind.value,
                    principal_id=str(account.id),
                )
                raise AuthenticationError("Invalid credentials.")

            tokens = await self.credential_service.start_session(account)

            return LoginResponse(
                kind=account.kind,
                user=UserInfo.from_user(account) if isinstance(account, User) else None,
                service=(
                    ServiceInfo.from_service(account)
                    if isinstance(account, Service)
                    else None
                ),
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
            )

    async def _find_account(self, request: LoginRequest) -> Account:
        label = request.kind.value.capitalize()
        try:
            if request.kind == PrincipalKind.SERVICE:
                if not request.email:
                    raise ValidationError("Email is required.")
                account = await self.service_account_service.get_service_by_email(
                    Email(request.email)
                )
            elif request.email:
                account = await self.user_service.get_user_by_email(Email(request.email))
            else:
                account = await self.user_service.get_user_by_username(
                    Username(request.username)
                )
        except PydanticValidationError:
            # A malformed identifier can't match any stored account
            account = None

        if account is None:
            raise NotFoundError(label, request.email or request.username or "")
        return account
