"""User account routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request, Response, status

from flow.application.usecase.auth import (
    LoginRequest,
    LoginResponse,
    LoginUseCase,
    LogoutRequest,
    LogoutUseCase,
    RefreshSessionRequest,
    RefreshSessionResponse,
    RefreshSessionUseCase,
    RegisterUserRequest,
    RegisterUserUseCase,
)
from flow.application.usecase.common import CamelModel, Page, TargetInfo, UserInfo
from flow.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
    ListUserTargetsRequest,
    ListUserTargetsUseCase,
    UpdateUserRequest,
    UpdateUserUseCase,
)
from flow.config import Settings
from flow.domain.service import PrincipalResolver
from flow.domain.value import PrincipalKind, TargetType
from flow.interface.api.auth import (
    clear_session_cookies,
    current_principal,
    current_user,
    refresh_token_from,
    set_session_cookies,
)
from flow.interface.api.envelope import ApiResponse, ok

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class RegisterUserAPIRequest(CamelModel):
    """API request for registering a user."""

    username: str = ""
    email: str = ""
    fullname: str = ""
    password: str = ""


class LoginUserAPIRequest(CamelModel):
    """API request for user login (email or username)."""

    email: str | None = None
    username: str | None = None
    password: str = ""


class RefreshTokenAPIRequest(CamelModel):
    """Refresh token body; the cookie takes precedence."""

    refresh_token: str | None = None


class UpdateUserAPIRequest(CamelModel):
    """API request for updating the caller's account."""

    current_password: str = ""
    fullname: str | None = None
    email: str | None = None
    new_password: str | None = None


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(
    body: RegisterUserAPIRequest,
    register_user_use_case: FromDishka[RegisterUserUseCase],
) -> ApiResponse[UserInfo]:
    """Create a user account."""
    user = await register_user_use_case.execute(
        RegisterUserRequest(**body.model_dump())
    )
    return ok(user, "User registered successfully", status.HTTP_201_CREATED)


@router.post("/login")
async def login_user(
    body: LoginUserAPIRequest,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> ApiResponse[LoginResponse]:
    """Log a user in with email or username and set the session cookies."""
    result = await login_use_case.execute(
        LoginRequest(
            kind=PrincipalKind.USER,
            email=body.email,
            username=body.username,
            password=body.password,
        )
    )
    set_session_cookies(response, settings, result.access_token, result.refresh_token)
    return ok(result, "User logged in successfully")


@router.post("/logout")
async def logout_user(
    request: Request,
    response: Response,
    logout_use_case: FromDishka[LogoutUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[dict]:
    """End the caller's session."""
    principal = await current_user(request, settings, principal_resolver, "log out here")
    await logout_use_case.execute(LogoutRequest(principal=principal))
    clear_session_cookies(response, settings)
    return ok({}, "User logged out successfully")


@router.post("/refresh-token")
async def refresh_user_session(
    request: Request,
    response: Response,
    refresh_session_use_case: FromDishka[RefreshSessionUseCase],
    settings: FromDishka[Settings],
    body: RefreshTokenAPIRequest | None = None,
) -> ApiResponse[RefreshSessionResponse]:
    """Rotate the refresh token and issue a new access token."""
    token = refresh_token_from(request, settings, body.refresh_token if body else None)
    result = await refresh_session_use_case.execute(
        RefreshSessionRequest(kind=PrincipalKind.USER, refresh_token=token)
    )
    set_session_cookies(response, settings, result.access_token, result.refresh_token)
    return ok(result, "Access token refreshed")


@router.get("/profile/{user_id}")
async def get_user_profile(
    user_id: UUID,
    request: Request,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[GetUserProfileResponse]:
    """A user's profile with their contribution counts per service."""
    await current_principal(request, settings, principal_resolver)
    profile = await get_user_profile_use_case.execute(
        GetUserProfileRequest(user_id=str(user_id))
    )
    return ok(profile, "User profile fetched successfully")


@router.put("/{user_id}")
async def update_user(
    user_id: UUID,
    body: UpdateUserAPIRequest,
    request: Request,
    update_user_use_case: FromDishka[UpdateUserUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[UserInfo]:
    """Update the caller's own account. The current password is required."""
    principal = await current_user(
        request, settings, principal_resolver, "update user accounts"
    )
    user = await update_user_use_case.execute(
        UpdateUserRequest(
            user_id=str(user_id),
            requester_id=str(principal.id),
            **body.model_dump(),
        )
    )
    return ok(user, "User updated successfully")


async def _list_user_targets(
    use_case: ListUserTargetsUseCase,
    user_id: UUID,
    target_type: TargetType,
    page: int,
    limit: int | None,
) -> ApiResponse[Page[TargetInfo]]:
    result = await use_case.execute(
        ListUserTargetsRequest(
            user_id=str(user_id), target_type=target_type, page=page, limit=limit
        )
    )
    return ok(result, f"{target_type.label} list fetched successfully")


@router.get("/{user_id}/feedbacks")
async def list_user_feedbacks(
    user_id: UUID,
    list_user_targets_use_case: FromDishka[ListUserTargetsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ApiResponse[Page[TargetInfo]]:
    """Feedback opened by a user, newest first."""
    return await _list_user_targets(
        list_user_targets_use_case, user_id, TargetType.FEEDBACK, page, limit
    )


@router.get("/{user_id}/issues")
async def list_user_issues(
    user_id: UUID,
    list_user_targets_use_case: FromDishka[ListUserTargetsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ApiResponse[Page[TargetInfo]]:
    """Issues opened by a user, newest first."""
    return await _list_user_targets(
        list_user_targets_use_case, user_id, TargetType.ISSUE, page, limit
    )


@router.get("/{user_id}/bugs")
async def list_user_bugs(
    user_id: UUID,
    list_user_targets_use_case: FromDishka[ListUserTargetsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ApiResponse[Page[TargetInfo]]:
    """Bugs opened by a user, newest first."""
    return await _list_user_targets(
        list_user_targets_use_case, user_id, TargetType.BUG, page, limit
    )
