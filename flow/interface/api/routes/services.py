"""Service account routes."""

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
    RegisterServiceRequest,
    RegisterServiceUseCase,
)
from flow.application.usecase.common import CamelModel, Page, ServiceInfo
from flow.application.usecase.service import (
    DeleteServiceRequest,
    DeleteServiceResponse,
    DeleteServiceUseCase,
    GetServiceActivityRequest,
    GetServiceActivityResponse,
    GetServiceActivityUseCase,
    GetServiceDetailsRequest,
    GetServiceDetailsResponse,
    GetServiceDetailsUseCase,
    ListServicesRequest,
    ListServicesUseCase,
    TopServicesRequest,
    TopServicesResponse,
    TopServicesUseCase,
    UpdateServiceRequest,
    UpdateServiceUseCase,
)
from flow.config import Settings
from flow.domain.repository import ServiceSortOrder
from flow.domain.service import PrincipalResolver
from flow.domain.value import PrincipalKind
from flow.interface.api.auth import (
    clear_session_cookies,
    current_service,
    optional_principal,
    refresh_token_from,
    set_session_cookies,
)
from flow.interface.api.envelope import ApiResponse, ok

router = APIRouter(prefix="/services", tags=["services"], route_class=DishkaRoute)


class RegisterServiceAPIRequest(CamelModel):
    """API request for registering a service."""

    name: str = ""
    email: str = ""
    password: str = ""
    description: str = ""
    service_link: str | None = None
    logo_url: str | None = None


class LoginServiceAPIRequest(CamelModel):
    email: str | None = None
    password: str = ""


class RefreshTokenAPIRequest(CamelModel):
    refresh_token: str | None = None


class UpdateServiceAPIRequest(CamelModel):
    """API request for updating a service profile. Omitted fields are kept."""

    name: str | None = None
    email: str | None = None
    description: str | None = None
    service_link: str | None = None
    logo_url: str | None = None
    password: str | None = None


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_service(
    body: RegisterServiceAPIRequest,
    register_service_use_case: FromDishka[RegisterServiceUseCase],
) -> ApiResponse[ServiceInfo]:
    """Create a service account."""
    service = await register_service_use_case.execute(
        RegisterServiceRequest(**body.model_dump())
    )
    return ok(service, "Service registered successfully", status.HTTP_201_CREATED)


@router.post("/login")
async def login_service(
    body: LoginServiceAPIRequest,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> ApiResponse[LoginResponse]:
    """Log a service in and set the session cookies."""
    result = await login_use_case.execute(
        LoginRequest(
            kind=PrincipalKind.SERVICE, email=body.email, password=body.password
        )
    )
    set_session_cookies(response, settings, result.access_token, result.refresh_token)
    return ok(result, "Service logged in successfully")


@router.post("/logout")
async def logout_service(
    request: Request,
    response: Response,
    logout_use_case: FromDishka[LogoutUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[dict]:
    principal = await current_service(
        request, settings, principal_resolver, "log out here"
    )
    await logout_use_case.execute(LogoutRequest(principal=principal))
    clear_session_cookies(response, settings)
    return ok({}, "Service logged out successfully")


@router.post("/refresh-token")
async def refresh_service_session(
    request: Request,
    response: Response,
    refresh_session_use_case: FromDishka[RefreshSessionUseCase],
    settings: FromDishka[Settings],
    body: RefreshTokenAPIRequest | None = None,
) -> ApiResponse[RefreshSessionResponse]:
    token = refresh_token_from(request, settings, body.refresh_token if body else None)
    result = await refresh_session_use_case.execute(
        RefreshSessionRequest(kind=PrincipalKind.SERVICE, refresh_token=token)
    )
    set_session_cookies(response, settings, result.access_token, result.refresh_token)
    return ok(result, "Access token refreshed")


@router.get("")
async def list_services(
    list_services_use_case: FromDishka[ListServicesUseCase],
    search: str | None = None,
    sort: ServiceSortOrder = ServiceSortOrder.NEWEST,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ApiResponse[Page[ServiceInfo]]:
    """List services, optionally filtered by a case-insensitive name search."""
    result = await list_services_use_case.execute(
        ListServicesRequest(search=search, sort=sort, page=page, limit=limit)
    )
    return ok(result, "Services fetched successfully")


@router.get("/top")
async def top_services(
    top_services_use_case: FromDishka[TopServicesUseCase],
    limit: int | None = Query(default=None, ge=1),
) -> ApiResponse[TopServicesResponse]:
    """Most upvoted services."""
    result = await top_services_use_case.execute(TopServicesRequest(limit=limit))
    return ok(result, "Top services fetched successfully")


@router.get("/{service_id}")
async def get_service_details(
    service_id: UUID,
    request: Request,
    get_service_details_use_case: FromDishka[GetServiceDetailsUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[GetServiceDetailsResponse]:
    """Public service profile; a logged-in user also sees whether they upvoted it."""
    principal = await optional_principal(request, settings, principal_resolver)
    viewer_id = str(principal.id) if principal and principal.is_user else None

    result = await get_service_details_use_case.execute(
        GetServiceDetailsRequest(service_id=str(service_id), viewer_id=viewer_id)
    )
    return ok(result, "Service details fetched successfully")


@router.patch("/{service_id}")
async def update_service(
    service_id: UUID,
    body: UpdateServiceAPIRequest,
    request: Request,
    update_service_use_case: FromDishka[UpdateServiceUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[ServiceInfo]:
    """Update the calling service's own profile."""
    principal = await current_service(
        request, settings, principal_resolver, "update service profiles"
    )
    service = await update_service_use_case.execute(
        UpdateServiceRequest(
            service_id=str(service_id),
            requester_id=str(principal.id),
            **body.model_dump(),
        )
    )
    return ok(service, "Service updated successfully")


@router.delete("/{service_id}")
async def delete_service(
    service_id: UUID,
    request: Request,
    response: Response,
    delete_service_use_case: FromDishka[DeleteServiceUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[DeleteServiceResponse]:
    """Delete the calling service with all of its targets and upvotes."""
    principal = await current_service(
        request, settings, principal_resolver, "delete service accounts"
    )
    result = await delete_service_use_case.execute(
        DeleteServiceRequest(service_id=str(service_id), requester_id=str(principal.id))
    )
    clear_session_cookies(response, settings)
    return ok(result, "Service deleted successfully")


@router.get("/{service_id}/activity")
async def get_service_activity(
    service_id: UUID,
    request: Request,
    get_service_activity_use_case: FromDishka[GetServiceActivityUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
    days: int | None = Query(default=None),
) -> ApiResponse[GetServiceActivityResponse]:
    """Daily upvote and report counts for the calling service's dashboard."""
    principal = await current_service(
        request, settings, principal_resolver, "view service activity"
    )
    result = await get_service_activity_use_case.execute(
        GetServiceActivityRequest(
            service_id=str(service_id), requester_id=str(principal.id), days=days
        )
    )
    return ok(result, "Service activity fetched successfully")
