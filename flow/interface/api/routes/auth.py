"""Authentication routes shared by both principal kinds."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request

from flow.application.usecase.auth import (
    GetCurrentPrincipalRequest,
    GetCurrentPrincipalResponse,
    GetCurrentPrincipalUseCase,
)
from flow.config import Settings
from flow.interface.api.auth import access_token_from
from flow.interface.api.envelope import ApiResponse, ok

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.get("/me")
async def get_current_principal(
    request: Request,
    get_current_principal_use_case: FromDishka[GetCurrentPrincipalUseCase],
    settings: FromDishka[Settings],
) -> ApiResponse[GetCurrentPrincipalResponse]:
    """Who the caller is: a user or a service.

    Example:
        GET /auth/me
        Cookie: accessToken=...

        {
            "statusCode": 200,
            "data": {"kind": "service", "id": "...", "name": "Acme", "email": "..."},
            "message": "Current principal fetched successfully",
            "success": true
        }
    """
    principal = await get_current_principal_use_case.execute(
        GetCurrentPrincipalRequest(token=access_token_from(request, settings))
    )
    return ok(principal, "Current principal fetched successfully")
