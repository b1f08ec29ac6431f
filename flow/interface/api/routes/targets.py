"""Feedback, issue and bug routes.

The three kinds share one lifecycle, so each gets an identical router built
by ``create_router``; issues additionally expose a status endpoint.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request, status

from flow.application.usecase.common import CamelModel, Page, TargetInfo
from flow.application.usecase.target import (
    CreateTargetRequest,
    CreateTargetUseCase,
    DeleteTargetRequest,
    DeleteTargetResponse,
    DeleteTargetUseCase,
    GetTargetRequest,
    GetTargetResponse,
    GetTargetUseCase,
    ListTargetsRequest,
    ListTargetsUseCase,
    UpdateTargetStatusRequest,
    UpdateTargetStatusUseCase,
)
from flow.config import Settings
from flow.domain.repository import TargetSortOrder
from flow.domain.service import PrincipalResolver
from flow.domain.value import TargetType
from flow.interface.api.auth import current_service, current_user, optional_principal
from flow.interface.api.envelope import ApiResponse, ok
from flow.interface.api.paths import TARGET_COLLECTIONS


class CreateTargetAPIRequest(CamelModel):
    """API request for opening a target."""

    title: str = ""
    description: str = ""


class UpdateStatusAPIRequest(CamelModel):
    status: str | None = None


def create_router(target_type: TargetType) -> APIRouter:
    """Build the router for one target kind."""
    collection = TARGET_COLLECTIONS[target_type]
    label = target_type.label
    router = APIRouter(tags=[collection], route_class=DishkaRoute)

    @router.get(f"/services/{{service_id}}/{collection}", name=f"list_{collection}")
    async def list_targets(
        service_id: UUID,
        list_targets_use_case: FromDishka[ListTargetsUseCase],
        search: str | None = None,
        sort: TargetSortOrder = TargetSortOrder.VOTES,
        page: int = Query(default=1, ge=1),
        limit: int | None = Query(default=None, ge=1),
    ) -> ApiResponse[Page[TargetInfo]]:
        """List a service's targets of this kind, most voted first by default."""
        result = await list_targets_use_case.execute(
            ListTargetsRequest(
                service_id=str(service_id),
                target_type=target_type,
                search=search,
                sort=sort,
                page=page,
                limit=limit,
            )
        )
        return ok(result, f"{label} list fetched successfully")

    @router.post(
        f"/services/{{service_id}}/{collection}",
        name=f"create_{target_type.value}",
        status_code=status.HTTP_201_CREATED,
    )
    async def create_target(
        service_id: UUID,
        body: CreateTargetAPIRequest,
        request: Request,
        create_target_use_case: FromDishka[CreateTargetUseCase],
        principal_resolver: FromDishka[PrincipalResolver],
        settings: FromDishka[Settings],
    ) -> ApiResponse[TargetInfo]:
        """Open a target against a service."""
        principal = await current_user(
            request, settings, principal_resolver, f"create {collection}"
        )
        target = await create_target_use_case.execute(
            CreateTargetRequest(
                target_type=target_type,
                service_id=str(service_id),
                author_id=str(principal.id),
                title=body.title,
                description=body.description,
            )
        )
        return ok(target, f"{label} created successfully", status.HTTP_201_CREATED)

    @router.get(f"/{collection}/{{target_id}}", name=f"get_{target_type.value}")
    async def get_target(
        target_id: UUID,
        request: Request,
        get_target_use_case: FromDishka[GetTargetUseCase],
        principal_resolver: FromDishka[PrincipalResolver],
        settings: FromDishka[Settings],
    ) -> ApiResponse[GetTargetResponse]:
        """Target with its comment threads; a logged-in user also sees their vote."""
        principal = await optional_principal(request, settings, principal_resolver)
        viewer_id = str(principal.id) if principal and principal.is_user else None

        result = await get_target_use_case.execute(
            GetTargetRequest(
                target_type=target_type, target_id=str(target_id), viewer_id=viewer_id
            )
        )
        return ok(result, f"{label} fetched successfully")

    @router.delete(f"/{collection}/{{target_id}}", name=f"delete_{target_type.value}")
    async def delete_target(
        target_id: UUID,
        request: Request,
        delete_target_use_case: FromDishka[DeleteTargetUseCase],
        principal_resolver: FromDishka[PrincipalResolver],
        settings: FromDishka[Settings],
    ) -> ApiResponse[DeleteTargetResponse]:
        """Delete a target the caller opened, with its votes and comments."""
        principal = await current_user(
            request, settings, principal_resolver, f"delete {collection}"
        )
        result = await delete_target_use_case.execute(
            DeleteTargetRequest(
                target_type=target_type,
                target_id=str(target_id),
                requester_id=str(principal.id),
            )
        )
        return ok(result, f"{label} deleted successfully")

    if target_type.accepts_status_updates:

        @router.patch(
            f"/{collection}/{{target_id}}/status",
            name=f"update_{target_type.value}_status",
        )
        async def update_status(
            target_id: UUID,
            body: UpdateStatusAPIRequest,
            request: Request,
            update_target_status_use_case: FromDishka[UpdateTargetStatusUseCase],
            principal_resolver: FromDishka[PrincipalResolver],
            settings: FromDishka[Settings],
        ) -> ApiResponse[TargetInfo]:
            """Move the target to a new status. Only the owning service may."""
            principal = await current_service(
                request, settings, principal_resolver, f"update {label.lower()} status"
            )
            target = await update_target_status_use_case.execute(
                UpdateTargetStatusRequest(
                    target_type=target_type,
                    target_id=str(target_id),
                    requester_id=str(principal.id),
                    status=body.status,
                )
            )
            return ok(target, f"{label} status updated successfully")

    return router


feedback_router = create_router(TargetType.FEEDBACK)
issue_router = create_router(TargetType.ISSUE)
bug_router = create_router(TargetType.BUG)
