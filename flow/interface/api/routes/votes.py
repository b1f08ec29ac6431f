"""Vote routes: feedback/issue votes and service upvotes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request

from flow.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetVoteRequest,
    GetVoteResponse,
    GetVoteUseCase,
    RemoveServiceUpvoteUseCase,
    ServiceUpvoteRequest,
    ServiceUpvoteResponse,
    UpvoteServiceUseCase,
)
from flow.config import Settings
from flow.domain.service import PrincipalResolver
from flow.domain.value import TargetType, VoteType
from flow.interface.api.auth import current_user
from flow.interface.api.envelope import ApiResponse, ok
from flow.interface.api.paths import TARGET_COLLECTIONS

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


@router.post("/services/{service_id}/upvote")
async def upvote_service(
    service_id: UUID,
    request: Request,
    upvote_service_use_case: FromDishka[UpvoteServiceUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[ServiceUpvoteResponse]:
    """Upvote a service. A second upvote by the same user is a conflict.

    Requires a user account.
    """
    principal = await current_user(
        request, settings, principal_resolver, "upvote services"
    )
    result = await upvote_service_use_case.execute(
        ServiceUpvoteRequest(service_id=str(service_id), voter_id=str(principal.id))
    )
    return ok(result, "Service upvoted successfully")


@router.delete("/services/{service_id}/upvote")
async def remove_service_upvote(
    service_id: UUID,
    request: Request,
    remove_service_upvote_use_case: FromDishka[RemoveServiceUpvoteUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[ServiceUpvoteResponse]:
    """Remove the caller's upvote from a service."""
    principal = await current_user(
        request, settings, principal_resolver, "remove service upvotes"
    )
    result = await remove_service_upvote_use_case.execute(
        ServiceUpvoteRequest(service_id=str(service_id), voter_id=str(principal.id))
    )
    return ok(result, "Service upvote removed successfully")


def create_target_router(target_type: TargetType) -> APIRouter:
    """Build upvote/downvote/current-vote routes for a votable target kind."""
    collection = TARGET_COLLECTIONS[target_type]
    target_router = APIRouter(tags=["votes"], route_class=DishkaRoute)

    async def cast(
        direction: VoteType,
        target_id: UUID,
        request: Request,
        cast_vote_use_case: CastVoteUseCase,
        principal_resolver: PrincipalResolver,
        settings: Settings,
    ) -> ApiResponse[CastVoteResponse]:
        principal = await current_user(
            request, settings, principal_resolver, f"vote on {collection}"
        )
        result = await cast_vote_use_case.execute(
            CastVoteRequest(
                target_type=target_type,
                target_id=str(target_id),
                voter_id=str(principal.id),
                direction=direction,
            )
        )
        message = "Vote removed" if result.vote_type is None else "Vote recorded"
        return ok(result, message)

    @target_router.post(
        f"/{collection}/{{target_id}}/upvote", name=f"upvote_{target_type.value}"
    )
    async def upvote(
        target_id: UUID,
        request: Request,
        cast_vote_use_case: FromDishka[CastVoteUseCase],
        principal_resolver: FromDishka[PrincipalResolver],
        settings: FromDishka[Settings],
    ) -> ApiResponse[CastVoteResponse]:
        """Upvote; upvoting again retracts, upvoting a downvote switches it."""
        return await cast(
            VoteType.UPVOTE,
            target_id,
            request,
            cast_vote_use_case,
            principal_resolver,
            settings,
        )

    @target_router.post(
        f"/{collection}/{{target_id}}/downvote", name=f"downvote_{target_type.value}"
    )
    async def downvote(
        target_id: UUID,
        request: Request,
        cast_vote_use_case: FromDishka[CastVoteUseCase],
        principal_resolver: FromDishka[PrincipalResolver],
        settings: FromDishka[Settings],
    ) -> ApiResponse[CastVoteResponse]:
        """Downvote; downvoting again retracts, downvoting an upvote switches it."""
        return await cast(
            VoteType.DOWNVOTE,
            target_id,
            request,
            cast_vote_use_case,
            principal_resolver,
            settings,
        )

    @target_router.get(
        f"/{collection}/{{target_id}}/vote", name=f"get_{target_type.value}_vote"
    )
    async def get_vote(
        target_id: UUID,
        request: Request,
        get_vote_use_case: FromDishka[GetVoteUseCase],
        principal_resolver: FromDishka[PrincipalResolver],
        settings: FromDishka[Settings],
    ) -> ApiResponse[GetVoteResponse]:
        """The caller's current vote direction, or null."""
        principal = await current_user(
            request, settings, principal_resolver, f"vote on {collection}"
        )
        result = await get_vote_use_case.execute(
            GetVoteRequest(
                target_type=target_type,
                target_id=str(target_id),
                voter_id=str(principal.id),
            )
        )
        return ok(result, "Vote fetched successfully")

    return target_router


feedback_vote_router = create_target_router(TargetType.FEEDBACK)
issue_vote_router = create_target_router(TargetType.ISSUE)
