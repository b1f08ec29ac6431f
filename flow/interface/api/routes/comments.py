"""Comment, reply and like routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status

from flow.application.usecase.comment import (
    AddCommentRequest,
    AddCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    ReplyToCommentRequest,
    ReplyToCommentUseCase,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from flow.application.usecase.common import CamelModel, CommentInfo
from flow.config import Settings
from flow.domain.service import PrincipalResolver
from flow.domain.value import LikeableType, TargetType
from flow.interface.api.auth import current_user
from flow.interface.api.envelope import ApiResponse, ok
from flow.interface.api.paths import TARGET_COLLECTIONS

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CommentAPIRequest(CamelModel):
    """API request carrying a comment or reply message."""

    message: str = ""


@router.post("/comments/{comment_id}/replies", status_code=status.HTTP_201_CREATED)
async def reply_to_comment(
    comment_id: UUID,
    body: CommentAPIRequest,
    request: Request,
    reply_to_comment_use_case: FromDishka[ReplyToCommentUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[CommentInfo]:
    """Reply to a top-level comment. Replies cannot be replied to."""
    principal = await current_user(request, settings, principal_resolver, "reply")
    reply = await reply_to_comment_use_case.execute(
        ReplyToCommentRequest(
            comment_id=str(comment_id),
            author_id=str(principal.id),
            message=body.message,
        )
    )
    return ok(reply, "Reply added successfully", status.HTTP_201_CREATED)


@router.patch("/comments/{comment_id}")
async def update_comment(
    comment_id: UUID,
    body: CommentAPIRequest,
    request: Request,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[CommentInfo]:
    """Edit the caller's own comment or reply."""
    principal = await current_user(
        request, settings, principal_resolver, "edit comments"
    )
    comment = await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=str(comment_id),
            author_id=str(principal.id),
            message=body.message,
        )
    )
    return ok(comment, "Comment updated successfully")


@router.delete("/comments/{comment_id}")
async def delete_comment(
    comment_id: UUID,
    request: Request,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[DeleteCommentResponse]:
    """Delete the caller's own comment with its replies and likes."""
    principal = await current_user(
        request, settings, principal_resolver, "delete comments"
    )
    result = await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=str(comment_id), author_id=str(principal.id))
    )
    return ok(result, "Comment deleted successfully")


async def _toggle_like(
    likeable_type: LikeableType,
    likeable_id: UUID,
    request: Request,
    toggle_like_use_case: ToggleLikeUseCase,
    principal_resolver: PrincipalResolver,
    settings: Settings,
) -> ApiResponse[ToggleLikeResponse]:
    principal = await current_user(
        request, settings, principal_resolver, f"like a {likeable_type.value}"
    )
    result = await toggle_like_use_case.execute(
        ToggleLikeRequest(
            likeable_type=likeable_type,
            likeable_id=str(likeable_id),
            user_id=str(principal.id),
        )
    )
    message = "Liked" if result.has_liked else "Like removed"
    return ok(result, message)


@router.post("/comments/{comment_id}/like")
async def toggle_comment_like(
    comment_id: UUID,
    request: Request,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[ToggleLikeResponse]:
    """Like or unlike a top-level comment."""
    return await _toggle_like(
        LikeableType.COMMENT,
        comment_id,
        request,
        toggle_like_use_case,
        principal_resolver,
        settings,
    )


@router.post("/replies/{reply_id}/like")
async def toggle_reply_like(
    reply_id: UUID,
    request: Request,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    principal_resolver: FromDishka[PrincipalResolver],
    settings: FromDishka[Settings],
) -> ApiResponse[ToggleLikeResponse]:
    """Like or unlike a reply."""
    return await _toggle_like(
        LikeableType.REPLY,
        reply_id,
        request,
        toggle_like_use_case,
        principal_resolver,
        settings,
    )


def create_target_router(target_type: TargetType) -> APIRouter:
    """Build the add-comment route for one target kind."""
    collection = TARGET_COLLECTIONS[target_type]
    target_router = APIRouter(tags=["comments"], route_class=DishkaRoute)

    @target_router.post(
        f"/{collection}/{{target_id}}/comments",
        name=f"comment_on_{target_type.value}",
        status_code=status.HTTP_201_CREATED,
    )
    async def add_comment(
        target_id: UUID,
        body: CommentAPIRequest,
        request: Request,
        add_comment_use_case: FromDishka[AddCommentUseCase],
        principal_resolver: FromDishka[PrincipalResolver],
        settings: FromDishka[Settings],
    ) -> ApiResponse[CommentInfo]:
        """Add a top-level comment to a target."""
        principal = await current_user(request, settings, principal_resolver, "comment")
        comment = await add_comment_use_case.execute(
            AddCommentRequest(
                target_type=target_type,
                target_id=str(target_id),
                author_id=str(principal.id),
                message=body.message,
            )
        )
        return ok(comment, "Comment added successfully", status.HTTP_201_CREATED)

    return target_router


feedback_comment_router = create_target_router(TargetType.FEEDBACK)
issue_comment_router = create_target_router(TargetType.ISSUE)
bug_comment_router = create_target_router(TargetType.BUG)
