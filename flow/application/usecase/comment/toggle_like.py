"""Toggle like use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel
from flow.domain.service import CommentService
from flow.domain.value import CommentId, LikeableType, UserId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    likeable_type: LikeableType
    likeable_id: str  # Comment or reply ID
    user_id: str  # User ID from authenticated user


class ToggleLikeResponse(CamelModel):
    """Like state after the toggle."""

    has_liked: bool
    like_count: int


class ToggleLikeUseCase:
    """Use case for liking or unliking a comment or reply."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Raises:
            NotFoundError: If no comment of that kind exists
        """
        state = await self.comment_service.toggle_like(
            CommentId(UUID(request.likeable_id)),
            request.likeable_type,
            UserId(UUID(request.user_id)),
        )
        return ToggleLikeResponse(has_liked=state.has_liked, like_count=state.like_count)
