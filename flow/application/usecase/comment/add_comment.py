"""Add comment use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CommentInfo
from flow.domain.service import CommentService, TargetService
from flow.domain.value import TargetId, TargetType, UserId


class AddCommentRequest(BaseModel):
    """Add comment request."""

    target_type: TargetType
    target_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    message: str


class AddCommentUseCase:
    """Use case for commenting on a feedback, issue or bug."""

    def __init__(
        self, comment_service: CommentService, target_service: TargetService
    ) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
            target_service: Target domain service
        """
        self.comment_service = comment_service
        self.target_service = target_service

    async def execute(self, request: AddCommentRequest) -> CommentInfo:
        """Execute add comment flow.

        Raises:
            NotFoundError: If no target of that kind exists
            ValidationError: If the message is blank
        """
        target = await self.target_service.get_target(
            TargetId(UUID(request.target_id)), request.target_type
        )
        comment = await self.comment_service.add_comment(
            target, UserId(UUID(request.author_id)), request.message
        )
        return CommentInfo.from_comment(comment)
