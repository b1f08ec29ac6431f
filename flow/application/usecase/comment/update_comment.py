"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CommentInfo
from flow.domain.service import CommentService
from flow.domain.value import CommentId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str
    author_id: str  # User ID from authenticated user
    message: str


class UpdateCommentUseCase:
    """Use case for editing a comment or reply."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentInfo:
        """Execute update comment flow.

        Raises:
            ValidationError: If the message is blank
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the requester isn't the author
        """
        comment = await self.comment_service.update_comment(
            CommentId(UUID(request.comment_id)),
            UserId(UUID(request.author_id)),
            request.message,
        )
        return CommentInfo.from_comment(comment)
