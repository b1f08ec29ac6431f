"""Reply to comment use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CommentInfo
from flow.domain.service import CommentService
from flow.domain.value import CommentId, UserId


class ReplyToCommentRequest(BaseModel):
    """Reply request."""

    comment_id: str  # Parent comment (must be top-level)
    author_id: str  # User ID from authenticated user
    message: str


class ReplyToCommentUseCase:
    """Use case for replying to a top-level comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ReplyToCommentRequest) -> CommentInfo:
        """Execute reply flow.

        Raises:
            NotFoundError: If the parent comment doesn't exist
            ValidationError: If the message is blank or the parent is a reply
        """
        reply = await self.comment_service.reply(
            CommentId(UUID(request.comment_id)),
            UserId(UUID(request.author_id)),
            request.message,
        )
        return CommentInfo.from_comment(reply)
