"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel
from flow.domain.service import CommentService
from flow.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    author_id: str  # User ID from authenticated user


class DeleteCommentResponse(CamelModel):
    """Deleted comment reference."""

    comment_id: str
    removed: int  # The comment plus any replies


class DeleteCommentUseCase:
    """Use case for deleting a comment or reply."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Delete the comment, its replies and their likes.

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the requester isn't the author
        """
        removed = await self.comment_service.delete_comment(
            CommentId(UUID(request.comment_id)), UserId(UUID(request.author_id))
        )
        return DeleteCommentResponse(comment_id=request.comment_id, removed=removed)
