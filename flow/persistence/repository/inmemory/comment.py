"""In-memory comment repository for testing."""

from typing import Optional

from flow.domain.model import Comment
from flow.domain.model.common import utcnow
from flow.domain.repository import CommentRepository
from flow.domain.value import CommentId, TargetId, TargetType


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment or reply by ID."""
        return self._comments.get(comment_id)

    async def find_by_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> list[Comment]:
        """Find all comments and replies on a target, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.target_type == target_type and c.target_id == target_id
        ]
        return sorted(comments, key=lambda c: c.created_at)

    async def find_replies(self, parent_id: CommentId) -> list[Comment]:
        """Find the replies to a comment, oldest first."""
        replies = [c for c in self._comments.values() if c.parent_id == parent_id]
        return sorted(replies, key=lambda c: c.created_at)

    async def save(self, comment: Comment) -> Comment:
        """Save a new comment or reply."""
        self._comments[comment.id] = comment
        return comment

    async def update_message(
        self, comment_id: CommentId, message: str
    ) -> Optional[Comment]:
        """Replace a comment's message."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(update={"message": message, "updated_at": utcnow()})
        self._comments[comment_id] = updated
        return updated

    async def set_like_count(self, comment_id: CommentId, like_count: int) -> None:
        """Overwrite the cached like count."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.model_copy(
                update={"like_count": like_count}
            )

    async def delete_many(self, comment_ids: list[CommentId]) -> int:
        """Delete comments by ID."""
        removed = 0
        for comment_id in comment_ids:
            if self._comments.pop(comment_id, None) is not None:
                removed += 1
        return removed
