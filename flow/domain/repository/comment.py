"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from flow.domain.model import Comment
from flow.domain.value import CommentId, TargetId, TargetType


class CommentRepository(ABC):
    """Repository for comments and replies."""

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment or reply by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> list[Comment]:
        """Find all comments and replies on a target, oldest first."""
        pass

    @abstractmethod
    async def find_replies(self, parent_id: CommentId) -> list[Comment]:
        """Find the replies to a comment, oldest first."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a new comment or reply."""
        pass

    @abstractmethod
    async def update_message(
        self, comment_id: CommentId, message: str
    ) -> Optional[Comment]:
        """Replace a comment's message.

        Returns:
            Updated comment, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def set_like_count(self, comment_id: CommentId, like_count: int) -> None:
        """Overwrite the cached like count with a value counted from the ledger."""
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: list[CommentId]) -> int:
        """Delete comments by ID. Returns the number deleted."""
        pass
