"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from flow.domain.model import Like
from flow.domain.value import CommentId, LikeableType, LikeId, UserId


class LikeRepository(ABC):
    """Repository for the comment/reply like ledger."""

    @abstractmethod
    async def find_by_user_and_likeable(
        self,
        user_id: UserId,
        likeable_type: LikeableType,
        likeable_id: CommentId,
    ) -> Optional[Like]:
        """Find a user's like on a comment or reply."""
        pass

    @abstractmethod
    async def save(self, like: Like) -> Like:
        """Save a new like.

        Raises:
            IntegrityError: If the user already liked this item
        """
        pass

    @abstractmethod
    async def delete(self, like_id: LikeId) -> bool:
        """Delete a like. Returns True if it existed."""
        pass

    @abstractmethod
    async def count_by_likeable(
        self, likeable_type: LikeableType, likeable_id: CommentId
    ) -> int:
        """Count likes on a comment or reply."""
        pass

    @abstractmethod
    async def find_liked_ids(
        self, user_id: UserId, likeable_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Return which of ``likeable_ids`` the user has liked (batch query)."""
        pass

    @abstractmethod
    async def delete_by_likeables(self, likeable_ids: Sequence[CommentId]) -> int:
        """Delete every like on the given comments/replies. Returns the number deleted."""
        pass
