"""In-memory like repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from flow.domain.model import Like
from flow.domain.repository import LikeRepository
from flow.domain.value import CommentId, LikeableType, LikeId, UserId


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self) -> None:
        self._likes: dict[LikeId, Like] = {}

    async def find_by_user_and_likeable(
        self,
        user_id: UserId,
        likeable_type: LikeableType,
        likeable_id: CommentId,
    ) -> Optional[Like]:
        """Find a user's like on a comment or reply."""
        for like in self._likes.values():
            if (
                like.user_id == user_id
                and like.likeable_type == likeable_type
                and like.likeable_id == likeable_id
            ):
                return like
        return None

    async def save(self, like: Like) -> Like:
        """Save a new like."""
        if await self.find_by_user_and_likeable(
            like.user_id, like.likeable_type, like.likeable_id
        ):
            raise IntegrityError("Duplicate like", None, Exception())
        self._likes[like.id] = like
        return like

    async def delete(self, like_id: LikeId) -> bool:
        """Delete a like."""
        return self._likes.pop(like_id, None) is not None

    async def count_by_likeable(
        self, likeable_type: LikeableType, likeable_id: CommentId
    ) -> int:
        """Count likes on a comment or reply."""
        return sum(
            1
            for like in self._likes.values()
            if like.likeable_type == likeable_type and like.likeable_id == likeable_id
        )

    async def find_liked_ids(
        self, user_id: UserId, likeable_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Return which of ``likeable_ids`` the user has liked."""
        wanted = set(likeable_ids)
        return {
            like.likeable_id
            for like in self._likes.values()
            if like.user_id == user_id and like.likeable_id in wanted
        }

    async def delete_by_likeables(self, likeable_ids: Sequence[CommentId]) -> int:
        """Delete every like on the given comments/replies."""
        wanted = set(likeable_ids)
        doomed = [like.id for like in self._likes.values() if like.likeable_id in wanted]
        for like_id in doomed:
            del self._likes[like_id]
        return len(doomed)
