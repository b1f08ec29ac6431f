"""PostgreSQL implementation of Like repository."""

from typing import Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from flow.domain.model import Like
from flow.domain.repository import LikeRepository
from flow.domain.value import CommentId, LikeableType, LikeId, UserId
from flow.persistence.mappers import like_to_dict, row_to_like
from flow.persistence.tables import likes_table


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_likeable(
        self,
        user_id: UserId,
        likeable_type: LikeableType,
        likeable_id: CommentId,
    ) -> Optional[Like]:
        """Find a user's like on a comment or reply."""
        stmt = select(likes_table).where(
            and_(
                likes_table.c.user_id == user_id,
                likes_table.c.likeable_type == likeable_type.value,
                likes_table.c.likeable_id == likeable_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_like(row._asdict()) if row else None

    async def save(self, like: Like) -> Like:
        """Insert a like."""
        stmt = insert(likes_table).values(**like_to_dict(like))
        await self.session.execute(stmt)
        await self.session.flush()
        return like

    async def delete(self, like_id: LikeId) -> bool:
        """Delete a like."""
        stmt = delete(likes_table).where(likes_table.c.id == like_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_by_likeable(
        self, likeable_type: LikeableType, likeable_id: CommentId
    ) -> int:
        """Count likes on a comment or reply."""
        stmt = (
            select(func.count())
            .select_from(likes_table)
            .where(
                likes_table.c.likeable_type == likeable_type.value,
                likes_table.c.likeable_id == likeable_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_liked_ids(
        self, user_id: UserId, likeable_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Return which of ``likeable_ids`` the user has liked."""
        if not likeable_ids:
            return set()
        stmt = select(likes_table.c.likeable_id).where(
            likes_table.c.user_id == user_id,
            likes_table.c.likeable_id.in_(list(likeable_ids)),
        )
        result = await self.session.execute(stmt)
        return {CommentId(likeable_id) for likeable_id in result.scalars().all()}

    async def delete_by_likeables(self, likeable_ids: Sequence[CommentId]) -> int:
        """Delete every like on the given comments/replies."""
        if not likeable_ids:
            return 0
        stmt = delete(likes_table).where(
            likes_table.c.likeable_id.in_(list(likeable_ids))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
