"""PostgreSQL implementation of Comment repository."""

from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from flow.domain.model import Comment
from flow.domain.model.common import utcnow
from flow.domain.repository import CommentRepository
from flow.domain.value import CommentId, TargetId, TargetType
from flow.persistence.mappers import comment_to_dict, row_to_comment
from flow.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment or reply by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> list[Comment]:
        """Find all comments and replies on a target, oldest first."""
        stmt = (
            select(comments_table)
            .where(
                comments_table.c.target_type == target_type.value,
                comments_table.c.target_id == target_id,
            )
            .order_by(comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_replies(self, parent_id: CommentId) -> list[Comment]:
        """Find the replies to a comment, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .order_by(comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment or reply."""
        stmt = comments_table.insert().values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def update_message(
        self, comment_id: CommentId, message: str
    ) -> Optional[Comment]:
        """Replace a comment's message."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(message=message, updated_at=utcnow())
            .returning(*comments_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None

    async def set_like_count(self, comment_id: CommentId, like_count: int) -> None:
        """Overwrite the cached like count."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(like_count=like_count)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_many(self, comment_ids: list[CommentId]) -> int:
        """Delete comments by ID."""
        if not comment_ids:
            return 0
        stmt = delete(comments_table).where(comments_table.c.id.in_(comment_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
