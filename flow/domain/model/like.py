"""Like entity."""

from datetime import datetime

from pydantic import Field

from flow.domain.model.common import DomainModel, utcnow
from flow.domain.value import CommentId, LikeableType, LikeId, UserId


class Like(DomainModel):
    """A user's like on a comment or reply.

    Unique per (user_id, likeable_type, likeable_id). The Like rows are the
    source of truth for Comment.like_count.
    """

    id: LikeId
    user_id: UserId
    likeable_type: LikeableType
    likeable_id: CommentId
    created_at: datetime = Field(default_factory=utcnow)
