"""Comment entity.

Comments and replies live in one collection. A reply is a comment whose
parent_id points at a top-level comment; replies cannot be replied to, so the
thread depth is exactly one.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from flow.domain.model.common import DomainModel, utcnow
from flow.domain.value import CommentId, LikeableType, TargetId, TargetType, UserId


class Comment(DomainModel):
    """Comment on a target, or a reply to such a comment."""

    id: CommentId
    target_id: TargetId
    target_type: TargetType
    author_id: UserId
    message: str = Field(min_length=1, max_length=5000)
    parent_id: Optional[CommentId] = None
    like_count: int = Field(default=0, ge=0)  # Cache of the Like ledger
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    @property
    def likeable_type(self) -> LikeableType:
        return LikeableType.REPLY if self.is_reply else LikeableType.COMMENT
