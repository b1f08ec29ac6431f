"""Domain value objects for Service Flow."""

from flow.domain.value.identifiers import (
    CommentId,
    LikeId,
    ServiceId,
    ServiceVoteId,
    TargetId,
    UserId,
    VoteId,
)
from flow.domain.value.types import (
    Email,
    LikeableType,
    PrincipalKind,
    TargetStatus,
    TargetType,
    Username,
    VoteDelta,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "ServiceId",
    "TargetId",
    "CommentId",
    "VoteId",
    "ServiceVoteId",
    "LikeId",
    # Types
    "PrincipalKind",
    "TargetType",
    "TargetStatus",
    "VoteType",
    "LikeableType",
    "Username",
    "Email",
    "VoteDelta",
]
