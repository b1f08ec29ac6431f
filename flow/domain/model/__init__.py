"""Domain model entities for Service Flow."""

from flow.domain.model.account import Account
from flow.domain.model.activity import ActivityBucket, TargetCounts
from flow.domain.model.comment import Comment
from flow.domain.model.like import Like
from flow.domain.model.principal import Principal
from flow.domain.model.service import Service
from flow.domain.model.target import Target
from flow.domain.model.user import User
from flow.domain.model.vote import ServiceVote, Vote

__all__ = [
    "Account",
    "User",
    "Service",
    "Principal",
    "Target",
    "Comment",
    "Like",
    "Vote",
    "ServiceVote",
    "ActivityBucket",
    "TargetCounts",
]
