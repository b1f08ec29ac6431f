"""Repository interfaces for Service Flow domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from flow.domain.repository.account import AccountRepository
from flow.domain.repository.comment import CommentRepository
from flow.domain.repository.like import LikeRepository
from flow.domain.repository.service import ServiceRepository, ServiceSortOrder
from flow.domain.repository.target import TargetRepository, TargetSortOrder
from flow.domain.repository.user import UserRepository
from flow.domain.repository.vote import ServiceVoteRepository, VoteRepository

__all__ = [
    "AccountRepository",
    "UserRepository",
    "ServiceRepository",
    "ServiceSortOrder",
    "TargetRepository",
    "TargetSortOrder",
    "VoteRepository",
    "ServiceVoteRepository",
    "CommentRepository",
    "LikeRepository",
]
