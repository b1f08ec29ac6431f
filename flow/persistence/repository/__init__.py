"""PostgreSQL repository implementations."""

from flow.persistence.repository.comment import PostgresCommentRepository
from flow.persistence.repository.like import PostgresLikeRepository
from flow.persistence.repository.service import PostgresServiceRepository
from flow.persistence.repository.target import PostgresTargetRepository
from flow.persistence.repository.user import PostgresUserRepository
from flow.persistence.repository.vote import (
    PostgresServiceVoteRepository,
    PostgresVoteRepository,
)

__all__ = [
    "PostgresUserRepository",
    "PostgresServiceRepository",
    "PostgresTargetRepository",
    "PostgresVoteRepository",
    "PostgresServiceVoteRepository",
    "PostgresCommentRepository",
    "PostgresLikeRepository",
]
