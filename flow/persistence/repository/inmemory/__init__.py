"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .like import InMemoryLikeRepository
from .service import InMemoryServiceRepository
from .target import InMemoryTargetRepository
from .user import InMemoryUserRepository
from .vote import InMemoryServiceVoteRepository, InMemoryVoteRepository

__all__ = [
    "InMemoryUserRepository",
    "InMemoryServiceRepository",
    "InMemoryTargetRepository",
    "InMemoryVoteRepository",
    "InMemoryServiceVoteRepository",
    "InMemoryCommentRepository",
    "InMemoryLikeRepository",
]
