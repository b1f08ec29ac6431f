"""Mock persistence providers for testing."""

from dishka import Scope, provide

from flow.domain.repository import (
    CommentRepository,
    LikeRepository,
    ServiceRepository,
    ServiceVoteRepository,
    TargetRepository,
    UserRepository,
    VoteRepository,
)
from flow.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryLikeRepository,
    InMemoryServiceRepository,
    InMemoryServiceVoteRepository,
    InMemoryTargetRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from flow.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped: state survives across requests made through
    one container (so a TestClient session behaves like a database), while
    each test builds its own container and starts empty.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_service_repository(self) -> ServiceRepository:
        """Provide in-memory service repository."""
        return InMemoryServiceRepository()

    @provide(scope=Scope.APP)
    def get_target_repository(self) -> TargetRepository:
        """Provide in-memory target repository."""
        return InMemoryTargetRepository()

    @provide(scope=Scope.APP)
    def get_vote_repository(self) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository()

    @provide(scope=Scope.APP)
    def get_service_vote_repository(self) -> ServiceVoteRepository:
        """Provide in-memory service vote repository."""
        return InMemoryServiceVoteRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_like_repository(self) -> LikeRepository:
        """Provide in-memory like repository."""
        return InMemoryLikeRepository()
