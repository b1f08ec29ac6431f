"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from flow.config import Settings
from flow.domain.repository import (
    CommentRepository,
    LikeRepository,
    ServiceRepository,
    ServiceVoteRepository,
    TargetRepository,
    UserRepository,
    VoteRepository,
)
from flow.persistence.database import create_engine, create_session_factory
from flow.persistence.repository import (
    PostgresCommentRepository,
    PostgresLikeRepository,
    PostgresServiceRepository,
    PostgresServiceVoteRepository,
    PostgresTargetRepository,
    PostgresUserRepository,
    PostgresVoteRepository,
)
from flow.util.di.base import ProviderBase
from flow.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide one session (one transaction) per request.

        Committed when the request finishes cleanly, rolled back on any
        exception, so every counter update and ledger write of an operation
        lands together or not at all.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_service_repository(self, session: AsyncSession) -> ServiceRepository:
        """Provide Service repository."""
        return PostgresServiceRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_target_repository(self, session: AsyncSession) -> TargetRepository:
        """Provide Target repository."""
        return PostgresTargetRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_service_vote_repository(
        self, session: AsyncSession
    ) -> ServiceVoteRepository:
        """Provide ServiceVote repository."""
        return PostgresServiceVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_like_repository(self, session: AsyncSession) -> LikeRepository:
        """Provide Like repository."""
        return PostgresLikeRepository(session)
