"""Integration test for CastVoteUseCase with a real database."""

from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from flow.application.usecase.auth import RegisterUserRequest, RegisterUserUseCase
from flow.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from flow.domain.repository import ServiceRepository, TargetRepository, VoteRepository
from flow.domain.value import TargetType, UserId, VoteType
from tests.conftest import make_service, make_target
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Clean database before each test."""
    session = await integration_env.get(AsyncSession)
    await session.execute(
        text(
            "TRUNCATE TABLE likes, comments, votes, service_votes, targets, "
            "services, users CASCADE"
        )
    )
    await session.commit()
    yield


class TestCastVoteIntegration:
    """Vote state machine against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_upvote_then_retract(self, integration_env):
        """Upvoting twice restores the counters and removes the vote row."""
        # Arrange
        register = await integration_env.get(RegisterUserUseCase)
        user = await register.execute(
            RegisterUserRequest(
                username="ursula",
                email="ursula@example.com",
                fullname="Ursula",
                password="hunter22",
            )
        )
        voter_id = UserId(UUID(user.id))
        service = await (await integration_env.get(ServiceRepository)).save(
            make_service()
        )
        target_repo = await integration_env.get(TargetRepository)
        issue = await target_repo.save(
            make_target(TargetType.ISSUE, service.id, voter_id, title="Login broken")
        )
        cast_vote = await integration_env.get(CastVoteUseCase)
        request = CastVoteRequest(
            target_type=TargetType.ISSUE,
            target_id=str(issue.id),
            voter_id=user.id,
            direction=VoteType.UPVOTE,
        )

        # Act
        first = await cast_vote.execute(request)
        second = await cast_vote.execute(request)

        # Assert
        assert (first.vote_type, first.upvotes, first.net_votes) == (
            VoteType.UPVOTE,
            1,
            1,
        )
        assert (second.vote_type, second.upvotes, second.net_votes) == (None, 0, 0)

        vote_repo = await integration_env.get(VoteRepository)
        assert (
            await vote_repo.find_by_voter_and_target(
                voter_id, TargetType.ISSUE, issue.id
            )
            is None
        )
