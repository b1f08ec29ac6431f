"""Unit tests for CastVoteUseCase."""

import pytest

from flow.application.usecase.auth import (
    LoginRequest,
    LoginUseCase,
    RegisterServiceRequest,
    RegisterServiceUseCase,
    RegisterUserRequest,
    RegisterUserUseCase,
)
from flow.application.usecase.target import CreateTargetRequest, CreateTargetUseCase
from flow.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from flow.domain.error import ValidationError
from flow.domain.value import PrincipalKind, TargetType, VoteType
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_upvote_then_upvote_again_on_new_issue(self, unit_env):
        """Register, log in, open an issue, then vote and retract."""
        # Arrange
        service = await (await unit_env.get(RegisterServiceUseCase)).execute(
            RegisterServiceRequest(
                name="Acme",
                email="hello@acme.io",
                password="s3cret-pass",
                description="Anvils and more",
            )
        )
        await (await unit_env.get(RegisterUserUseCase)).execute(
            RegisterUserRequest(
                username="ursula",
                email="ursula@example.com",
                fullname="Ursula",
                password="hunter22",
            )
        )
        login = await (await unit_env.get(LoginUseCase)).execute(
            LoginRequest(
                kind=PrincipalKind.USER, email="ursula@example.com", password="hunter22"
            )
        )
        assert login.access_token and login.refresh_token
        user_id = login.user.id

        issue = await (await unit_env.get(CreateTargetUseCase)).execute(
            CreateTargetRequest(
                target_type=TargetType.ISSUE,
                service_id=service.id,
                author_id=user_id,
                title="Login broken",
                description="Cannot log in on Safari",
            )
        )
        cast_vote = await unit_env.get(CastVoteUseCase)
        request = CastVoteRequest(
            target_type=TargetType.ISSUE,
            target_id=issue.id,
            voter_id=user_id,
            direction=VoteType.UPVOTE,
        )

        # Act
        first = await cast_vote.execute(request)
        second = await cast_vote.execute(request)

        # Assert
        assert first.vote_type == VoteType.UPVOTE
        assert (first.upvotes, first.net_votes) == (1, 1)
        assert second.vote_type is None
        assert (second.upvotes, second.net_votes) == (0, 0)

    @pytest.mark.asyncio
    async def test_bug_vote_rejected(self, unit_env):
        """Bugs are filed but not voted on."""
        service = await (await unit_env.get(RegisterServiceUseCase)).execute(
            RegisterServiceRequest(
                name="Acme",
                email="hello@acme.io",
                password="s3cret-pass",
                description="Anvils",
            )
        )
        user = await (await unit_env.get(RegisterUserUseCase)).execute(
            RegisterUserRequest(
                username="ursula",
                email="ursula@example.com",
                fullname="Ursula",
                password="hunter22",
            )
        )
        bug = await (await unit_env.get(CreateTargetUseCase)).execute(
            CreateTargetRequest(
                target_type=TargetType.BUG,
                service_id=service.id,
                author_id=user.id,
                title="Crash",
                description="On save",
            )
        )

        with pytest.raises(ValidationError):
            await (await unit_env.get(CastVoteUseCase)).execute(
                CastVoteRequest(
                    target_type=TargetType.BUG,
                    target_id=bug.id,
                    voter_id=user.id,
                    direction=VoteType.UPVOTE,
                )
            )
