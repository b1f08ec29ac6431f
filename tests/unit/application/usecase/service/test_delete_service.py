"""Unit tests for DeleteServiceUseCase."""

from uuid import uuid4

import pytest

from flow.application.usecase.service import DeleteServiceRequest, DeleteServiceUseCase
from flow.domain.error import NotAuthorizedError
from flow.domain.repository import (
    ServiceRepository,
    ServiceVoteRepository,
    TargetRepository,
    UserRepository,
    VoteRepository,
)
from flow.domain.service import VoteService
from flow.domain.value import TargetType, VoteType
from tests.conftest import make_service, make_target, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestDeleteServiceUseCase:
    """Tests for DeleteServiceUseCase."""

    @pytest.mark.asyncio
    async def test_delete_cascades_targets_and_upvotes(self, unit_env):
        """Deleting a service removes its targets, their votes, and its upvotes."""
        # Arrange
        services = await unit_env.get(ServiceRepository)
        users = await unit_env.get(UserRepository)
        targets = await unit_env.get(TargetRepository)
        votes = await unit_env.get(VoteRepository)
        service_votes = await unit_env.get(ServiceVoteRepository)
        vote_service = await unit_env.get(VoteService)

        service = await services.save(make_service())
        user = await users.save(make_user())
        feedback = await targets.save(
            make_target(TargetType.FEEDBACK, service.id, user.id)
        )
        await vote_service.cast_vote(
            user.id, feedback.id, TargetType.FEEDBACK, VoteType.UPVOTE
        )
        await vote_service.upvote_service(user.id, service.id)

        # Act
        response = await (await unit_env.get(DeleteServiceUseCase)).execute(
            DeleteServiceRequest(
                service_id=str(service.id), requester_id=str(service.id)
            )
        )

        # Assert
        assert (response.deleted_targets, response.deleted_upvotes) == (1, 1)
        assert await services.find_by_id(service.id) is None
        assert await targets.find_by_id(feedback.id) is None
        assert (
            await votes.find_by_voter_and_target(
                user.id, TargetType.FEEDBACK, feedback.id
            )
            is None
        )
        assert await service_votes.find_by_voter_and_service(user.id, service.id) is None

    @pytest.mark.asyncio
    async def test_other_service_forbidden(self, unit_env):
        services = await unit_env.get(ServiceRepository)
        service = await services.save(make_service())

        with pytest.raises(NotAuthorizedError):
            await (await unit_env.get(DeleteServiceUseCase)).execute(
                DeleteServiceRequest(
                    service_id=str(service.id), requester_id=str(uuid4())
                )
            )

        assert await services.find_by_id(service.id) is not None

