"""Unit tests for UpdateCommentUseCase."""

import pytest

from flow.application.usecase.comment import UpdateCommentRequest, UpdateCommentUseCase
from flow.domain.error import NotAuthorizedError, ValidationError
from flow.domain.repository import ServiceRepository, TargetRepository, UserRepository
from flow.domain.service import CommentService
from flow.domain.value import TargetType
from tests.conftest import make_service, make_target, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def seed_comment(unit_env):
    """Persist a user, a service, a bug and one comment by the user."""
    author = await (await unit_env.get(UserRepository)).save(make_user("alice"))
    service = await (await unit_env.get(ServiceRepository)).save(make_service())
    bug = await (await unit_env.get(TargetRepository)).save(
        make_target(TargetType.BUG, service.id, author.id)
    )
    comment_service = await unit_env.get(CommentService)
    comment = await comment_service.add_comment(bug, author.id, "Crashes on save")
    return author, comment


class TestUpdateCommentUseCase:
    """Tests for UpdateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_author_updates_message(self, unit_env):
        """Updating comment text by author should succeed."""
        # Arrange
        author, comment = await seed_comment(unit_env)
        use_case = await unit_env.get(UpdateCommentUseCase)

        # Act
        result = await use_case.execute(
            UpdateCommentRequest(
                comment_id=str(comment.id),
                author_id=str(author.id),
                message="Crashes on save and on export",
            )
        )

        # Assert
        assert result.message == "Crashes on save and on export"
        assert result.id == str(comment.id)

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, unit_env):
        _, comment = await seed_comment(unit_env)
        intruder = await (await unit_env.get(UserRepository)).save(make_user("bob"))
        use_case = await unit_env.get(UpdateCommentUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=str(comment.id),
                    author_id=str(intruder.id),
                    message="Edited",
                )
            )

    @pytest.mark.asyncio
    async def test_blank_message_rejected(self, unit_env):
        author, comment = await seed_comment(unit_env)
        use_case = await unit_env.get(UpdateCommentUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=str(comment.id), author_id=str(author.id), message=" "
                )
            )
