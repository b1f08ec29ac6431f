"""Unit tests for TargetService."""

from uuid import uuid4

import pytest

from flow.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from flow.domain.repository import (
    CommentRepository,
    ServiceRepository,
    TargetRepository,
    TargetSortOrder,
    UserRepository,
    VoteRepository,
)
from flow.domain.service import CommentService, TargetService, VoteService
from flow.domain.value import (
    ServiceId,
    TargetId,
    TargetStatus,
    TargetType,
    UserId,
    VoteType,
)
from tests.conftest import make_service, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(env):
    users = await env.get(UserRepository)
    services = await env.get(ServiceRepository)
    author = await users.save(make_user("author"))
    service = await services.save(make_service())
    return author, service


class TestCreateTarget:
    """Tests for create_target method."""

    @pytest.mark.asyncio
    async def test_issue_starts_open_with_zero_counters(self, unit_env):
        target_service = await unit_env.get(TargetService)
        author, service = await _seed(unit_env)

        issue = await target_service.create_target(
            TargetType.ISSUE, service.id, author.id, "Login broken", "Safari only"
        )

        assert issue.status == TargetStatus.OPEN
        assert issue.opened_by == author.id
        assert (issue.upvotes, issue.downvotes, issue.net_votes) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_feedback_has_no_status(self, unit_env):
        target_service = await unit_env.get(TargetService)
        author, service = await _seed(unit_env)

        feedback = await target_service.create_target(
            TargetType.FEEDBACK, service.id, author.id, "Dark mode", "Please"
        )

        assert feedback.status is None

    @pytest.mark.asyncio
    async def test_blank_title_rejected(self, unit_env):
        target_service = await unit_env.get(TargetService)
        author, service = await _seed(unit_env)

        with pytest.raises(ValidationError):
            await target_service.create_target(
                TargetType.BUG, service.id, author.id, "  ", "Crash on save"
            )


class TestListTargets:
    """Tests for list_for_service method."""

    @pytest.mark.asyncio
    async def test_sort_by_votes_and_search(self, unit_env):
        """Default sort puts the highest net votes first."""
        # Arrange
        target_service = await unit_env.get(TargetService)
        vote_service = await unit_env.get(VoteService)
        author, service = await _seed(unit_env)

        quiet = await target_service.create_target(
            TargetType.FEEDBACK, service.id, author.id, "Dark mode", "Night theme"
        )
        popular = await target_service.create_target(
            TargetType.FEEDBACK, service.id, author.id, "Export CSV", "Spreadsheets"
        )
        await vote_service.cast_vote(
            UserId(uuid4()), popular.id, TargetType.FEEDBACK, VoteType.UPVOTE
        )

        # Act
        by_votes, total = await target_service.list_for_service(
            service.id, TargetType.FEEDBACK, None, TargetSortOrder.VOTES, 10, 0
        )
        searched, search_total = await target_service.list_for_service(
            service.id, TargetType.FEEDBACK, "NIGHT", TargetSortOrder.VOTES, 10, 0
        )

        # Assert
        assert [t.id for t in by_votes] == [popular.id, quiet.id]
        assert total == 2
        assert [t.id for t in searched] == [quiet.id]
        assert search_total == 1

    @pytest.mark.asyncio
    async def test_kinds_are_listed_separately(self, unit_env):
        target_service = await unit_env.get(TargetService)
        author, service = await _seed(unit_env)
        await target_service.create_target(
            TargetType.BUG, service.id, author.id, "Crash", "On save"
        )

        issues, total = await target_service.list_for_service(
            service.id, TargetType.ISSUE, None, TargetSortOrder.NEWEST, 10, 0
        )

        assert issues == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_counts_for_service(self, unit_env):
        target_service = await unit_env.get(TargetService)
        author, service = await _seed(unit_env)
        for target_type in (TargetType.FEEDBACK, TargetType.BUG, TargetType.BUG):
            await target_service.create_target(
                target_type, service.id, author.id, "Title", "Description"
            )

        counts = await target_service.count_for_service(service.id)

        assert (counts.feedbacks, counts.issues, counts.bugs) == (1, 0, 2)
        assert counts.total == 3


class TestUpdateStatus:
    """Tests for update_status method."""

    @pytest.mark.asyncio
    async def test_owning_service_moves_issue(self, unit_env):
        target_service = await unit_env.get(TargetService)
        author, service = await _seed(unit_env)
        issue = await target_service.create_target(
            TargetType.ISSUE, service.id, author.id, "Login broken", "Safari"
        )

        updated = await target_service.update_status(issue, "in-progress", service.id)

        assert updated.status == TargetStatus.IN_PROGRESS

    @pytest.mark.asyncio
    async def test_other_service_forbidden(self, unit_env):
        target_service = await unit_env.get(TargetService)
        author, service = await _seed(unit_env)
        issue = await target_service.create_target(
            TargetType.ISSUE, service.id, author.id, "Login broken", "Safari"
        )

        with pytest.raises(NotAuthorizedError):
            await target_service.update_status(issue, "resolved", ServiceId(uuid4()))

    @pytest.mark.asyncio
    async def test_unknown_status_rejected(self, unit_env):
        target_service = await unit_env.get(TargetService)
        author, service = await _seed(unit_env)
        issue = await target_service.create_target(
            TargetType.ISSUE, service.id, author.id, "Login broken", "Safari"
        )

        with pytest.raises(ValidationError):
            await target_service.update_status(issue, "done", service.id)

    @pytest.mark.asyncio
    async def test_bug_status_not_updatable(self, unit_env):
        target_service = await unit_env.get(TargetService)
        author, service = await _seed(unit_env)
        bug = await target_service.create_target(
            TargetType.BUG, service.id, author.id, "Crash", "On save"
        )

        with pytest.raises(ValidationError):
            await target_service.update_status(bug, "resolved", service.id)


class TestDeleteTarget:
    """Tests for owner-only deletion with cascade."""

    @pytest.mark.asyncio
    async def test_owner_delete_cascades_votes_and_comments(self, unit_env):
        # Arrange
        target_service = await unit_env.get(TargetService)
        vote_service = await unit_env.get(VoteService)
        comment_service = await unit_env.get(CommentService)
        target_repo = await unit_env.get(TargetRepository)
        vote_repo = await unit_env.get(VoteRepository)
        comment_repo = await unit_env.get(CommentRepository)
        author, service = await _seed(unit_env)

        issue = await target_service.create_target(
            TargetType.ISSUE, service.id, author.id, "Login broken", "Safari"
        )
        voter_id = UserId(uuid4())
        await vote_service.cast_vote(
            voter_id, issue.id, TargetType.ISSUE, VoteType.UPVOTE
        )
        comment = await comment_service.add_comment(issue, voter_id, "Me too")

        # Act
        await target_service.delete_target(issue, author.id)

        # Assert
        assert await target_repo.find_by_id(issue.id) is None
        assert (
            await vote_repo.find_by_voter_and_target(
                voter_id, TargetType.ISSUE, issue.id
            )
            is None
        )
        assert await comment_repo.find_by_id(comment.id) is None

    @pytest.mark.asyncio
    async def test_non_owner_forbidden(self, unit_env):
        target_service = await unit_env.get(TargetService)
        author, service = await _seed(unit_env)
        feedback = await target_service.create_target(
            TargetType.FEEDBACK, service.id, author.id, "Dark mode", "Please"
        )

        with pytest.raises(NotAuthorizedError):
            await target_service.delete_target(feedback, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_get_missing_target_raises_not_found(self, unit_env):
        target_service = await unit_env.get(TargetService)

        with pytest.raises(NotFoundError):
            await target_service.get_target(TargetId(uuid4()), TargetType.BUG)

    @pytest.mark.asyncio
    async def test_delete_all_for_service(self, unit_env):
        target_service = await unit_env.get(TargetService)
        target_repo = await unit_env.get(TargetRepository)
        author, service = await _seed(unit_env)
        created = [
            await target_service.create_target(
                target_type, service.id, author.id, "Title", "Description"
            )
            for target_type in TargetType
        ]

        removed = await target_service.delete_all_for_service(service.id)

        assert removed == 3
        for target in created:
            assert await target_repo.find_by_id(target.id) is None
