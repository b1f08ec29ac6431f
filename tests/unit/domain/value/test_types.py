"""Unit tests for domain value objects."""

import pytest
from pydantic import ValidationError

from flow.domain.value import Email, TargetType, Username, VoteDelta, VoteType


class TestVoteDelta:
    """Counter changes for each vote transition."""

    @pytest.mark.parametrize(
        ("previous", "current", "expected"),
        [
            (None, VoteType.UPVOTE, (1, 0, 1)),
            (None, VoteType.DOWNVOTE, (0, 1, -1)),
            (VoteType.UPVOTE, None, (-1, 0, -1)),
            (VoteType.DOWNVOTE, None, (0, -1, 1)),
            (VoteType.UPVOTE, VoteType.DOWNVOTE, (-1, 1, -2)),
            (VoteType.DOWNVOTE, VoteType.UPVOTE, (1, -1, 2)),
        ],
    )
    def test_between(self, previous, current, expected):
        delta = VoteDelta.between(previous, current)

        assert (delta.upvotes, delta.downvotes, delta.net_votes) == expected

    def test_no_change_is_zero(self):
        assert VoteDelta.between(VoteType.UPVOTE, VoteType.UPVOTE).is_zero


class TestTargetType:
    def test_only_feedback_and_issues_are_votable(self):
        assert [t for t in TargetType if t.is_votable] == [
            TargetType.FEEDBACK,
            TargetType.ISSUE,
        ]

    def test_only_issues_accept_status_updates(self):
        assert [t for t in TargetType if t.accepts_status_updates] == [
            TargetType.ISSUE
        ]


class TestIdentityValues:
    def test_username_normalized(self):
        assert Username("  Alice_01 ").root == "alice_01"

    @pytest.mark.parametrize("value", ["ab", "has space", "x" * 31])
    def test_username_rejected(self, value):
        with pytest.raises(ValidationError):
            Username(value)

    def test_email_rejected(self):
        with pytest.raises(ValidationError):
            Email("not-an-email")
