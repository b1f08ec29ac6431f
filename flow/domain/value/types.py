"""Domain value objects for Service Flow.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from flow.domain.value.common import RootValueObject, ValueObject


class PrincipalKind(str, Enum):
    """Kind of authenticated actor."""

    USER = "user"
    SERVICE = "service"


class TargetType(str, Enum):
    """Kind of user-authored content filed against a service."""

    FEEDBACK = "feedback"
    ISSUE = "issue"
    BUG = "bug"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def is_votable(self) -> bool:
        """Feedback and issues take upvotes/downvotes; bugs do not."""
        return self in (TargetType.FEEDBACK, TargetType.ISSUE)

    @property
    def has_status(self) -> bool:
        return self in (TargetType.ISSUE, TargetType.BUG)

    @property
    def accepts_status_updates(self) -> bool:
        """Only issues have their status moved by the owning service."""
        return self == TargetType.ISSUE


class TargetStatus(str, Enum):
    """Workflow status of an issue or bug."""

    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class VoteType(str, Enum):
    """Direction of a vote on a feedback or issue."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class LikeableType(str, Enum):
    """Kind of comment record that can be liked."""

    COMMENT = "comment"
    REPLY = "reply"


class Username(RootValueObject[str]):
    """Unique user handle.

    Stored lowercase; 3-30 characters of letters, digits, '.', '_' or '-'.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip().lower()
        if not re.match(r"^[a-z0-9._-]{3,30}$", v):
            raise ValueError(
                "Username must be 3-30 characters of letters, digits, '.', '_' or '-'"
            )
        return v


class Email(RootValueObject[str]):
    """Email address, normalized to lowercase."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if len(v) > 255 or not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", v):
            raise ValueError("Email address is invalid")
        return v


class VoteDelta(ValueObject):
    """Counter adjustments produced by one vote transition.

    ``between(previous, current)`` covers every transition of the three-state
    ledger: cast (None -> d), retract (d -> None) and switch (d -> other).
    """

    upvotes: int = 0
    downvotes: int = 0
    net_votes: int = 0

    @classmethod
    def between(
        cls, previous: VoteType | None, current: VoteType | None
    ) -> "VoteDelta":
        upvotes = int(current == VoteType.UPVOTE) - int(previous == VoteType.UPVOTE)
        downvotes = int(current == VoteType.DOWNVOTE) - int(
            previous == VoteType.DOWNVOTE
        )
        return cls(upvotes=upvotes, downvotes=downvotes, net_votes=upvotes - downvotes)

    @property
    def is_zero(self) -> bool:
        return self.upvotes == 0 and self.downvotes == 0
