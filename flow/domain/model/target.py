"""Target entity.

Feedback, issues and bugs share one shape: a titled report a user files
against a service. They differ only in whether they carry a status and
whether they can be voted on (see TargetType).
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from flow.domain.model.common import DomainModel, utcnow
from flow.domain.value import ServiceId, TargetId, TargetStatus, TargetType, UserId


class Target(DomainModel):
    """Feedback, issue or bug.

    Counters are caches maintained by the vote ledger and comment subsystem
    with atomic storage-level increments:
    - upvotes/downvotes never go below zero
    - net_votes = upvotes - downvotes, unbounded
    - comment_count counts top-level comments and replies
    """

    id: TargetId
    target_type: TargetType
    service_id: ServiceId
    opened_by: UserId
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=5000)
    status: Optional[TargetStatus] = None
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    net_votes: int = 0
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def validate_status_for_type(self) -> "Target":
        """Issues and bugs always have a status; feedback never does."""
        if self.target_type.has_status and self.status is None:
            raise ValueError(f"{self.target_type.label} requires a status")
        if not self.target_type.has_status and self.status is not None:
            raise ValueError(f"{self.target_type.label} has no status")
        return self
