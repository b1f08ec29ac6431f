"""Vote ledger entities.

Two separate ledgers:
- Vote: three-state (none/upvote/downvote) per (voter, target)
- ServiceVote: presence-only upvote per (voter, service)
"""

from datetime import datetime

from pydantic import Field, field_validator

from flow.domain.model.common import DomainModel, utcnow
from flow.domain.value import (
    ServiceId,
    ServiceVoteId,
    TargetId,
    TargetType,
    UserId,
    VoteId,
    VoteType,
)


class Vote(DomainModel):
    """A user's vote on a feedback or issue.

    Business rules:
    - At most one row per (voter_id, target_type, target_id), enforced by a
      unique constraint
    - Re-submitting the held direction deletes the row (retraction)
    - Submitting the other direction updates vote_type in place (switch)
    """

    id: VoteId
    voter_id: UserId
    target_id: TargetId
    target_type: TargetType
    vote_type: VoteType
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("target_type")
    @classmethod
    def validate_votable(cls, v: TargetType) -> TargetType:
        if not v.is_votable:
            raise ValueError(f"{v.label} cannot be voted on")
        return v


class ServiceVote(DomainModel):
    """A user's upvote on a service. Unique per (voter_id, service_id)."""

    id: ServiceVoteId
    voter_id: UserId
    service_id: ServiceId
    created_at: datetime = Field(default_factory=utcnow)
