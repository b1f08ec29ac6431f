"""Read-side aggregates for service reporting."""

import datetime

from flow.domain.model.common import DomainModel
from flow.domain.value import TargetType


class ActivityBucket(DomainModel):
    """Activity a service received on one calendar day (UTC)."""

    date: datetime.date
    upvotes: int = 0
    feedbacks: int = 0
    issues: int = 0
    bugs: int = 0


class TargetCounts(DomainModel):
    """Number of feedbacks, issues and bugs, e.g. for one service."""

    feedbacks: int = 0
    issues: int = 0
    bugs: int = 0

    @classmethod
    def from_mapping(cls, counts: dict[TargetType, int]) -> "TargetCounts":
        return cls(
            feedbacks=counts.get(TargetType.FEEDBACK, 0),
            issues=counts.get(TargetType.ISSUE, 0),
            bugs=counts.get(TargetType.BUG, 0),
        )

    @property
    def total(self) -> int:
        return self.feedbacks + self.issues + self.bugs
