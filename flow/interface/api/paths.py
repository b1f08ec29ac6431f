"""URL path segments for target kinds."""

from flow.domain.value import TargetType

TARGET_COLLECTIONS: dict[TargetType, str] = {
    TargetType.FEEDBACK: "feedbacks",
    TargetType.ISSUE: "issues",
    TargetType.BUG: "bugs",
}
