"""Service activity reporting."""

from datetime import date, datetime, time, timedelta, timezone

import logfire

from flow.config import ActivitySettings
from flow.domain.model import ActivityBucket, Service
from flow.domain.model.common import utcnow
from flow.domain.repository import ServiceVoteRepository, TargetRepository
from flow.domain.value import TargetType

from .base import DomainService

_TARGET_FIELDS = {
    TargetType.FEEDBACK: "feedbacks",
    TargetType.ISSUE: "issues",
    TargetType.BUG: "bugs",
}


class ActivityService(DomainService):
    """Computes daily activity buckets for a service on read."""

    def __init__(
        self,
        target_repository: TargetRepository,
        service_vote_repository: ServiceVoteRepository,
        activity_settings: ActivitySettings,
    ) -> None:
        self.target_repository = target_repository
        self.service_vote_repository = service_vote_repository
        self.activity_settings = activity_settings

    def window_days(
        self, service: Service, days: int | None, now: datetime | None = None
    ) -> int:
        """Number of days to report.

        Without an explicit ``days`` the window follows the service's age,
        clamped to [min_days, max_days]. An explicit value is clamped to
        [1, max_days].
        """
        settings = self.activity_settings
        if days is not None:
            return max(1, min(days, settings.max_days))

        now = now or utcnow()
        age_days = (now.date() - service.created_at.astimezone(timezone.utc).date()).days + 1
        return max(settings.min_days, min(age_days, settings.max_days))

    async def get_activity(
        self, service: Service, days: int | None = None, now: datetime | None = None
    ) -> list[ActivityBucket]:
        """Daily upvotes and new feedbacks/issues/bugs, oldest day first.

        Args:
            service: Service to report on
            days: Window length; defaults from the service's age
            now: Reference time (defaults to current UTC time)

        Returns:
            One bucket per day, including days with no activity
        """
        now = now or utcnow()
        window = self.window_days(service, days, now)

        with logfire.span(
            "activity_service.get_activity",
            service_id=str(service.id),
            days=window,
        ):
            first_day: date = now.date() - timedelta(days=window - 1)
            since = datetime.combine(first_day, time.min, tzinfo=timezone.utc)

            counts: dict[date, dict[str, int]] = {
                first_day + timedelta(days=offset): {
                    "upvotes": 0,
                    "feedbacks": 0,
                    "issues": 0,
                    "bugs": 0,
                }
                for offset in range(window)
            }

            for target_type, created_at in await self.target_repository.find_created_since(
                service.id, since
            ):
                day = created_at.astimezone(timezone.utc).date()
                if day in counts:
                    counts[day][_TARGET_FIELDS[target_type]] += 1

            for created_at in await self.service_vote_repository.find_created_since(
                service.id, since
            ):
                day = created_at.astimezone(timezone.utc).date()
                if day in counts:
                    counts[day]["upvotes"] += 1

            return [ActivityBucket(date=day, **values) for day, values in counts.items()]
