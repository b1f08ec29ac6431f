"""Target domain service (feedback, issues and bugs)."""

from uuid import uuid4

import logfire

from flow.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from flow.domain.model import Target, TargetCounts
from flow.domain.model.common import utcnow
from flow.domain.repository import TargetRepository, TargetSortOrder, VoteRepository
from flow.domain.value import (
    ServiceId,
    TargetId,
    TargetStatus,
    TargetType,
    UserId,
    VoteDelta,
)

from .base import DomainService
from .comment_service import CommentService


class TargetService(DomainService):
    """Domain service for the target lifecycle."""

    def __init__(
        self,
        target_repository: TargetRepository,
        vote_repository: VoteRepository,
        comment_service: CommentService,
    ) -> None:
        """Initialize target service.

        Args:
            target_repository: Target repository
            vote_repository: Vote repository (cascade on delete)
            comment_service: Comment domain service (cascade on delete)
        """
        self.target_repository = target_repository
        self.vote_repository = vote_repository
        self.comment_service = comment_service

    async def create_target(
        self,
        target_type: TargetType,
        service_id: ServiceId,
        author_id: UserId,
        title: str,
        description: str,
    ) -> Target:
        """Open a feedback, issue or bug against a service.

        Args:
            target_type: Kind of target
            service_id: Service the target is filed against (must exist)
            author_id: User opening the target
            title: Title (required, non-blank)
            description: Description (required, non-blank)

        Returns:
            Created target with zeroed counters

        Raises:
            ValidationError: If title or description is blank
        """
        with logfire.span(
            "target_service.create_target",
            target_type=target_type.value,
            service_id=str(service_id),
            author_id=str(author_id),
        ):
            title = title.strip()
            description = description.strip()
            if not title or not description:
                raise ValidationError("Title and description are required.")

            now = utcnow()
            target = Target(
                id=TargetId(uuid4()),
                target_type=target_type,
                service_id=service_id,
                opened_by=author_id,
                title=title,
                description=description,
                status=TargetStatus.OPEN if target_type.has_status else None,
                created_at=now,
                updated_at=now,
            )

            saved = await self.target_repository.save(target)
            logfire.info(
                "Target created",
                target_id=str(saved.id),
                target_type=target_type.value,
                service_id=str(service_id),
            )
            return saved

    async def get_target_by_id(self, target_id: TargetId) -> Target | None:
        """Get a target by ID."""
        with logfire.span("target_service.get_target_by_id", target_id=str(target_id)):
            return await self.target_repository.find_by_id(target_id)

    async def get_target(self, target_id: TargetId, target_type: TargetType) -> Target:
        """Get a target of a specific kind.

        Raises:
            NotFoundError: If no target of that kind has this ID
        """
        target = await self.get_target_by_id(target_id)
        if target is None or target.target_type != target_type:
            logfire.warn(
                "Target not found",
                target_id=str(target_id),
                target_type=target_type.value,
            )
            raise NotFoundError(target_type.label, str(target_id))
        return target

    async def list_for_service(
        self,
        service_id: ServiceId,
        target_type: TargetType,
        search: str | None,
        sort: TargetSortOrder,
        limit: int,
        offset: int,
    ) -> tuple[list[Target], int]:
        """List a service's targets of one kind.

        Returns:
            Page of targets and the total number of matches
        """
        with logfire.span(
            "target_service.list_for_service",
            service_id=str(service_id),
            target_type=target_type.value,
            search=search,
            sort=sort.value,
        ):
            search = search.strip() if search else None
            targets = await self.target_repository.find_for_service(
                service_id=service_id,
                target_type=target_type,
                search=search or None,
                sort=sort,
                limit=limit,
                offset=offset,
            )
            total = await self.target_repository.count_for_service(
                service_id=service_id, target_type=target_type, search=search or None
            )
            return targets, total

    async def list_by_author(
        self, author_id: UserId, target_type: TargetType, limit: int, offset: int
    ) -> tuple[list[Target], int]:
        """List targets of one kind opened by a user, newest first."""
        targets = await self.target_repository.find_by_author(
            author_id=author_id, target_type=target_type, limit=limit, offset=offset
        )
        total = await self.target_repository.count_by_author(author_id, target_type)
        return targets, total

    async def count_for_service(self, service_id: ServiceId) -> TargetCounts:
        """Count a service's feedbacks, issues and bugs."""
        counts = await self.target_repository.count_by_type_for_service(service_id)
        return TargetCounts.from_mapping(counts)

    async def counts_by_service_for_author(
        self, author_id: UserId
    ) -> dict[ServiceId, TargetCounts]:
        """Count a user's feedbacks, issues and bugs per service."""
        grouped = await self.target_repository.count_by_service_for_author(author_id)
        return {
            service_id: TargetCounts.from_mapping(counts)
            for service_id, counts in grouped.items()
        }

    async def apply_vote_delta(self, target_id: TargetId, delta: VoteDelta) -> None:
        """Atomically apply a vote transition to the target's counters."""
        with logfire.span(
            "target_service.apply_vote_delta",
            target_id=str(target_id),
            upvotes=delta.upvotes,
            downvotes=delta.downvotes,
            net_votes=delta.net_votes,
        ):
            if delta.is_zero:
                return
            await self.target_repository.apply_vote_delta(target_id, delta)

    async def update_status(
        self, target: Target, new_status: str, requester_id: ServiceId
    ) -> Target:
        """Move an issue to a new status.

        Args:
            target: Issue to update
            new_status: Requested status value
            requester_id: Service making the change

        Returns:
            Updated target

        Raises:
            ValidationError: If the status is unknown or the target has no
                service-managed status
            NotAuthorizedError: If the requester doesn't own the target
        """
        with logfire.span(
            "target_service.update_status",
            target_id=str(target.id),
            requester_id=str(requester_id),
            new_status=new_status,
        ):
            if not target.target_type.accepts_status_updates:
                raise ValidationError(
                    f"{target.target_type.label} status cannot be updated."
                )

            try:
                status = TargetStatus(new_status)
            except ValueError:
                allowed = ", ".join(s.value for s in TargetStatus)
                raise ValidationError(f"Invalid status. Allowed values: {allowed}.")

            if target.service_id != requester_id:
                logfire.warn(
                    "Status update by non-owning service",
                    target_id=str(target.id),
                    requester_id=str(requester_id),
                )
                raise NotAuthorizedError(
                    target.target_type.value, str(target.id), str(requester_id)
                )

            updated = await self.target_repository.update_status(target.id, status)
            if updated is None:
                raise NotFoundError(target.target_type.label, str(target.id))

            logfire.info(
                "Target status updated",
                target_id=str(target.id),
                status=status.value,
            )
            return updated

    async def delete_target(self, target: Target, requester_id: UserId) -> None:
        """Delete a target owned by the requester, with its votes and comments.

        Raises:
            NotAuthorizedError: If the requester didn't open the target
        """
        with logfire.span(
            "target_service.delete_target",
            target_id=str(target.id),
            requester_id=str(requester_id),
        ):
            if target.opened_by != requester_id:
                logfire.warn(
                    "Delete by non-owner",
                    target_id=str(target.id),
                    requester_id=str(requester_id),
                )
                raise NotAuthorizedError(
                    target.target_type.value, str(target.id), str(requester_id)
                )

            await self._delete_with_dependents(target.id, target.target_type)

    async def delete_all_for_service(self, service_id: ServiceId) -> int:
        """Delete every target filed against a service, with dependents.

        Returns:
            Number of targets deleted
        """
        with logfire.span(
            "target_service.delete_all_for_service", service_id=str(service_id)
        ):
            target_ids = await self.target_repository.find_ids_for_service(service_id)
            for target_id in target_ids:
                target = await self.target_repository.find_by_id(target_id)
                if target is not None:
                    await self._delete_with_dependents(target.id, target.target_type)
            return len(target_ids)

    async def _delete_with_dependents(
        self, target_id: TargetId, target_type: TargetType
    ) -> None:
        removed_comments = await self.comment_service.delete_all_for_target(
            target_type, target_id
        )
        removed_votes = await self.vote_repository.delete_by_target(
            target_type, target_id
        )
        await self.target_repository.delete(target_id)
        logfire.info(
            "Target deleted",
            target_id=str(target_id),
            target_type=target_type.value,
            removed_comments=removed_comments,
            removed_votes=removed_votes,
        )
