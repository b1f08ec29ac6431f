"""Vote domain service.

Feedback/issue votes form a three-state ledger per (voter, target):

    none --d--> d         insert row, counters += cast delta
    d    --d--> none      delete row, counters -= cast delta
    d    --e--> e         update row in place, net_votes moves by 2

Service upvotes are presence-only: a second upvote conflicts and removing a
missing upvote is not found.
"""

from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from flow.domain.error import ConflictError, NotFoundError, ValidationError
from flow.domain.model import Service, ServiceVote, Vote
from flow.domain.model.common import utcnow
from flow.domain.repository import ServiceVoteRepository, VoteRepository
from flow.domain.value import (
    ServiceId,
    ServiceVoteId,
    TargetId,
    TargetType,
    UserId,
    VoteDelta,
    VoteId,
    VoteType,
)

from .base import DomainService
from .service_account_service import ServiceAccountService
from .target_service import TargetService


class VoteService(DomainService):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        service_vote_repository: ServiceVoteRepository,
        target_service: TargetService,
        service_account_service: ServiceAccountService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            service_vote_repository: Service vote repository
            target_service: Target domain service
            service_account_service: Service account domain service
        """
        self.vote_repository = vote_repository
        self.service_vote_repository = service_vote_repository
        self.target_service = target_service
        self.service_account_service = service_account_service

    async def cast_vote(
        self,
        voter_id: UserId,
        target_id: TargetId,
        target_type: TargetType,
        direction: VoteType,
    ) -> VoteType | None:
        """Cast, retract or switch a vote.

        Args:
            voter_id: Voting user
            target_id: Feedback or issue ID
            target_type: Feedback or issue
            direction: Direction the user submitted

        Returns:
            The voter's direction after the call, or None if retracted

        Raises:
            ValidationError: If the target kind can't be voted on
            NotFoundError: If the target doesn't exist
            ConflictError: If a concurrent vote by the same voter won the race
        """
        with logfire.span(
            "vote_service.cast_vote",
            voter_id=str(voter_id),
            target_id=str(target_id),
            target_type=target_type.value,
            direction=direction.value,
        ):
            if not target_type.is_votable:
                raise ValidationError(f"{target_type.label} cannot be voted on.")

            await self.target_service.get_target(target_id, target_type)

            existing = await self.vote_repository.find_by_voter_and_target(
                voter_id, target_type, target_id
            )

            if existing is None:
                vote = Vote(
                    id=VoteId(uuid4()),
                    voter_id=voter_id,
                    target_id=target_id,
                    target_type=target_type,
                    vote_type=direction,
                    created_at=utcnow(),
                    updated_at=utcnow(),
                )
                try:
                    await self.vote_repository.save(vote)
                except IntegrityError:
                    logfire.warn(
                        "Concurrent vote insert",
                        voter_id=str(voter_id),
                        target_id=str(target_id),
                    )
                    raise ConflictError("Vote is already being processed.")

                await self.target_service.apply_vote_delta(
                    target_id, VoteDelta.between(None, direction)
                )
                logfire.info("Vote cast", vote_id=str(vote.id), direction=direction.value)
                return direction

            if existing.vote_type == direction:
                removed = await self.vote_repository.delete_if_matches(
                    existing.id, direction
                )
                if not removed:
                    raise ConflictError("Vote is already being processed.")

                await self.target_service.apply_vote_delta(
                    target_id, VoteDelta.between(direction, None)
                )
                logfire.info("Vote retracted", vote_id=str(existing.id))
                return None

            switched = await self.vote_repository.switch_vote_type(
                existing.id, existing.vote_type, direction
            )
            if switched is None:
                raise ConflictError("Vote is already being processed.")

            await self.target_service.apply_vote_delta(
                target_id, VoteDelta.between(existing.vote_type, direction)
            )
            logfire.info(
                "Vote switched",
                vote_id=str(existing.id),
                previous=existing.vote_type.value,
                direction=direction.value,
            )
            return direction

    async def get_vote(
        self, voter_id: UserId, target_id: TargetId, target_type: TargetType
    ) -> VoteType | None:
        """Get the direction a user currently holds on a target.

        Raises:
            NotFoundError: If the target doesn't exist
        """
        with logfire.span(
            "vote_service.get_vote",
            voter_id=str(voter_id),
            target_id=str(target_id),
        ):
            await self.target_service.get_target(target_id, target_type)
            vote = await self.vote_repository.find_by_voter_and_target(
                voter_id, target_type, target_id
            )
            return vote.vote_type if vote else None

    async def upvote_service(self, voter_id: UserId, service_id: ServiceId) -> Service:
        """Upvote a service.

        Returns:
            The service with its updated upvote count

        Raises:
            NotFoundError: If the service doesn't exist
            ConflictError: If the user already upvoted it
        """
        with logfire.span(
            "vote_service.upvote_service",
            voter_id=str(voter_id),
            service_id=str(service_id),
        ):
            service = await self._require_service(service_id)

            existing = await self.service_vote_repository.find_by_voter_and_service(
                voter_id, service_id
            )
            if existing:
                logfire.warn(
                    "Duplicate service upvote",
                    voter_id=str(voter_id),
                    service_id=str(service_id),
                )
                raise ConflictError("You have already upvoted this service.")

            vote = ServiceVote(
                id=ServiceVoteId(uuid4()),
                voter_id=voter_id,
                service_id=service_id,
                created_at=utcnow(),
            )
            try:
                await self.service_vote_repository.save(vote)
            except IntegrityError:
                raise ConflictError("You have already upvoted this service.")

            await self.service_account_service.increment_upvotes(service_id)

            logfire.info("Service upvoted", service_id=str(service_id))
            return await self._require_service(service.id)

    async def remove_service_upvote(
        self, voter_id: UserId, service_id: ServiceId
    ) -> Service:
        """Remove a user's upvote from a service.

        Returns:
            The service with its updated upvote count

        Raises:
            NotFoundError: If the service or the upvote doesn't exist
        """
        with logfire.span(
            "vote_service.remove_service_upvote",
            voter_id=str(voter_id),
            service_id=str(service_id),
        ):
            await self._require_service(service_id)

            deleted = await self.service_vote_repository.delete_by_voter_and_service(
                voter_id, service_id
            )
            if not deleted:
                raise NotFoundError("Upvote", str(service_id))

            await self.service_account_service.decrement_upvotes(service_id)

            logfire.info("Service upvote removed", service_id=str(service_id))
            return await self._require_service(service_id)

    async def has_upvoted_service(self, voter_id: UserId, service_id: ServiceId) -> bool:
        """Whether a user currently upvotes a service."""
        vote = await self.service_vote_repository.find_by_voter_and_service(
            voter_id, service_id
        )
        return vote is not None

    async def delete_service_votes(self, service_id: ServiceId) -> int:
        """Remove every upvote a service received (service deletion cascade)."""
        removed = await self.service_vote_repository.delete_by_service(service_id)
        logfire.info(
            "Service votes deleted", service_id=str(service_id), removed=removed
        )
        return removed

    async def _require_service(self, service_id: ServiceId) -> Service:
        service = await self.service_account_service.get_service_by_id(service_id)
        if service is None:
            raise NotFoundError("Service", str(service_id))
        return service
