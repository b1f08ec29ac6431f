"""Vote repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from flow.domain.model import ServiceVote, Vote
from flow.domain.value import ServiceId, TargetId, TargetType, UserId, VoteId, VoteType


class VoteRepository(ABC):
    """Repository for the feedback/issue vote ledger.

    Switch and retraction are conditional on the direction the caller read,
    so two racing calls from the same voter cannot both apply a delta.
    """

    @abstractmethod
    async def find_by_voter_and_target(
        self,
        voter_id: UserId,
        target_type: TargetType,
        target_id: TargetId,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target.

        Args:
            voter_id: The voter's ID
            target_type: Feedback or issue
            target_id: ID of the target

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a new vote.

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the voter already has a vote on this target
        """
        pass

    @abstractmethod
    async def switch_vote_type(
        self, vote_id: VoteId, expected: VoteType, new: VoteType
    ) -> Optional[Vote]:
        """Change a vote's direction if it still holds ``expected``.

        Returns:
            The updated vote, or None if the vote is gone or was changed
        """
        pass

    @abstractmethod
    async def delete_if_matches(self, vote_id: VoteId, expected: VoteType) -> bool:
        """Delete a vote if it still holds ``expected``.

        Returns:
            True if a vote was deleted, False otherwise
        """
        pass

    @abstractmethod
    async def delete_by_target(self, target_type: TargetType, target_id: TargetId) -> int:
        """Delete every vote on a target.

        Returns:
            Number of votes deleted
        """
        pass


class ServiceVoteRepository(ABC):
    """Repository for the presence-only service upvote ledger."""

    @abstractmethod
    async def find_by_voter_and_service(
        self, voter_id: UserId, service_id: ServiceId
    ) -> Optional[ServiceVote]:
        """Find a user's upvote on a service."""
        pass

    @abstractmethod
    async def save(self, vote: ServiceVote) -> ServiceVote:
        """Save a new service upvote.

        Raises:
            IntegrityError: If the voter already upvoted this service
        """
        pass

    @abstractmethod
    async def delete_by_voter_and_service(
        self, voter_id: UserId, service_id: ServiceId
    ) -> bool:
        """Delete a user's upvote on a service.

        Returns:
            True if an upvote was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_service(self, service_id: ServiceId) -> int:
        """Delete every upvote on a service. Returns the number deleted."""
        pass

    @abstractmethod
    async def find_created_since(
        self, service_id: ServiceId, since: datetime
    ) -> list[datetime]:
        """List creation times of a service's upvotes at or after ``since``."""
        pass
