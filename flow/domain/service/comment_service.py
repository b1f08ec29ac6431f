"""Comment domain service: comments, replies and likes."""

from collections import defaultdict
from typing import Sequence
from uuid import uuid4

import logfire
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from flow.domain.error import (
    ConflictError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from flow.domain.model import Comment, Like, Target
from flow.domain.model.common import utcnow
from flow.domain.repository import CommentRepository, LikeRepository, TargetRepository
from flow.domain.value import (
    CommentId,
    LikeableType,
    LikeId,
    TargetId,
    TargetType,
    UserId,
)

from .base import DomainService


class LikeState(BaseModel):
    """Result of a like toggle, counted from the Like ledger."""

    has_liked: bool
    like_count: int


class CommentThread(BaseModel):
    """A top-level comment with its replies, oldest first."""

    comment: Comment
    replies: list[Comment]


class CommentService(DomainService):
    """Domain service for comment operations.

    Threads are one level deep: a comment may have replies, a reply may not.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        target_repository: TargetRepository,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            like_repository: Like repository
            target_repository: Target repository (comment counters)
        """
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.target_repository = target_repository

    @staticmethod
    def _clean_message(message: str) -> str:
        message = message.strip()
        if not message:
            raise ValidationError("Comment message cannot be empty.")
        return message

    async def add_comment(self, target: Target, author_id: UserId, message: str) -> Comment:
        """Add a top-level comment to a target.

        Args:
            target: Target being commented on
            author_id: Commenting user
            message: Comment text (required, non-blank)

        Returns:
            Created comment

        Raises:
            ValidationError: If message is blank
        """
        with logfire.span(
            "comment_service.add_comment",
            target_id=str(target.id),
            target_type=target.target_type.value,
            author_id=str(author_id),
        ):
            message = self._clean_message(message)
            now = utcnow()
            comment = Comment(
                id=CommentId(uuid4()),
                target_id=target.id,
                target_type=target.target_type,
                author_id=author_id,
                message=message,
                parent_id=None,
                like_count=0,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            await self.target_repository.adjust_comment_count(target.id, 1)

            logfire.info(
                "Comment added", comment_id=str(saved.id), target_id=str(target.id)
            )
            return saved

    async def reply(self, parent_id: CommentId, author_id: UserId, message: str) -> Comment:
        """Reply to a top-level comment.

        Raises:
            ValidationError: If message is blank or the parent is itself a reply
            NotFoundError: If the parent comment doesn't exist
        """
        with logfire.span(
            "comment_service.reply",
            parent_id=str(parent_id),
            author_id=str(author_id),
        ):
            message = self._clean_message(message)

            parent = await self.comment_repository.find_by_id(parent_id)
            if parent is None:
                logfire.warn("Reply to missing comment", parent_id=str(parent_id))
                raise NotFoundError("Comment", str(parent_id))
            if parent.is_reply:
                logfire.warn("Reply to a reply rejected", parent_id=str(parent_id))
                raise ValidationError("Replies cannot be replied to.")

            now = utcnow()
            reply = Comment(
                id=CommentId(uuid4()),
                target_id=parent.target_id,
                target_type=parent.target_type,
                author_id=author_id,
                message=message,
                parent_id=parent.id,
                like_count=0,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(reply)
            await self.target_repository.adjust_comment_count(parent.target_id, 1)

            logfire.info(
                "Reply added", reply_id=str(saved.id), parent_id=str(parent.id)
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment or reply by ID."""
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            return await self.comment_repository.find_by_id(comment_id)

    async def get_threads(self, target: Target) -> list[CommentThread]:
        """Get a target's comments, each with its replies, oldest first."""
        with logfire.span("comment_service.get_threads", target_id=str(target.id)):
            comments = await self.comment_repository.find_by_target(
                target.target_type, target.id
            )

            replies: dict[CommentId, list[Comment]] = defaultdict(list)
            top_level: list[Comment] = []
            for comment in comments:
                if comment.parent_id is None:
                    top_level.append(comment)
                else:
                    replies[comment.parent_id].append(comment)

            return [
                CommentThread(comment=comment, replies=replies.get(comment.id, []))
                for comment in top_level
            ]

    async def update_comment(
        self, comment_id: CommentId, author_id: UserId, message: str
    ) -> Comment:
        """Edit a comment or reply's message.

        Raises:
            ValidationError: If message is blank
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the requester isn't the author
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            author_id=str(author_id),
        ):
            message = self._clean_message(message)
            comment = await self._get_owned(comment_id, author_id)

            updated = await self.comment_repository.update_message(comment.id, message)
            if updated is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info("Comment updated", comment_id=str(comment_id))
            return updated

    async def delete_comment(self, comment_id: CommentId, author_id: UserId) -> int:
        """Delete a comment or reply; a comment takes its replies and likes along.

        Returns:
            Number of comment records removed

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If the requester isn't the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            author_id=str(author_id),
        ):
            comment = await self._get_owned(comment_id, author_id)

            doomed = [comment.id]
            if not comment.is_reply:
                replies = await self.comment_repository.find_replies(comment.id)
                doomed.extend(reply.id for reply in replies)

            await self.like_repository.delete_by_likeables(doomed)
            removed = await self.comment_repository.delete_many(doomed)
            await self.target_repository.adjust_comment_count(comment.target_id, -removed)

            logfire.info(
                "Comment deleted", comment_id=str(comment_id), removed=removed
            )
            return removed

    async def delete_all_for_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> int:
        """Delete every comment, reply and like on a target.

        Returns:
            Number of comment records removed
        """
        comments = await self.comment_repository.find_by_target(target_type, target_id)
        if not comments:
            return 0
        ids = [comment.id for comment in comments]
        await self.like_repository.delete_by_likeables(ids)
        return await self.comment_repository.delete_many(ids)

    async def toggle_like(
        self, comment_id: CommentId, likeable_type: LikeableType, user_id: UserId
    ) -> LikeState:
        """Like a comment/reply, or remove the like if the user already has one.

        The returned like count is recounted from the ledger and written back
        to the comment's cached like_count.

        Args:
            comment_id: Comment or reply ID
            likeable_type: Which kind the caller addressed
            user_id: Liking user

        Returns:
            Whether the user now likes it, and the current like count

        Raises:
            NotFoundError: If no comment of that kind exists
            ConflictError: If a concurrent toggle inserted the same like
        """
        with logfire.span(
            "comment_service.toggle_like",
            comment_id=str(comment_id),
            likeable_type=likeable_type.value,
            user_id=str(user_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None or comment.likeable_type != likeable_type:
                raise NotFoundError(likeable_type.value.capitalize(), str(comment_id))

            existing = await self.like_repository.find_by_user_and_likeable(
                user_id, likeable_type, comment_id
            )

            if existing:
                await self.like_repository.delete(existing.id)
                has_liked = False
            else:
                like = Like(
                    id=LikeId(uuid4()),
                    user_id=user_id,
                    likeable_type=likeable_type,
                    likeable_id=comment_id,
                    created_at=utcnow(),
                )
                try:
                    await self.like_repository.save(like)
                except IntegrityError:
                    logfire.warn(
                        "Duplicate like attempt",
                        comment_id=str(comment_id),
                        user_id=str(user_id),
                    )
                    raise ConflictError("Like is already being processed.")
                has_liked = True

            like_count = await self.like_repository.count_by_likeable(
                likeable_type, comment_id
            )
            await self.comment_repository.set_like_count(comment_id, like_count)

            logfire.info(
                "Like toggled",
                comment_id=str(comment_id),
                has_liked=has_liked,
                like_count=like_count,
            )
            return LikeState(has_liked=has_liked, like_count=like_count)

    async def get_liked_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> set[CommentId]:
        """Which of the given comments/replies the user has liked."""
        if not comment_ids:
            return set()
        return await self.like_repository.find_liked_ids(user_id, comment_ids)

    async def _get_owned(self, comment_id: CommentId, author_id: UserId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        if comment.author_id != author_id:
            logfire.warn(
                "Comment change by non-author",
                comment_id=str(comment_id),
                requester_id=str(author_id),
            )
            raise NotAuthorizedError("comment", str(comment_id), str(author_id))
        return comment
