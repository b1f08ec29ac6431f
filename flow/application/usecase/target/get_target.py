"""Get target use case."""

from uuid import UUID

from pydantic import BaseModel

from flow.application.usecase.common import CamelModel, CommentInfo, TargetInfo
from flow.domain.service import CommentService, TargetService, UserService, VoteService
from flow.domain.value import TargetId, TargetType, UserId, VoteType


class GetTargetRequest(BaseModel):
    """Get target request."""

    target_type: TargetType
    target_id: str  # UUID string
    viewer_id: str | None = None  # User ID if the caller is a logged-in user


class ThreadInfo(CommentInfo):
    """Top-level comment with its replies."""

    replies: list[CommentInfo]


class GetTargetResponse(CamelModel):
    """Target detail view."""

    target: TargetInfo
    opened_by_name: str | None
    comments: list[ThreadInfo]
    user_vote: VoteType | None = None


class GetTargetUseCase:
    """Use case for a target's detail page."""

    def __init__(
        self,
        target_service: TargetService,
        comment_service: CommentService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> None:
        """Initialize get target use case.

        Args:
            target_service: Target domain service
            comment_service: Comment domain service
            vote_service: Vote domain service
            user_service: User domain service (author names)
        """
        self.target_service = target_service
        self.comment_service = comment_service
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: GetTargetRequest) -> GetTargetResponse:
        """Execute get target flow.

        Steps:
        1. Load the target (kind must match)
        2. Load its comment threads and author names in one batch
        3. For a logged-in user, add their vote and which comments they liked

        Raises:
            NotFoundError: If no target of that kind exists
        """
        target = await self.target_service.get_target(
            TargetId(UUID(request.target_id)), request.target_type
        )
        threads = await self.comment_service.get_threads(target)

        author_ids = [target.opened_by]
        comment_ids = []
        for thread in threads:
            for comment in (thread.comment, *thread.replies):
                author_ids.append(comment.author_id)
                comment_ids.append(comment.id)
        authors = await self.user_service.get_users_by_ids(author_ids)

        user_vote = None
        liked = set()
        if request.viewer_id:
            viewer_id = UserId(UUID(request.viewer_id))
            liked = await self.comment_service.get_liked_ids(viewer_id, comment_ids)
            if target.target_type.is_votable:
                user_vote = await self.vote_service.get_vote(
                    viewer_id, target.id, target.target_type
                )

        def name_of(user_id: UserId) -> str | None:
            author = authors.get(user_id)
            return author.username.root if author else None

        comments = [
            ThreadInfo(
                **CommentInfo.from_comment(
                    thread.comment,
                    author_name=name_of(thread.comment.author_id),
                    has_liked=thread.comment.id in liked,
                ).model_dump(),
                replies=[
                    CommentInfo.from_comment(
                        reply,
                        author_name=name_of(reply.author_id),
                        has_liked=reply.id in liked,
                    )
                    for reply in thread.replies
                ],
            )
            for thread in threads
        ]

        return GetTargetResponse(
            target=TargetInfo.from_target(target),
            opened_by_name=name_of(target.opened_by),
            comments=comments,
            user_vote=user_vote,
        )
