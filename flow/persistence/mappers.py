"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's imperative mapping.
"""

from typing import Any, Dict

from flow.domain.model import Comment, Like, Service, ServiceVote, Target, User, Vote
from flow.domain.value import (
    CommentId,
    Email,
    LikeableType,
    LikeId,
    ServiceId,
    ServiceVoteId,
    TargetId,
    TargetStatus,
    TargetType,
    UserId,
    Username,
    VoteId,
    VoteType,
)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(row["id"]),
        username=Username(row["username"]),
        email=Email(row["email"]),
        fullname=row["fullname"],
        password_hash=row["password_hash"],
        refresh_token=row.get("refresh_token"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_service(row: Dict[str, Any]) -> Service:
    """Convert database row to Service domain model."""
    return Service(
        id=ServiceId(row["id"]),
        name=row["name"],
        email=Email(row["email"]),
        description=row["description"],
        service_link=row.get("service_link"),
        logo_url=row.get("logo_url"),
        password_hash=row["password_hash"],
        refresh_token=row.get("refresh_token"),
        upvotes=row["upvotes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def service_to_dict(service: Service) -> Dict[str, Any]:
    """Convert Service domain model to database dict."""
    return service.model_dump()


def row_to_target(row: Dict[str, Any]) -> Target:
    """Convert database row to Target domain model.

    The table names the discriminant ``kind``; the model calls it
    ``target_type``.
    """
    return Target(
        id=TargetId(row["id"]),
        target_type=TargetType(row["kind"]),
        service_id=ServiceId(row["service_id"]),
        opened_by=UserId(row["opened_by"]),
        title=row["title"],
        description=row["description"],
        status=TargetStatus(row["status"]) if row.get("status") else None,
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        net_votes=row["net_votes"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def target_to_dict(target: Target) -> Dict[str, Any]:
    """Convert Target domain model to database dict."""
    return {
        "id": target.id,
        "kind": target.target_type.value,
        "service_id": target.service_id,
        "opened_by": target.opened_by,
        "title": target.title,
        "description": target.description,
        "status": target.status.value if target.status else None,
        "upvotes": target.upvotes,
        "downvotes": target.downvotes,
        "net_votes": target.net_votes,
        "comment_count": target.comment_count,
        "created_at": target.created_at,
        "updated_at": target.updated_at,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(row["id"]),
        voter_id=UserId(row["voter_id"]),
        target_id=TargetId(row["target_id"]),
        target_type=TargetType(row["target_type"]),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "voter_id": vote.voter_id,
        "target_id": vote.target_id,
        "target_type": vote.target_type.value,
        "vote_type": vote.vote_type.value,
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }


def row_to_service_vote(row: Dict[str, Any]) -> ServiceVote:
    """Convert database row to ServiceVote domain model."""
    return ServiceVote(
        id=ServiceVoteId(row["id"]),
        voter_id=UserId(row["voter_id"]),
        service_id=ServiceId(row["service_id"]),
        created_at=row["created_at"],
    )


def service_vote_to_dict(vote: ServiceVote) -> Dict[str, Any]:
    """Convert ServiceVote domain model to database dict."""
    return vote.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(row["id"]),
        target_id=TargetId(row["target_id"]),
        target_type=TargetType(row["target_type"]),
        author_id=UserId(row["author_id"]),
        message=row["message"],
        parent_id=CommentId(row["parent_id"]) if row.get("parent_id") else None,
        like_count=row["like_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict (depth derived from parent)."""
    return {
        "id": comment.id,
        "target_id": comment.target_id,
        "target_type": comment.target_type.value,
        "author_id": comment.author_id,
        "parent_id": comment.parent_id,
        "depth": 1 if comment.is_reply else 0,
        "message": comment.message,
        "like_count": comment.like_count,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def row_to_like(row: Dict[str, Any]) -> Like:
    """Convert database row to Like domain model."""
    return Like(
        id=LikeId(row["id"]),
        user_id=UserId(row["user_id"]),
        likeable_type=LikeableType(row["likeable_type"]),
        likeable_id=CommentId(row["likeable_id"]),
        created_at=row["created_at"],
    )


def like_to_dict(like: Like) -> Dict[str, Any]:
    """Convert Like domain model to database dict."""
    return {
        "id": like.id,
        "user_id": like.user_id,
        "likeable_type": like.likeable_type.value,
        "likeable_id": like.likeable_id,
        "created_at": like.created_at,
    }
