"""Response models shared by several use cases."""

import math
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from flow.config import PaginationSettings
from flow.domain.model import Comment, Service, Target, TargetCounts, User
from flow.domain.value import TargetStatus, TargetType

T = TypeVar("T")


class CamelModel(BaseModel):
    """Model serialized with camelCase keys; accepts either case on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserInfo(CamelModel):
    """Public user fields (never the password hash or refresh token)."""

    id: str
    username: str
    fullname: str
    email: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            username=user.username.root,
            fullname=user.fullname,
            email=str(user.email),
            created_at=user.created_at,
        )


class ServiceInfo(CamelModel):
    """Public service fields."""

    id: str
    name: str
    email: str
    description: str
    service_link: str | None
    logo_url: str | None
    upvotes: int
    created_at: datetime

    @classmethod
    def from_service(cls, service: Service) -> "ServiceInfo":
        return cls(
            id=str(service.id),
            name=service.name,
            email=str(service.email),
            description=service.description,
            service_link=service.service_link,
            logo_url=service.logo_url,
            upvotes=service.upvotes,
            created_at=service.created_at,
        )


class CountsInfo(CamelModel):
    """Feedback, issue and bug counts."""

    feedbacks: int
    issues: int
    bugs: int
    total: int

    @classmethod
    def from_counts(cls, counts: TargetCounts) -> "CountsInfo":
        return cls(
            feedbacks=counts.feedbacks,
            issues=counts.issues,
            bugs=counts.bugs,
            total=counts.total,
        )


class TargetInfo(CamelModel):
    """Target fields as listed; detail views add comments and vote state."""

    id: str
    target_type: TargetType
    service_id: str
    opened_by: str
    title: str
    description: str
    status: TargetStatus | None
    upvotes: int
    downvotes: int
    net_votes: int
    comment_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_target(cls, target: Target) -> "TargetInfo":
        return cls(
            id=str(target.id),
            target_type=target.target_type,
            service_id=str(target.service_id),
            opened_by=str(target.opened_by),
            title=target.title,
            description=target.description,
            status=target.status,
            upvotes=target.upvotes,
            downvotes=target.downvotes,
            net_votes=target.net_votes,
            comment_count=target.comment_count,
            created_at=target.created_at,
            updated_at=target.updated_at,
        )


class Page(CamelModel, Generic[T]):
    """One page of a paginated listing."""

    items: list[T]
    total: int
    total_pages: int
    current_page: int
    limit: int

    @classmethod
    def build(cls, items: list[T], total: int, page: int, limit: int) -> "Page[T]":
        return cls(
            items=items,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
            current_page=page,
            limit=limit,
        )


def page_offset(page: int, limit: int) -> int:
    """Offset of a 1-based page."""
    return (max(page, 1) - 1) * limit


def resolve_limit(limit: int | None, settings: PaginationSettings) -> int:
    """Page size: the configured default when unset, capped at the maximum."""
    if limit is None or limit < 1:
        return settings.default_limit
    return min(limit, settings.max_limit)


class CommentInfo(CamelModel):
    """Comment or reply as shown to clients."""

    id: str
    target_id: str
    target_type: TargetType
    author_id: str
    author_name: str | None = None
    message: str
    parent_id: str | None
    like_count: int
    has_liked: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(
        cls,
        comment: Comment,
        author_name: str | None = None,
        has_liked: bool = False,
    ) -> "CommentInfo":
        return cls(
            id=str(comment.id),
            target_id=str(comment.target_id),
            target_type=comment.target_type,
            author_id=str(comment.author_id),
            author_name=author_name,
            message=comment.message,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            like_count=comment.like_count,
            has_liked=has_liked,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
