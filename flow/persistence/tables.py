"""SQLAlchemy table definitions for Service Flow.

These tables match the schema defined in Alembic migrations.
Row ids are uuid4 values generated by the application.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

target_kind = postgresql.ENUM(
    "feedback", "issue", "bug", name="target_kind", create_type=False
)
target_status = postgresql.ENUM(
    "open", "in-progress", "resolved", "closed", name="target_status", create_type=False
)
vote_type = postgresql.ENUM("upvote", "downvote", name="vote_type", create_type=False)
likeable_type = postgresql.ENUM(
    "comment", "reply", name="likeable_type", create_type=False
)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("username", String(30), nullable=False, unique=True),  # Lowercase
    Column("email", String(255), nullable=False, unique=True),
    Column("fullname", String(100), nullable=False),
    Column("password_hash", String(255), nullable=False),
    Column("refresh_token", Text, nullable=True),  # Single active refresh token
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# SERVICES TABLE
# ============================================================================
services_table = Table(
    "services",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("description", Text, nullable=False),
    Column("service_link", Text, nullable=True),
    Column("logo_url", Text, nullable=True),
    Column("password_hash", String(255), nullable=False),
    Column("refresh_token", Text, nullable=True),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("upvotes >= 0", name="service_upvotes_non_negative"),
)

Index("idx_services_upvotes", services_table.c.upvotes.desc())
Index("idx_services_created_at", services_table.c.created_at.desc())

# ============================================================================
# TARGETS TABLE (feedback, issues and bugs)
# ============================================================================
targets_table = Table(
    "targets",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("kind", target_kind, nullable=False),
    Column(
        "service_id",
        UUID,
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "opened_by", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("status", target_status, nullable=True),  # NULL for feedback
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("net_votes", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("upvotes >= 0", name="target_upvotes_non_negative"),
    CheckConstraint("downvotes >= 0", name="target_downvotes_non_negative"),
    CheckConstraint("comment_count >= 0", name="target_comment_count_non_negative"),
    CheckConstraint(
        "(kind = 'feedback') = (status IS NULL)", name="status_matches_kind"
    ),
)

Index("idx_targets_service_kind", targets_table.c.service_id, targets_table.c.kind)
Index("idx_targets_opened_by", targets_table.c.opened_by)
Index("idx_targets_created_at", targets_table.c.created_at.desc())

# ============================================================================
# VOTES TABLE (feedback and issue votes)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "voter_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("target_type", target_kind, nullable=False),
    Column("target_id", UUID, nullable=False),  # Removed by the domain cascade
    Column("vote_type", vote_type, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("voter_id", "target_type", "target_id", name="unique_vote"),
)

Index("idx_votes_target", votes_table.c.target_type, votes_table.c.target_id)

# ============================================================================
# SERVICE VOTES TABLE
# ============================================================================
service_votes_table = Table(
    "service_votes",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "voter_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "service_id",
        UUID,
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("voter_id", "service_id", name="unique_service_vote"),
)

Index(
    "idx_service_votes_service_created",
    service_votes_table.c.service_id,
    service_votes_table.c.created_at,
)

# ============================================================================
# COMMENTS TABLE (comments and one level of replies)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "target_id", UUID, ForeignKey("targets.id", ondelete="CASCADE"), nullable=False
    ),
    Column("target_type", target_kind, nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("message", Text, nullable=False),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("depth IN (0, 1)", name="depth_is_zero_or_one"),
    CheckConstraint("(parent_id IS NULL) = (depth = 0)", name="depth_matches_parent"),
    CheckConstraint("like_count >= 0", name="like_count_non_negative"),
)

Index("idx_comments_target", comments_table.c.target_type, comments_table.c.target_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# LIKES TABLE
# ============================================================================
likes_table = Table(
    "likes",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("likeable_type", likeable_type, nullable=False),
    Column(
        "likeable_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "likeable_type", "likeable_id", name="unique_like"),
)

Index("idx_likes_likeable", likes_table.c.likeable_type, likes_table.c.likeable_id)
