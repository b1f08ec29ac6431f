"""initial_schema

Create the schema for Service Flow:
- Users and services (the two principal kinds)
- Targets (feedback, issues and bugs in one table)
- Votes (three-state feedback/issue votes) and service votes (presence only)
- Comments (one level of replies) and likes

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-17 09:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_TYPES = {
    "target_kind": ("feedback", "issue", "bug"),
    "target_status": ("open", "in-progress", "resolved", "closed"),
    "vote_type": ("upvote", "downvote"),
    "likeable_type": ("comment", "reply"),
}


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _enum(name: str) -> postgresql.ENUM:
    # Types are created up front in upgrade()
    return postgresql.ENUM(*ENUM_TYPES[name], name=name, create_type=False)


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("fullname", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="users_username_key"),
        sa.UniqueConstraint("email", name="users_email_key"),
    )

    # ========================================================================
    # SERVICES
    # ========================================================================
    op.create_table(
        "services",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("service_link", sa.Text(), nullable=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="services_email_key"),
        sa.CheckConstraint("upvotes >= 0", name="service_upvotes_non_negative"),
    )
    op.create_index(
        "idx_services_upvotes", "services", [sa.text("upvotes DESC")]
    )
    op.create_index(
        "idx_services_created_at", "services", [sa.text("created_at DESC")]
    )

    # ========================================================================
    # TARGETS
    # ========================================================================
    op.create_table(
        "targets",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("kind", _enum("target_kind"), nullable=False),
        sa.Column("service_id", sa.UUID(), nullable=False),
        sa.Column("opened_by", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", _enum("target_status"), nullable=True),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("net_votes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["service_id"], ["services.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["opened_by"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint("upvotes >= 0", name="target_upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="target_downvotes_non_negative"),
        sa.CheckConstraint(
            "comment_count >= 0", name="target_comment_count_non_negative"
        ),
        sa.CheckConstraint(
            "(kind = 'feedback') = (status IS NULL)", name="status_matches_kind"
        ),
    )
    op.create_index("idx_targets_service_kind", "targets", ["service_id", "kind"])
    op.create_index("idx_targets_opened_by", "targets", ["opened_by"])
    op.create_index("idx_targets_created_at", "targets", [sa.text("created_at DESC")])

    # ========================================================================
    # VOTES
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("voter_id", sa.UUID(), nullable=False),
        sa.Column("target_type", _enum("target_kind"), nullable=False),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column("vote_type", _enum("vote_type"), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["voter_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "voter_id", "target_type", "target_id", name="unique_vote"
        ),
    )
    op.create_index("idx_votes_target", "votes", ["target_type", "target_id"])

    # ========================================================================
    # SERVICE VOTES
    # ========================================================================
    op.create_table(
        "service_votes",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("voter_id", sa.UUID(), nullable=False),
        sa.Column("service_id", sa.UUID(), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["voter_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["service_id"], ["services.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("voter_id", "service_id", name="unique_service_vote"),
    )
    op.create_index(
        "idx_service_votes_service_created",
        "service_votes",
        ["service_id", "created_at"],
    )

    # ========================================================================
    # COMMENTS
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column("target_type", _enum("target_kind"), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["target_id"], ["targets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.CheckConstraint("depth IN (0, 1)", name="depth_is_zero_or_one"),
        sa.CheckConstraint(
            "(parent_id IS NULL) = (depth = 0)", name="depth_matches_parent"
        ),
        sa.CheckConstraint("like_count >= 0", name="like_count_non_negative"),
    )
    op.create_index("idx_comments_target", "comments", ["target_type", "target_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])

    # ========================================================================
    # LIKES
    # ========================================================================
    op.create_table(
        "likes",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("likeable_type", _enum("likeable_type"), nullable=False),
        sa.Column("likeable_id", sa.UUID(), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["likeable_id"], ["comments.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "user_id", "likeable_type", "likeable_id", name="unique_like"
        ),
    )
    op.create_index("idx_likes_likeable", "likes", ["likeable_type", "likeable_id"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("likes")
    op.drop_table("comments")
    op.drop_table("service_votes")
    op.drop_table("votes")
    op.drop_table("targets")
    op.drop_table("services")
    op.drop_table("users")

    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
