"""create forum tables

Revision ID: a3c91f0e5b21
Revises:
Create Date: 2026-10-19 10:12:44.318207

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a3c91f0e5b21"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), unique=True, nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="member"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_members_id", "members", ["id"])

    op.create_table(
        "forum_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_forum_categories_id", "forum_categories", ["id"])
    op.create_index(
        "ix_forum_categories_name", "forum_categories", ["name"], unique=True
    )

    op.create_table(
        "forum_posts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("forum_categories.id"),
            nullable=False,
        ),
        sa.Column("author_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False),
        sa.Column(
            "quoted_post_id",
            sa.Integer(),
            sa.ForeignKey("forum_posts.id"),
            nullable=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("sticky", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("locked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("state", sa.String(20), nullable=False, server_default="active"),
        sa.Column("removed_by", sa.String(20), nullable=True),
        sa.Column("edited_by_title", sa.String(20), nullable=True),
        sa.Column("edited_by_content", sa.String(20), nullable=True),
        sa.Column("views_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("report_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "(state = 'removed' AND removed_by IS NOT NULL)"
            " OR (state <> 'removed' AND removed_by IS NULL)",
            name="ck_forum_posts_removed_by_matches_state",
        ),
        sa.CheckConstraint(
            "NOT locked OR edited_by_title = 'ADMIN' OR edited_by_content = 'ADMIN'",
            name="ck_forum_posts_locked_requires_admin_edit",
        ),
        sa.CheckConstraint(
            "views_count >= 0 AND likes_count >= 0 AND report_count >= 0",
            name="ck_forum_posts_counters_non_negative",
        ),
    )
    op.create_index("ix_forum_posts_id", "forum_posts", ["id"])
    op.create_index("ix_forum_posts_category_id", "forum_posts", ["category_id"])
    op.create_index("ix_forum_posts_author_id", "forum_posts", ["author_id"])
    op.create_index("ix_forum_posts_quoted_post_id", "forum_posts", ["quoted_post_id"])
    op.create_index("ix_forum_posts_state", "forum_posts", ["state"])

    op.create_table(
        "forum_post_files",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("post_id", sa.Integer(), sa.ForeignKey("forum_posts.id"), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_forum_post_files_id", "forum_post_files", ["id"])
    op.create_index("ix_forum_post_files_post_id", "forum_post_files", ["post_id"])

    op.create_table(
        "forum_post_reports",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("post_id", sa.Integer(), sa.ForeignKey("forum_posts.id"), nullable=False),
        sa.Column(
            "reporter_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False
        ),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_forum_post_reports_id", "forum_post_reports", ["id"])
    op.create_index("ix_forum_post_reports_post_id", "forum_post_reports", ["post_id"])
    op.create_index(
        "ix_forum_post_reports_reporter_id", "forum_post_reports", ["reporter_id"]
    )


def downgrade() -> None:
    op.drop_table("forum_post_reports")
    op.drop_table("forum_post_files")
    op.drop_table("forum_posts")
    op.drop_table("forum_categories")
    op.drop_table("members")
