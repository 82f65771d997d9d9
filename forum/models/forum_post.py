# forum/models/forum_post.py
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from forum.core.database import Base
from forum.services.lifecycle import ADMIN_TAG, PostState


class ForumPost(Base):
    __tablename__ = "forum_posts"
    __table_args__ = (
        CheckConstraint(
            "(state = 'removed' AND removed_by IS NOT NULL)"
            " OR (state <> 'removed' AND removed_by IS NULL)",
            name="ck_forum_posts_removed_by_matches_state",
        ),
        CheckConstraint(
            "NOT locked OR edited_by_title = 'ADMIN' OR edited_by_content = 'ADMIN'",
            name="ck_forum_posts_locked_requires_admin_edit",
        ),
        CheckConstraint(
            "views_count >= 0 AND likes_count >= 0 AND report_count >= 0",
            name="ck_forum_posts_counters_non_negative",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    category_id = Column(
        Integer, ForeignKey("forum_categories.id"), nullable=False, index=True
    )
    author_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    quoted_post_id = Column(
        Integer, ForeignKey("forum_posts.id"), nullable=True, index=True
    )  # Set on posts created by quoting another post

    # Content
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)

    # Post Settings
    sticky = Column(Boolean, default=False, nullable=False)
    locked = Column(Boolean, default=False, nullable=False)  # True after an admin edit

    # Lifecycle: active, hidden, removed
    state = Column(
        String(20), default=PostState.ACTIVE.value, nullable=False, index=True
    )

    # Audit tags ("OP" / "ADMIN")
    removed_by = Column(String(20), nullable=True)
    edited_by_title = Column(String(20), nullable=True)
    edited_by_content = Column(String(20), nullable=True)

    # Statistics
    views_count = Column(Integer, default=0, nullable=False)
    likes_count = Column(Integer, default=0, nullable=False)
    report_count = Column(Integer, default=0, nullable=False)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @property
    def post_state(self) -> PostState:
        return PostState(self.state)

    @property
    def hidden(self) -> bool:
        return self.state == PostState.HIDDEN.value

    @property
    def removed(self) -> bool:
        return self.state == PostState.REMOVED.value

    @property
    def title_edited_by_admin(self) -> bool:
        return self.edited_by_title == ADMIN_TAG

    @property
    def content_edited_by_admin(self) -> bool:
        return self.edited_by_content == ADMIN_TAG

    @property
    def file_urls(self) -> list:
        return [f.file_url for f in self.files]

    @property
    def file_url(self):
        """Primary attachment URL, or None when the post has no files."""
        return self.files[0].file_url if self.files else None

    @property
    def author_name(self) -> str:
        return self.author.name if self.author is not None else "Unknown"

    def __repr__(self):
        return f"<ForumPost(id={self.id}, category_id={self.category_id}, state='{self.state}')>"
