# forum/models/forum_post_report.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.sql import func

from forum.core.database import Base


class ForumPostReport(Base):
    __tablename__ = "forum_post_reports"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    post_id = Column(Integer, ForeignKey("forum_posts.id"), nullable=False, index=True)
    reporter_id = Column(
        Integer, ForeignKey("members.id"), nullable=False, index=True
    )  # Member who reported

    # Report Details
    reason = Column(Text, nullable=True)  # Why the post was reported

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self):
        return f"<ForumPostReport(id={self.id}, post_id={self.post_id}, reporter_id={self.reporter_id})>"
