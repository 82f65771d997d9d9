# forum/models/relations.py

from sqlalchemy.orm import relationship

# Import all relevant models
from .forum_category import ForumCategory
from .forum_post import ForumPost
from .forum_post_file import ForumPostFile
from .forum_post_report import ForumPostReport
from .member import Member


def setup_relationships():
    """
    Configure all SQLAlchemy relationships between models.
    """

    # 1. Category to Posts (One-to-Many)
    ForumCategory.posts = relationship(
        "ForumPost",
        back_populates="category",
        order_by="ForumPost.created_at.desc()",
    )
    ForumPost.category = relationship("ForumCategory", back_populates="posts")

    # 2. Member to Posts (One-to-Many)
    Member.posts = relationship("ForumPost", back_populates="author")
    ForumPost.author = relationship("Member", back_populates="posts")

    # 3. Post to Files (One-to-Many, ordered, first is primary)
    ForumPost.files = relationship(
        "ForumPostFile",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="ForumPostFile.position",
    )
    ForumPostFile.post = relationship("ForumPost", back_populates="files")

    # 4. Post to Reports (One-to-Many)
    ForumPost.reports = relationship(
        "ForumPostReport",
        back_populates="post",
        order_by="ForumPostReport.id",
    )
    ForumPostReport.post = relationship("ForumPost", back_populates="reports")

    # 5. Member to Reports filed (One-to-Many)
    Member.reports = relationship("ForumPostReport", back_populates="reporter")
    ForumPostReport.reporter = relationship("Member", back_populates="reports")

    # 6. Quoting post to quoted post (Many-to-One, self-referential)
    ForumPost.quoted_post = relationship(
        "ForumPost",
        remote_side=[ForumPost.id],
        foreign_keys=[ForumPost.quoted_post_id],
    )
