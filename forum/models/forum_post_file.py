# forum/models/forum_post_file.py
from sqlalchemy import Column, ForeignKey, Integer, Text

from forum.core.database import Base


class ForumPostFile(Base):
    __tablename__ = "forum_post_files"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Key
    post_id = Column(Integer, ForeignKey("forum_posts.id"), nullable=False, index=True)

    # Resolved URL handed over by the attachment storage
    file_url = Column(Text, nullable=False)

    # Ordering, position 0 is the primary file
    position = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<ForumPostFile(id={self.id}, post_id={self.post_id}, position={self.position})>"
