"""
Models package initialization
Import all models and setup relationships
"""

from .forum_category import ForumCategory
from .forum_post import ForumPost
from .forum_post_file import ForumPostFile
from .forum_post_report import ForumPostReport
from .member import Member

# Import and setup relationships
from .relations import setup_relationships

# Setup all relationships after models are imported
setup_relationships()

# Make models available at package level
__all__ = [
    "ForumCategory",
    "ForumPost",
    "ForumPostFile",
    "ForumPostReport",
    "Member",
]
