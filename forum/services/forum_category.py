# forum/services/forum_category.py
from typing import Optional

from sqlalchemy.orm import Session

from forum.models.forum_category import ForumCategory


class ForumCategoryService:
    def __init__(self, db: Session):
        self.db = db

    def get_category(self, category_id: int) -> Optional[ForumCategory]:
        """Get a category by ID"""
        if category_id is None:
            return None
        return (
            self.db.query(ForumCategory)
            .filter(ForumCategory.id == category_id)
            .first()
        )

    def category_exists(self, category_id: int) -> bool:
        return self.get_category(category_id) is not None
