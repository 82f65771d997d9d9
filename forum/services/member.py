# forum/services/member.py
from typing import Optional

from sqlalchemy.orm import Session

from forum.models.member import Member


class MemberService:
    """Member lookups the forum needs; profile management lives elsewhere."""

    def __init__(self, db: Session):
        self.db = db

    def get_member(self, member_id: int) -> Optional[Member]:
        if member_id is None:
            return None
        return self.db.query(Member).filter(Member.id == member_id).first()

    def member_exists(self, member_id: int) -> bool:
        return self.get_member(member_id) is not None

    def is_admin(self, member_id: int) -> bool:
        """Whether the member holds the admin role (unknown members are not)"""
        member = self.get_member(member_id)
        return bool(member and member.is_active and member.is_admin)
