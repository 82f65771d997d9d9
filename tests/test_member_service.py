"""
Tests for the member lookups used by the admin guard
"""
from forum.models import Member
from forum.services.member import MemberService

from conftest import ADMIN_ID, AUTHOR_ID


class TestIsAdmin:
    def test_admin_role(self, db, members):
        assert MemberService(db).is_admin(ADMIN_ID) is True

    def test_regular_member(self, db, members):
        assert MemberService(db).is_admin(AUTHOR_ID) is False

    def test_unknown_member(self, db, members):
        assert MemberService(db).is_admin(999) is False

    def test_deactivated_admin(self, db, members):
        db.add(
            Member(
                id=50,
                name="Former",
                email="former@example.com",
                role="admin",
                is_active=False,
            )
        )
        db.commit()
        assert MemberService(db).is_admin(50) is False

    def test_member_exists(self, db, members):
        service = MemberService(db)
        assert service.member_exists(AUTHOR_ID) is True
        assert service.member_exists(999) is False
