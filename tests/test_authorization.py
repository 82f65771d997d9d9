"""
Unit tests for the edit/delete permission predicates
"""
from forum.models.forum_post import ForumPost
from forum.services.authorization import can_delete, can_edit

AUTHOR = 7
STRANGER = 8
ADMIN = 1


def make_post(state="active", locked=False, edited_by_title=None):
    return ForumPost(
        id=1,
        author_id=AUTHOR,
        category_id=3,
        title="T",
        content="C",
        state=state,
        locked=locked,
        edited_by_title=edited_by_title,
        removed_by="OP" if state == "removed" else None,
    )


class TestCanEdit:
    def test_author_can_edit_unlocked_post(self):
        assert can_edit(make_post(), AUTHOR, False) is True

    def test_stranger_cannot_edit(self):
        assert can_edit(make_post(), STRANGER, False) is False

    def test_admin_can_edit_any_post(self):
        assert can_edit(make_post(), ADMIN, True) is True

    def test_locked_post_only_editable_by_admin(self):
        post = make_post(locked=True, edited_by_title="ADMIN")
        assert can_edit(post, AUTHOR, False) is False
        assert can_edit(post, ADMIN, True) is True

    def test_hidden_post_still_editable_by_author(self):
        assert can_edit(make_post(state="hidden"), AUTHOR, False) is True

    def test_removed_post_not_editable_by_anyone(self):
        post = make_post(state="removed")
        assert can_edit(post, AUTHOR, False) is False
        assert can_edit(post, ADMIN, True) is False

    def test_missing_actor_is_not_the_author(self):
        assert can_edit(make_post(), None, False) is False


class TestCanDelete:
    def test_author_can_delete(self):
        assert can_delete(make_post(), AUTHOR, False) is True

    def test_admin_can_delete(self):
        assert can_delete(make_post(), ADMIN, True) is True

    def test_stranger_cannot_delete(self):
        assert can_delete(make_post(), STRANGER, False) is False

    def test_author_can_delete_locked_post(self):
        post = make_post(locked=True, edited_by_title="ADMIN")
        assert can_delete(post, AUTHOR, False) is True

    def test_removed_post_cannot_be_deleted_again(self):
        post = make_post(state="removed")
        assert can_delete(post, AUTHOR, False) is False
        assert can_delete(post, ADMIN, True) is False
