"""
Unit tests for the post lifecycle state machine
"""
import pytest

from forum.core.exceptions import TerminalStateConflict
from forum.models.forum_post import ForumPost
from forum.services.lifecycle import (
    PostAction,
    PostState,
    edit_tag,
    next_state,
    removal_tag,
)
from forum.services.post_store import PostStore


class TestTransitions:
    @pytest.mark.parametrize(
        "state, action, expected",
        [
            (PostState.ACTIVE, PostAction.HIDE, PostState.HIDDEN),
            (PostState.HIDDEN, PostAction.RESTORE, PostState.ACTIVE),
            (PostState.ACTIVE, PostAction.REMOVE, PostState.REMOVED),
            (PostState.HIDDEN, PostAction.REMOVE, PostState.REMOVED),
        ],
    )
    def test_allowed_transitions(self, state, action, expected):
        assert next_state(state, action) is expected

    @pytest.mark.parametrize("action", list(PostAction))
    def test_removed_is_terminal(self, action):
        with pytest.raises(TerminalStateConflict):
            next_state(PostState.REMOVED, action)

    def test_restoring_active_post_is_rejected(self):
        with pytest.raises(TerminalStateConflict, match="restore a post that is active"):
            next_state(PostState.ACTIVE, PostAction.RESTORE)

    def test_hiding_hidden_post_is_rejected(self):
        with pytest.raises(TerminalStateConflict):
            next_state(PostState.HIDDEN, PostAction.HIDE)


class TestAutoHide:
    """The auto-hide rule as applied by the report UPDATE"""

    def _report(self, db, post_id, threshold):
        outcome = PostStore(db).record_report(post_id, threshold)
        db.commit()
        return outcome

    def test_below_threshold_stays_active(self, db, post):
        for _ in range(4):
            count, state = self._report(db, post.id, 5)
        assert (count, state) == (4, "active")

    def test_reaching_threshold_hides(self, db, post):
        for _ in range(4):
            self._report(db, post.id, 5)
        assert self._report(db, post.id, 5) == (5, "hidden")

    def test_threshold_of_one_hides_on_first_report(self, db, post):
        assert self._report(db, post.id, 1) == (1, "hidden")

    def test_past_threshold_after_restore_hides_again(self, db, service, post):
        for _ in range(5):
            self._report(db, post.id, 5)
        service.restore_post(post.id)
        assert self._report(db, post.id, 5) == (6, "hidden")

    def test_hidden_post_stays_hidden(self, db, service, post):
        service.hide_post(post.id)
        assert self._report(db, post.id, 5) == (1, "hidden")

    def test_removed_post_is_not_reported(self, db, service, post):
        service.delete_post(post.id, post.author_id, False)
        assert self._report(db, post.id, 5) is None
        assert db.get(ForumPost, post.id).report_count == 0


class TestAuditTags:
    def test_removal_tag(self):
        assert removal_tag(True) == "ADMIN"
        assert removal_tag(False) == "OP"

    def test_edit_tag(self):
        assert edit_tag(True) == "ADMIN"
        assert edit_tag(False) is None
