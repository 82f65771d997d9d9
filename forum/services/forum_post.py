# forum/services/forum_post.py
import logging
import math
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from forum.core.config import settings
from forum.core.exceptions import (
    ConcurrentConflict,
    NotFound,
    TerminalStateConflict,
    Unauthorized,
    ValidationError,
)
from forum.models.forum_post import ForumPost
from forum.models.forum_post_report import ForumPostReport
from forum.services.authorization import can_delete, can_edit
from forum.services.forum_category import ForumCategoryService
from forum.services.lifecycle import (
    PostAction,
    PostState,
    edit_tag,
    ensure_not_removed,
    next_state,
    removal_tag,
)
from forum.services.member import MemberService
from forum.services.post_store import PostStore

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class ForumPostService:
    """
    Entry point for every forum post operation.

    Each mutating method validates its input, loads the post, checks the
    authorization predicate, asks the lifecycle rules for the target state and
    persists the change with one guarded UPDATE. Errors are raised as the
    ForumException kinds from forum.core.exceptions; nothing is retried here.
    """

    def __init__(self, db: Session, report_threshold: Optional[int] = None):
        self.db = db
        self.store = PostStore(db)
        self.members = MemberService(db)
        self.categories = ForumCategoryService(db)
        self.report_threshold = (
            report_threshold
            if report_threshold is not None
            else settings.report_auto_hide_threshold
        )
        if self.report_threshold < 1:
            raise ValueError("report_threshold must be at least 1")

    # ==================== Helpers ====================

    def _get_post_or_404(self, post_id: int) -> ForumPost:
        post = self.store.get(post_id)
        if not post:
            raise NotFound(f"Post {post_id} not found")
        return post

    def _commit_and_reload(self, post_id: int) -> ForumPost:
        self.db.commit()
        return self._get_post_or_404(post_id)

    def _abort(self, error: Exception):
        self.db.rollback()
        raise error

    def _missing_or_removed(self, post_id: int, operation: str) -> Exception:
        """Explain why a guarded write on a live post matched no row."""
        post = self.store.get(post_id)
        if post is None:
            return NotFound(f"Post {post_id} not found")
        return TerminalStateConflict(f"Cannot {operation} a removed post")

    # ==================== Creation ====================

    def create_post(
        self,
        author_id: Optional[int],
        category_id: Optional[int],
        title: Optional[str],
        content: Optional[str],
        file_urls: Optional[List[str]] = None,
    ) -> ForumPost:
        """Create a new post in a category"""
        if author_id is None:
            raise ValidationError("Member ID is required.")
        if category_id is None:
            raise ValidationError("Category ID is required.")
        if _is_blank(title):
            raise ValidationError("Title is required.")
        if _is_blank(content):
            raise ValidationError("Content is required.")

        if not self.members.member_exists(author_id):
            raise NotFound(f"Member {author_id} not found")
        if not self.categories.category_exists(category_id):
            raise NotFound(f"Category {category_id} not found")

        post = ForumPost(
            category_id=category_id,
            author_id=author_id,
            title=title,
            content=content,
            sticky=False,
            locked=False,
            state=PostState.ACTIVE.value,
            views_count=0,
            likes_count=0,
            report_count=0,
        )
        self.store.add(post, [url for url in (file_urls or []) if url])

        post = self._commit_and_reload(post.id)
        logger.info(f"Post {post.id} created by member {author_id} in category {category_id}")
        return post

    # ==================== Reads ====================

    def get_post_details(self, post_id: int, include_hidden: bool = False) -> ForumPost:
        """Get a post; removed posts and (for readers) hidden posts are not found"""
        post = self.store.get(post_id)
        if not post or post.removed or (post.hidden and not include_hidden):
            raise NotFound(f"Post {post_id} not found")
        return post

    def get_posts_by_category(
        self, category_id: int, page: int = 1, size: Optional[int] = None
    ) -> Tuple[List[ForumPost], dict]:
        """Get visible posts of a category with pagination (page is 1-based)"""
        if size is None or size <= 0:
            size = settings.default_page_size
        size = min(size, settings.max_page_size)
        page = page if page and page > 0 else 1

        zero_based_page = page - 1
        posts, total = self.store.list_by_category(
            category_id, offset=zero_based_page * size, limit=size
        )

        # Pagination metadata
        total_pages = math.ceil(total / size)
        pagination = {
            "total": total,
            "page": page,
            "size": size,
            "total_pages": total_pages,
        }

        return posts, pagination

    def get_post_reports(self, post_id: int) -> List[ForumPostReport]:
        self._get_post_or_404(post_id)
        return self.store.get_reports(post_id)

    # ==================== Permission checks ====================

    def can_edit_post(self, post_id: int, actor_id: int, is_admin: bool) -> bool:
        return can_edit(self._get_post_or_404(post_id), actor_id, is_admin)

    def can_delete_post(self, post_id: int, actor_id: int, is_admin: bool) -> bool:
        return can_delete(self._get_post_or_404(post_id), actor_id, is_admin)

    # ==================== Edits ====================

    def update_post_title(
        self, post_id: int, new_title: Optional[str], actor_id: int, is_admin: bool
    ) -> ForumPost:
        return self._edit_field(
            post_id, "title", "edited_by_title", new_title, actor_id, is_admin
        )

    def update_post_content(
        self, post_id: int, new_content: Optional[str], actor_id: int, is_admin: bool
    ) -> ForumPost:
        return self._edit_field(
            post_id, "content", "edited_by_content", new_content, actor_id, is_admin
        )

    def _edit_field(
        self,
        post_id: int,
        field: str,
        marker_field: str,
        value: Optional[str],
        actor_id: int,
        is_admin: bool,
    ) -> ForumPost:
        if _is_blank(value):
            raise ValidationError(f"{field.capitalize()} is required.")

        post = self._get_post_or_404(post_id)
        ensure_not_removed(post.post_state, f"edit the {field} of")

        if not can_edit(post, actor_id, is_admin):
            logger.warning(
                f"Unauthorized {field} edit of post {post_id} by member {actor_id}"
            )
            raise Unauthorized(f"Member {actor_id} may not edit post {post_id}")

        values = {field: value, marker_field: edit_tag(is_admin)}
        conditions = [ForumPost.state != PostState.REMOVED.value]
        if is_admin:
            # An administrative edit locks the post for everyone else
            values["locked"] = True
        else:
            conditions.append(ForumPost.locked == False)  # noqa: E712

        if not self.store.conditional_update(post_id, conditions, **values):
            self._abort(ConcurrentConflict())

        post = self._commit_and_reload(post_id)
        logger.info(
            f"Post {post_id} {field} edited by member {actor_id} (admin={is_admin})"
        )
        return post

    def set_sticky(
        self, post_id: int, sticky: bool, actor_id: int, is_admin: bool
    ) -> ForumPost:
        """Pin or unpin a post (admin only)"""
        post = self._get_post_or_404(post_id)
        ensure_not_removed(post.post_state, "pin")
        if not is_admin:
            raise Unauthorized(f"Member {actor_id} may not pin posts")

        if not self.store.conditional_update(
            post_id, [ForumPost.state != PostState.REMOVED.value], sticky=bool(sticky)
        ):
            self._abort(ConcurrentConflict())

        return self._commit_and_reload(post_id)

    # ==================== Lifecycle transitions ====================

    def _transition(self, post_id: int, action: PostAction, **extra) -> ForumPost:
        post = self._get_post_or_404(post_id)
        current = post.post_state
        target = next_state(current, action)

        applied = self.store.conditional_update(
            post_id,
            [ForumPost.state == current.value],
            state=target.value,
            **extra,
        )
        if not applied:
            self._abort(ConcurrentConflict())

        post = self._commit_and_reload(post_id)
        logger.info(f"Post {post_id}: {current.value} -> {target.value} ({action.value})")
        return post

    def delete_post(self, post_id: int, actor_id: int, is_admin: bool) -> ForumPost:
        """Soft delete a post; the removal is tagged ADMIN or OP"""
        post = self._get_post_or_404(post_id)
        ensure_not_removed(post.post_state, "delete")

        if not can_delete(post, actor_id, is_admin):
            logger.warning(f"Unauthorized delete of post {post_id} by member {actor_id}")
            raise Unauthorized(f"Member {actor_id} may not delete post {post_id}")

        return self._transition(
            post_id, PostAction.REMOVE, removed_by=removal_tag(is_admin)
        )

    def hide_post(self, post_id: int) -> ForumPost:
        return self._transition(post_id, PostAction.HIDE)

    def restore_post(self, post_id: int) -> ForumPost:
        """Make a hidden post visible again; report_count is kept"""
        return self._transition(post_id, PostAction.RESTORE)

    # ==================== Counters ====================

    def _increment(self, post_id: int, counter: str, operation: str) -> ForumPost:
        new_value = self.store.increment_counter(post_id, counter)
        if new_value is None:
            self._abort(self._missing_or_removed(post_id, operation))
        return self._commit_and_reload(post_id)

    def increment_view_count(self, post_id: int) -> ForumPost:
        return self._increment(post_id, "views_count", "view")

    def increment_like_count(self, post_id: int) -> ForumPost:
        return self._increment(post_id, "likes_count", "like")

    def report_post(
        self, post_id: int, reporter_id: int, reason: Optional[str] = None
    ) -> ForumPost:
        """
        Record a report against a post.

        The counter bump and the auto-hide decision happen in one UPDATE, and
        the audit row is written in the same transaction. Repeated reports by
        the same member are counted.
        """
        if reporter_id is None:
            raise ValidationError("Reporter ID is required.")
        if not self.members.member_exists(reporter_id):
            raise NotFound(f"Member {reporter_id} not found")

        outcome = self.store.record_report(post_id, self.report_threshold)
        if outcome is None:
            self._abort(self._missing_or_removed(post_id, "report"))

        report_count, state = outcome
        self.store.add_report(post_id, reporter_id, reason)
        post = self._commit_and_reload(post_id)

        logger.info(
            f"Post {post_id} reported by member {reporter_id} "
            f"(report_count={report_count}, state={state})"
        )
        if state == PostState.HIDDEN.value and report_count == self.report_threshold:
            logger.warning(
                f"Post {post_id} auto-hidden after reaching {self.report_threshold} reports"
            )
        return post

    # ==================== Quoting ====================

    def quote_post(
        self, quoting_member_id: int, quoted_post_id: int, comment_content: Optional[str]
    ) -> ForumPost:
        """Create a reply post that quotes another post; the quoted post is untouched"""
        if quoting_member_id is None:
            raise ValidationError("Member ID is required.")
        if _is_blank(comment_content):
            raise ValidationError("Content is required.")
        if not self.members.member_exists(quoting_member_id):
            raise NotFound(f"Member {quoting_member_id} not found")

        quoted = self._get_post_or_404(quoted_post_id)
        ensure_not_removed(quoted.post_state, "quote")

        post = ForumPost(
            category_id=quoted.category_id,
            author_id=quoting_member_id,
            quoted_post_id=quoted.id,
            title=f"RE: {quoted.title}"[:255],
            content=comment_content,
            sticky=False,
            locked=False,
            state=PostState.ACTIVE.value,
            views_count=0,
            likes_count=0,
            report_count=0,
        )
        self.store.add(post, [])

        post = self._commit_and_reload(post.id)
        logger.info(
            f"Post {quoted_post_id} quoted by member {quoting_member_id} as post {post.id}"
        )
        return post
