# forum/services/post_store.py
from typing import List, Optional, Tuple

from sqlalchemy import and_, func, update
from sqlalchemy.orm import Session, selectinload

from forum.core.decorator import db_exception
from forum.models.forum_post import ForumPost
from forum.models.forum_post_file import ForumPostFile
from forum.models.forum_post_report import ForumPostReport
from forum.services.lifecycle import PostState, auto_hide_clause

COUNTERS = ("views_count", "likes_count", "report_count")


class PostStore:
    """
    Storage access for forum posts.

    Counters are only ever changed with `SET c = c + 1` statements and state
    fields only with UPDATEs guarded by the state the caller observed, so no
    write here depends on a value read earlier in Python.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, post_id: int) -> Optional[ForumPost]:
        return (
            self.db.query(ForumPost)
            .filter(ForumPost.id == post_id)
            .options(
                selectinload(ForumPost.author),
                selectinload(ForumPost.files),
            )
            .populate_existing()
            .first()
        )

    @db_exception
    def add(self, post: ForumPost, file_urls: List[str]) -> ForumPost:
        self.db.add(post)
        self.db.flush()  # Get the ID

        for position, url in enumerate(file_urls):
            self.db.add(ForumPostFile(post_id=post.id, file_url=url, position=position))
        self.db.flush()

        return post

    @db_exception
    def increment_counter(self, post_id: int, counter: str) -> Optional[int]:
        """Atomically add one to a counter of a non-removed post.

        Returns the new value, or None when no live post matched.
        """
        if counter not in COUNTERS:
            raise ValueError(f"Unknown counter: {counter}")
        column = getattr(ForumPost, counter)

        stmt = (
            update(ForumPost)
            .where(
                ForumPost.id == post_id,
                ForumPost.state != PostState.REMOVED.value,
            )
            .values({counter: column + 1, "updated_at": func.now()})
            .returning(column)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    @db_exception
    def record_report(self, post_id: int, threshold: int) -> Optional[Tuple[int, str]]:
        """Bump report_count and apply the auto-hide rule in a single UPDATE.

        The CASE sees the pre-update row, so `report_count + 1` is the count
        this report produces. Returns (report_count, state) after the update,
        or None when no live post matched.
        """
        new_count = ForumPost.report_count + 1
        stmt = (
            update(ForumPost)
            .where(
                ForumPost.id == post_id,
                ForumPost.state != PostState.REMOVED.value,
            )
            .values(
                report_count=new_count,
                state=auto_hide_clause(ForumPost.state, new_count, threshold),
                updated_at=func.now(),
            )
            .returning(ForumPost.report_count, ForumPost.state)
            .execution_options(synchronize_session=False)
        )
        row = self.db.execute(stmt).first()
        if row is None:
            return None
        return row.report_count, row.state

    @db_exception
    def conditional_update(self, post_id: int, conditions: list, **values) -> bool:
        """Apply `values` only if the post still satisfies `conditions`.

        Returns False when the row no longer matches (or does not exist).
        """
        values.setdefault("updated_at", func.now())
        stmt = (
            update(ForumPost)
            .where(ForumPost.id == post_id, *conditions)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return result.rowcount == 1

    @db_exception
    def add_report(self, post_id: int, reporter_id: int, reason: Optional[str]) -> ForumPostReport:
        report = ForumPostReport(post_id=post_id, reporter_id=reporter_id, reason=reason)
        self.db.add(report)
        self.db.flush()
        return report

    def get_reports(self, post_id: int) -> List[ForumPostReport]:
        return (
            self.db.query(ForumPostReport)
            .filter(ForumPostReport.post_id == post_id)
            .order_by(ForumPostReport.id.asc())
            .all()
        )

    def list_by_category(
        self, category_id: int, offset: int, limit: int
    ) -> Tuple[List[ForumPost], int]:
        query = (
            self.db.query(ForumPost)
            .filter(
                and_(
                    ForumPost.category_id == category_id,
                    ForumPost.state == PostState.ACTIVE.value,
                )
            )
            .options(
                selectinload(ForumPost.author),
                selectinload(ForumPost.files),
            )
        )

        total = query.count()
        posts = (
            query.order_by(ForumPost.sticky.desc(), ForumPost.created_at.desc(), ForumPost.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return posts, total
