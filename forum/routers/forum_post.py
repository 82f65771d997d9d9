# forum/routers/forum_post.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from forum.core.config import settings
from forum.core.database import get_db
from forum.core.dependencies import (
    get_acting_admin,
    get_acting_member,
    get_optional_member,
)
from forum.core.limiter import limiter
from forum.models.member import Member
from forum.schemas.forum_post import (
    ForumPostContentUpdate,
    ForumPostCreate,
    ForumPostListResponse,
    ForumPostReportListResponse,
    ForumPostResponse,
    ForumPostStickyUpdate,
    ForumPostTitleUpdate,
    QuotePostRequest,
    ReportPostRequest,
)
from forum.services.forum_post import ForumPostService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/forums/posts",
    tags=["Forum Posts"],
    responses={404: {"description": "Not found"}},
)


# ==================== Read Endpoints ====================


@router.get("/", response_model=ForumPostListResponse)
def list_posts_by_category(
    category_id: int = Query(...),
    page: int = Query(1, description="1-based page number"),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    db: Session = Depends(get_db),
):
    """
    Get visible posts of a category, sticky posts first.
    Page numbers start at 1.
    """
    service = ForumPostService(db)
    posts, pagination = service.get_posts_by_category(category_id, page, size)
    return {"posts": posts, **pagination}


@router.get("/{post_id}", response_model=ForumPostResponse)
def get_post_details(
    post_id: int,
    db: Session = Depends(get_db),
    current_member: Optional[Member] = Depends(get_optional_member),
):
    """
    Get a post by ID.
    Hidden posts are only returned to admins.
    """
    service = ForumPostService(db)
    include_hidden = bool(current_member and current_member.is_admin)
    return service.get_post_details(post_id, include_hidden=include_hidden)


# ==================== Permission Checks ====================
# Used by clients to show or hide edit/delete controls. The mutating
# endpoints run the same checks again.


@router.get("/{post_id}/can-edit", response_model=bool)
def can_edit_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_acting_member),
):
    service = ForumPostService(db)
    return service.can_edit_post(post_id, current_member.id, current_member.is_admin)


@router.get("/{post_id}/can-delete", response_model=bool)
def can_delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_acting_member),
):
    service = ForumPostService(db)
    return service.can_delete_post(post_id, current_member.id, current_member.is_admin)


# ==================== Author Endpoints ====================


@router.post("/", response_model=ForumPostResponse, status_code=201)
def create_post(
    post_in: ForumPostCreate,
    db: Session = Depends(get_db),
):
    """
    Create a new post.
    Member, category, title and content are required.
    """
    logger.info(f"Creating post with title: {post_in.title}")
    service = ForumPostService(db)
    return service.create_post(
        author_id=post_in.member_id,
        category_id=post_in.category_id,
        title=post_in.title,
        content=post_in.content,
        file_urls=post_in.file_urls,
    )


@router.put("/{post_id}/title", response_model=ForumPostResponse)
def update_post_title(
    post_id: int,
    body: ForumPostTitleUpdate,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_acting_member),
):
    """
    Edit the title of a post.
    An edit by an admin locks the post against further edits by its author.
    """
    logger.info(f"Updating post title for ID: {post_id} by member ID: {current_member.id}")
    service = ForumPostService(db)
    return service.update_post_title(
        post_id, body.title, current_member.id, current_member.is_admin
    )


@router.put("/{post_id}/content", response_model=ForumPostResponse)
def update_post_content(
    post_id: int,
    body: ForumPostContentUpdate,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_acting_member),
):
    """
    Edit the content of a post.
    An edit by an admin locks the post against further edits by its author.
    """
    logger.info(f"Updating post content for ID: {post_id} by member ID: {current_member.id}")
    service = ForumPostService(db)
    return service.update_post_content(
        post_id, body.content, current_member.id, current_member.is_admin
    )


@router.delete("/{post_id}", response_model=ForumPostResponse)
def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_acting_member),
):
    """
    Soft delete a post.
    Allowed for the author and for admins; the removal is tagged OP or ADMIN.
    """
    service = ForumPostService(db)
    return service.delete_post(post_id, current_member.id, current_member.is_admin)


# ==================== Interaction Endpoints ====================


@router.post("/{post_id}/increment-view", response_model=ForumPostResponse)
def increment_view_count(post_id: int, db: Session = Depends(get_db)):
    service = ForumPostService(db)
    return service.increment_view_count(post_id)


@router.post("/{post_id}/like", response_model=ForumPostResponse)
def like_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_acting_member),
):
    service = ForumPostService(db)
    return service.increment_like_count(post_id)


@router.post("/{post_id}/quote", response_model=ForumPostResponse, status_code=201)
def quote_post(
    post_id: int,
    body: QuotePostRequest,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_acting_member),
):
    """
    Quote a post.
    Creates a new post in the same category that references the quoted one.
    """
    service = ForumPostService(db)
    return service.quote_post(current_member.id, post_id, body.comment_content)


@router.post("/{post_id}/report", response_model=ForumPostResponse)
@limiter.limit(settings.report_rate_limit)
def report_post(
    request: Request,
    post_id: int,
    body: ReportPostRequest,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_acting_member),
):
    """
    Report a post.
    Once the configured number of reports is reached the post is hidden.
    Returns the updated post.
    """
    service = ForumPostService(db)
    return service.report_post(post_id, current_member.id, body.reason)


# ==================== Admin Endpoints ====================


@router.put("/{post_id}/sticky", response_model=ForumPostResponse)
def set_sticky(
    post_id: int,
    body: ForumPostStickyUpdate,
    db: Session = Depends(get_db),
    current_member: Member = Depends(get_acting_member),
):
    """
    Pin or unpin a post.
    Admin only.
    """
    service = ForumPostService(db)
    return service.set_sticky(
        post_id, body.sticky, current_member.id, current_member.is_admin
    )


@router.post("/{post_id}/hide", response_model=ForumPostResponse)
def hide_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_admin: Member = Depends(get_acting_admin),
):
    """
    Hide an active post.
    Admin only.
    """
    service = ForumPostService(db)
    return service.hide_post(post_id)


@router.post("/{post_id}/restore", response_model=ForumPostResponse)
def restore_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_admin: Member = Depends(get_acting_admin),
):
    """
    Restore a hidden post. The report count is kept.
    Admin only.
    """
    service = ForumPostService(db)
    return service.restore_post(post_id)


@router.get("/{post_id}/reports", response_model=ForumPostReportListResponse)
def get_post_reports(
    post_id: int,
    db: Session = Depends(get_db),
    current_admin: Member = Depends(get_acting_admin),
):
    """
    Get the reports filed against a post, oldest first.
    Admin only.
    """
    service = ForumPostService(db)
    return {"reports": service.get_post_reports(post_id)}
