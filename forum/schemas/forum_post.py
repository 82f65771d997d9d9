# forum/schemas/forum_post.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# ==================== Post Schemas ====================


class ForumPostCreate(BaseModel):
    # Required fields are checked by ForumPostService so that missing values
    # come back as a validation_error rather than a schema error
    member_id: Optional[int] = None
    category_id: Optional[int] = None
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = Field(None, max_length=20000)
    file_urls: List[str] = []


class ForumPostTitleUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)


class ForumPostContentUpdate(BaseModel):
    content: Optional[str] = Field(None, max_length=20000)


class ForumPostStickyUpdate(BaseModel):
    sticky: bool


class QuotePostRequest(BaseModel):
    comment_content: Optional[str] = Field(None, max_length=20000)


class ReportPostRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=1000)


class ForumPostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int
    author_id: int
    author_name: str
    quoted_post_id: Optional[int] = None

    title: str
    content: str

    sticky: bool
    locked: bool
    state: str
    hidden: bool
    removed_by: Optional[str] = None
    edited_by_title: Optional[str] = None
    edited_by_content: Optional[str] = None
    title_edited_by_admin: bool
    content_edited_by_admin: bool

    views_count: int
    likes_count: int
    report_count: int

    file_url: Optional[str] = None
    file_urls: List[str] = []

    created_at: datetime
    updated_at: datetime


class ForumPostListResponse(BaseModel):
    posts: List[ForumPostResponse]
    total: int
    page: int
    size: int
    total_pages: int


# ==================== Report Schemas ====================


class ForumPostReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    reporter_id: int
    reason: Optional[str]
    created_at: datetime


class ForumPostReportListResponse(BaseModel):
    reports: List[ForumPostReportResponse]
