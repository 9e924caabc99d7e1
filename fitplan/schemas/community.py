"""Community feed schemas: photo -> comments -> replies."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from fitplan.core.constants import MAX_COMMENT_LENGTH
from fitplan.schemas.profile import ProfileRef


class CommentRead(BaseModel):
    id: UUID
    photo_id: UUID
    parent_id: Optional[UUID] = None
    author: ProfileRef
    content: str
    mentions: list[UUID] = []
    likes: int = 0
    liked_by_viewer: bool = False
    created_at: datetime
    replies: list[CommentRead] = []


class FeedPhotoRead(BaseModel):
    id: UUID
    author: ProfileRef
    image_url: Optional[str] = None
    caption: Optional[str] = None
    week_number: int
    created_at: datetime
    likes: int = 0
    liked_by_viewer: bool = False
    comments_count: int = 0
    comments: list[CommentRead] = []


class LikeState(BaseModel):
    id: UUID
    likes: int
    liked_by_viewer: bool


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=MAX_COMMENT_LENGTH)
    parent_id: Optional[UUID] = None


class MentionComplete(BaseModel):
    text: str
    cursor: Optional[int] = Field(None, ge=0)
    username: str = Field(..., min_length=1)


class MentionCompleteResult(BaseModel):
    text: str
    cursor: int
