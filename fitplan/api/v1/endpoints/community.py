"""Community feed: shared photos with likes, comments, replies and @mentions."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.api.deps import get_current_viewer, get_photo_storage
from fitplan.api.serializers import comment_read, feed_photo_read, profile_ref
from fitplan.core.constants import (
    FEED_PAGE_LIMIT,
    MAX_FEED_PAGE_LIMIT,
    MAX_MENTION_SEARCH_LIMIT,
    MENTION_SEARCH_LIMIT,
)
from fitplan.db.session import get_db
from fitplan.models.profile import Profile
from fitplan.schemas.community import (
    CommentCreate,
    CommentRead,
    FeedPhotoRead,
    LikeState,
    MentionComplete,
    MentionCompleteResult,
)
from fitplan.schemas.profile import ProfileRef
from fitplan.services.feed import FeedError, FeedMutationError, FeedNotFoundError, FeedView
from fitplan.services.feed_store import SqlFeedStore
from fitplan.services.mentions import insert_mention
from fitplan.services.storage import PhotoStorage

logger = logging.getLogger(__name__)
router = APIRouter()


def feed_http_error(exc: FeedError) -> HTTPException:
    if isinstance(exc, FeedNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, FeedMutationError):
        return HTTPException(status_code=502, detail="Something went wrong. Please try again.")
    return HTTPException(status_code=400, detail=str(exc))


async def _view_for(
    db: AsyncSession,
    viewer: Profile,
    photo_ids: Optional[list[uuid.UUID]] = None,
    limit: Optional[int] = None,
) -> FeedView:
    view = FeedView(SqlFeedStore(db), viewer.id)
    await view.load(photo_ids, limit)
    return view


@router.get("/feed", response_model=list[FeedPhotoRead])
async def read_feed(
    limit: int = Query(FEED_PAGE_LIMIT, ge=1, le=MAX_FEED_PAGE_LIMIT),
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    view = await _view_for(db, viewer, limit=limit)
    return [await feed_photo_read(storage, p) for p in view.photos]


@router.post("/photos/{photo_id}/like", response_model=LikeState)
async def toggle_photo_like(
    photo_id: uuid.UUID,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    view = await _view_for(db, viewer, [photo_id])
    try:
        photo = await view.toggle_photo_like(photo_id)
    except FeedError as e:
        raise feed_http_error(e) from e
    return LikeState(id=photo.id, likes=photo.likes, liked_by_viewer=photo.liked_by_viewer)


@router.post("/photos/{photo_id}/comments", response_model=CommentRead, status_code=201)
async def add_comment(
    photo_id: uuid.UUID,
    payload: CommentCreate,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    """Comment on a photo, or reply to a top-level comment when parent_id is set."""
    view = await _view_for(db, viewer, [photo_id])
    try:
        node = await view.submit_comment(photo_id, payload.content, payload.parent_id)
    except FeedError as e:
        raise feed_http_error(e) from e
    return await comment_read(storage, node)


@router.post("/comments/{comment_id}/like", response_model=LikeState)
async def toggle_comment_like(
    comment_id: uuid.UUID,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    store = SqlFeedStore(db)
    photo_id = await store.photo_id_for_comment(comment_id)
    if photo_id is None:
        raise HTTPException(status_code=404, detail="Comment not found")
    view = FeedView(store, viewer.id)
    await view.load([photo_id])
    try:
        comment = await view.toggle_comment_like(comment_id)
    except FeedError as e:
        raise feed_http_error(e) from e
    return LikeState(id=comment.id, likes=comment.likes, liked_by_viewer=comment.liked_by_viewer)


@router.get("/mentions", response_model=list[ProfileRef])
async def mention_candidates(
    q: str = Query("", description="Comment text typed so far"),
    cursor: Optional[int] = Query(None, ge=0, description="Cursor offset in q; defaults to the end"),
    limit: int = Query(MENTION_SEARCH_LIMIT, ge=1, le=MAX_MENTION_SEARCH_LIMIT),
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    """Handles matching the unterminated @token before the cursor; empty when not typing one."""
    view = FeedView(SqlFeedStore(db), viewer.id)
    matches = await view.search_mentions(q, cursor, limit)
    return [await profile_ref(storage, m) for m in matches]


@router.post("/mentions/complete", response_model=MentionCompleteResult)
async def complete_mention(payload: MentionComplete):
    text, cursor = insert_mention(payload.text, payload.cursor, payload.username)
    return MentionCompleteResult(text=text, cursor=cursor)
