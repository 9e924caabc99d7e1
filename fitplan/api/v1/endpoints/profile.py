"""Viewer profile: read, create/update handle, avatar upload, handle search."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.api.deps import get_current_viewer, get_photo_storage, get_viewer_id
from fitplan.api.serializers import profile_read, profile_ref
from fitplan.core.constants import MAX_AVATAR_BYTES, MAX_MENTION_SEARCH_LIMIT, MENTION_SEARCH_LIMIT
from fitplan.db.session import get_db
from fitplan.models.profile import Profile
from fitplan.schemas.profile import ProfileRead, ProfileRef, ProfileUpsert
from fitplan.services.feed_store import SqlFeedStore
from fitplan.services.storage import (
    PhotoStorage,
    StorageError,
    UploadValidationError,
    avatar_key,
    file_extension,
    validate_image_upload,
)

logger = logging.getLogger(__name__)
router = APIRouter()


async def username_taken(db: AsyncSession, username: str, exclude_id: uuid.UUID) -> bool:
    result = await db.execute(
        select(Profile.id).where(func.lower(Profile.username) == username.lower(), Profile.id != exclude_id)
    )
    return result.first() is not None


@router.get("/me", response_model=ProfileRead)
async def read_me(
    viewer: Profile = Depends(get_current_viewer),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    return await profile_read(storage, viewer)


@router.put("/me", response_model=ProfileRead)
async def upsert_me(
    payload: ProfileUpsert,
    viewer_id: uuid.UUID = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    """Create or update the viewer's profile. Handles are unique case-insensitively."""
    if await username_taken(db, payload.username, viewer_id):
        raise HTTPException(status_code=409, detail="Username is already taken")

    profile = await db.get(Profile, viewer_id)
    if profile:
        profile.username = payload.username
        profile.full_name = payload.full_name
        if payload.email is not None:
            profile.email = payload.email
    else:
        profile = Profile(
            id=viewer_id,
            username=payload.username,
            full_name=payload.full_name,
            email=payload.email,
        )
        db.add(profile)

    await db.flush()
    await db.refresh(profile)
    return await profile_read(storage, profile)


@router.post("/me/avatar", response_model=ProfileRead)
async def upload_avatar(
    file: UploadFile = File(...),
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    """Replace the avatar: upload new object, point the row at it, then drop the old object."""
    data = await file.read()
    try:
        validate_image_upload(file.content_type, len(data), MAX_AVATAR_BYTES)
    except UploadValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    key = storage.avatar_object(avatar_key(viewer.id, file_extension(file.filename, file.content_type)))
    try:
        await storage.upload(key, data, file.content_type)
    except StorageError as e:
        raise HTTPException(status_code=502, detail="Could not upload avatar") from e

    old_key = viewer.avatar_path
    viewer.avatar_path = key
    await db.flush()
    await db.refresh(viewer)

    if old_key and old_key != key:
        try:
            await storage.remove([old_key])
        except StorageError:
            logger.warning("Old avatar %s for %s left in storage", old_key, viewer.id)
    return await profile_read(storage, viewer)


@router.get("/search", response_model=list[ProfileRef])
async def search_profiles(
    q: str = Query("", max_length=50, description="Handle prefix, with or without @"),
    limit: int = Query(MENTION_SEARCH_LIMIT, ge=1, le=MAX_MENTION_SEARCH_LIMIT),
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    matches = await SqlFeedStore(db).search_handles(q.strip().lstrip("@"), limit)
    return [await profile_ref(storage, m) for m in matches]
