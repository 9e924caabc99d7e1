"""Progress photos: owner's gallery, upload, delete, visibility toggles."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.api.deps import get_current_viewer, get_photo_storage
from fitplan.api.serializers import photo_read
from fitplan.core.constants import MAX_PHOTO_BYTES, MAX_WEEK_NUMBER, MIN_WEEK_NUMBER
from fitplan.db.session import get_db
from fitplan.models.photo import ProgressPhoto
from fitplan.models.profile import Profile
from fitplan.schemas.photo import PhotoRead
from fitplan.services.photos import (
    PhotoStateError,
    delete_photo,
    get_owned_photo,
    list_user_photos,
    toggle_community,
    toggle_private,
)
from fitplan.services.storage import (
    PhotoStorage,
    StorageError,
    UploadValidationError,
    file_extension,
    photo_key,
    validate_image_upload,
)

logger = logging.getLogger(__name__)
router = APIRouter()


async def _owned_or_404(db: AsyncSession, photo_id: uuid.UUID, viewer: Profile) -> ProgressPhoto:
    photo = await get_owned_photo(db, photo_id, viewer.id)
    if not photo:
        raise HTTPException(status_code=404, detail="Photo not found")
    return photo


@router.get("", response_model=list[PhotoRead])
async def list_photos(
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    """Viewer's own photos, ordered by week."""
    return [await photo_read(storage, p) for p in await list_user_photos(db, viewer.id)]


@router.post("", response_model=PhotoRead, status_code=201)
async def upload_photo(
    file: UploadFile = File(...),
    week_number: int = Form(..., ge=MIN_WEEK_NUMBER, le=MAX_WEEK_NUMBER),
    caption: Optional[str] = Form(None, max_length=500),
    is_private: bool = Form(False),
    community_visible: bool = Form(False),
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    data = await file.read()
    try:
        validate_image_upload(file.content_type, len(data), MAX_PHOTO_BYTES)
    except UploadValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    key = storage.photo_object(photo_key(viewer.id, week_number, file_extension(file.filename, file.content_type)))
    try:
        await storage.upload(key, data, file.content_type)
    except StorageError as e:
        raise HTTPException(status_code=502, detail="Could not upload photo") from e

    photo = ProgressPhoto(
        user_id=viewer.id,
        storage_path=key,
        caption=caption or None,
        week_number=week_number,
        is_private=is_private,
        community_visible=community_visible and not is_private,
    )
    db.add(photo)
    await db.flush()
    await db.refresh(photo)
    return await photo_read(storage, photo)


@router.delete("/{photo_id}", status_code=204)
async def remove_photo(
    photo_id: uuid.UUID,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    photo = await _owned_or_404(db, photo_id, viewer)
    storage_path = await delete_photo(db, photo)
    try:
        await storage.remove([storage_path])
    except StorageError:
        logger.warning("Photo %s deleted but object %s left in storage", photo_id, storage_path)
    return Response(status_code=204)


@router.post("/{photo_id}/privacy", response_model=PhotoRead)
async def toggle_photo_privacy(
    photo_id: uuid.UUID,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    """Flip is_private; making a photo private also removes it from the community."""
    photo = toggle_private(await _owned_or_404(db, photo_id, viewer))
    await db.flush()
    await db.refresh(photo)
    return await photo_read(storage, photo)


@router.post("/{photo_id}/community", response_model=PhotoRead)
async def toggle_photo_community(
    photo_id: uuid.UUID,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    photo = await _owned_or_404(db, photo_id, viewer)
    try:
        toggle_community(photo)
    except PhotoStateError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    await db.flush()
    await db.refresh(photo)
    return await photo_read(storage, photo)
