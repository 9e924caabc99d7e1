"""Progress photo ownership, visibility toggles and delete with dependents."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.models.photo import CommentLike, PhotoComment, PhotoLike, ProgressPhoto

logger = logging.getLogger(__name__)


class PhotoStateError(Exception):
    """Visibility change not allowed in the photo's current state."""


async def get_owned_photo(db: AsyncSession, photo_id: uuid.UUID, owner_id: uuid.UUID) -> ProgressPhoto | None:
    """Photo owned by owner_id, or None (someone else's photo looks missing)."""
    result = await db.execute(
        select(ProgressPhoto).where(ProgressPhoto.id == photo_id, ProgressPhoto.user_id == owner_id)
    )
    return result.scalar_one_or_none()


async def list_user_photos(db: AsyncSession, owner_id: uuid.UUID) -> list[ProgressPhoto]:
    result = await db.execute(
        select(ProgressPhoto)
        .where(ProgressPhoto.user_id == owner_id)
        .order_by(ProgressPhoto.week_number.asc(), ProgressPhoto.created_at.asc())
    )
    return list(result.scalars().all())


def toggle_private(photo: ProgressPhoto) -> ProgressPhoto:
    """Flip is_private. Going private also withdraws the photo from the community."""
    photo.is_private = not photo.is_private
    if photo.is_private:
        photo.community_visible = False
    return photo


def toggle_community(photo: ProgressPhoto) -> ProgressPhoto:
    """Flip community_visible; a private photo cannot be shared."""
    if photo.is_private and not photo.community_visible:
        raise PhotoStateError("Make the photo public before sharing it with the community")
    photo.community_visible = not photo.community_visible
    return photo


async def delete_photo(db: AsyncSession, photo: ProgressPhoto) -> str:
    """Remove the photo row with its likes and comments. Returns the storage key to delete."""
    comment_ids = select(PhotoComment.id).where(PhotoComment.photo_id == photo.id)
    await db.execute(delete(CommentLike).where(CommentLike.comment_id.in_(comment_ids)))
    # Replies first: they reference top-level comments of the same photo
    await db.execute(
        delete(PhotoComment).where(PhotoComment.photo_id == photo.id, PhotoComment.parent_id.is_not(None))
    )
    await db.execute(delete(PhotoComment).where(PhotoComment.photo_id == photo.id))
    await db.execute(delete(PhotoLike).where(PhotoLike.photo_id == photo.id))
    storage_path = photo.storage_path
    await db.delete(photo)
    await db.flush()
    logger.info("Deleted progress photo %s", photo.id)
    return storage_path
