"""SQLAlchemy-backed store for FeedView: one query per level, grouped by id."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fitplan.models.photo import CommentLike, PhotoComment, PhotoLike, ProgressPhoto
from fitplan.models.profile import Profile
from fitplan.services.feed import AuthorRef, CommentNode, PhotoNode


def author_ref(profile: Profile) -> AuthorRef:
    return AuthorRef(
        id=profile.id,
        username=profile.username,
        full_name=profile.full_name,
        avatar_path=profile.avatar_path,
    )


def _comment_node(comment: PhotoComment, author: Profile) -> CommentNode:
    return CommentNode(
        id=comment.id,
        photo_id=comment.photo_id,
        parent_id=comment.parent_id,
        author=author_ref(author),
        content=comment.content,
        mentions=[uuid.UUID(str(m)) for m in (comment.mentions or [])],
        created_at=comment.created_at,
    )


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlFeedStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def community_photos(
        self, photo_ids: Optional[Sequence[uuid.UUID]] = None, limit: Optional[int] = None
    ) -> list[PhotoNode]:
        """Community-eligible photos (not private and community visible), newest first."""
        stmt = (
            select(ProgressPhoto)
            .options(selectinload(ProgressPhoto.author))
            .where(ProgressPhoto.is_private.is_(False), ProgressPhoto.community_visible.is_(True))
            .order_by(ProgressPhoto.created_at.desc())
        )
        if photo_ids is not None:
            if not photo_ids:
                return []
            stmt = stmt.where(ProgressPhoto.id.in_(list(photo_ids)))
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return [
            PhotoNode(
                id=photo.id,
                author=author_ref(photo.author),
                storage_path=photo.storage_path,
                caption=photo.caption,
                week_number=photo.week_number,
                created_at=photo.created_at,
            )
            for photo in result.scalars().all()
        ]

    async def photo_like_counts(self, photo_ids: Sequence[uuid.UUID]) -> dict[uuid.UUID, int]:
        result = await self.db.execute(
            select(PhotoLike.photo_id, func.count(PhotoLike.id))
            .where(PhotoLike.photo_id.in_(list(photo_ids)))
            .group_by(PhotoLike.photo_id)
        )
        return {photo_id: count for photo_id, count in result.all()}

    async def photos_liked_by(self, viewer_id: uuid.UUID, photo_ids: Sequence[uuid.UUID]) -> set[uuid.UUID]:
        result = await self.db.execute(
            select(PhotoLike.photo_id).where(
                PhotoLike.user_id == viewer_id, PhotoLike.photo_id.in_(list(photo_ids))
            )
        )
        return set(result.scalars().all())

    async def comments_for_photos(self, photo_ids: Sequence[uuid.UUID]) -> list[CommentNode]:
        """Comments and replies of all given photos in ascending creation order."""
        result = await self.db.execute(
            select(PhotoComment)
            .options(selectinload(PhotoComment.author))
            .where(PhotoComment.photo_id.in_(list(photo_ids)))
            .order_by(PhotoComment.created_at.asc(), PhotoComment.id.asc())
        )
        return [_comment_node(c, c.author) for c in result.scalars().all()]

    async def comment_like_counts(self, comment_ids: Sequence[uuid.UUID]) -> dict[uuid.UUID, int]:
        result = await self.db.execute(
            select(CommentLike.comment_id, func.count(CommentLike.id))
            .where(CommentLike.comment_id.in_(list(comment_ids)))
            .group_by(CommentLike.comment_id)
        )
        return {comment_id: count for comment_id, count in result.all()}

    async def comments_liked_by(self, viewer_id: uuid.UUID, comment_ids: Sequence[uuid.UUID]) -> set[uuid.UUID]:
        result = await self.db.execute(
            select(CommentLike.comment_id).where(
                CommentLike.user_id == viewer_id, CommentLike.comment_id.in_(list(comment_ids))
            )
        )
        return set(result.scalars().all())

    async def add_photo_like(self, viewer_id: uuid.UUID, photo_id: uuid.UUID) -> None:
        existing = await self.db.execute(
            select(PhotoLike.id).where(PhotoLike.photo_id == photo_id, PhotoLike.user_id == viewer_id)
        )
        if existing.scalar_one_or_none() is not None:
            return
        self.db.add(PhotoLike(photo_id=photo_id, user_id=viewer_id))
        await self.db.flush()

    async def remove_photo_like(self, viewer_id: uuid.UUID, photo_id: uuid.UUID) -> None:
        await self.db.execute(
            delete(PhotoLike).where(PhotoLike.photo_id == photo_id, PhotoLike.user_id == viewer_id)
        )

    async def add_comment_like(self, viewer_id: uuid.UUID, comment_id: uuid.UUID) -> None:
        existing = await self.db.execute(
            select(CommentLike.id).where(CommentLike.comment_id == comment_id, CommentLike.user_id == viewer_id)
        )
        if existing.scalar_one_or_none() is not None:
            return
        self.db.add(CommentLike(comment_id=comment_id, user_id=viewer_id))
        await self.db.flush()

    async def remove_comment_like(self, viewer_id: uuid.UUID, comment_id: uuid.UUID) -> None:
        await self.db.execute(
            delete(CommentLike).where(CommentLike.comment_id == comment_id, CommentLike.user_id == viewer_id)
        )

    async def resolve_handles(self, handles: Sequence[str]) -> dict[str, uuid.UUID]:
        """Map lowercased handle -> profile id for the handles that exist (one query)."""
        lowered = sorted({h.lower() for h in handles})
        if not lowered:
            return {}
        result = await self.db.execute(
            select(Profile.username, Profile.id).where(func.lower(Profile.username).in_(lowered))
        )
        return {username.lower(): profile_id for username, profile_id in result.all()}

    async def search_handles(self, prefix: str, limit: int) -> list[AuthorRef]:
        result = await self.db.execute(
            select(Profile)
            .where(func.lower(Profile.username).like(f"{escape_like(prefix.lower())}%", escape="\\"))
            .order_by(Profile.username)
            .limit(limit)
        )
        return [author_ref(p) for p in result.scalars().all()]

    async def insert_comment(
        self,
        photo_id: uuid.UUID,
        author_id: uuid.UUID,
        content: str,
        parent_id: Optional[uuid.UUID],
        mentions: Sequence[uuid.UUID],
    ) -> CommentNode:
        author = await self.db.get(Profile, author_id)
        if author is None:
            raise LookupError(f"Unknown author {author_id}")
        comment = PhotoComment(
            photo_id=photo_id,
            user_id=author_id,
            parent_id=parent_id,
            content=content,
            mentions=[str(m) for m in mentions],
        )
        self.db.add(comment)
        await self.db.flush()
        await self.db.refresh(comment)
        return _comment_node(comment, author)

    async def photo_id_for_comment(self, comment_id: uuid.UUID) -> Optional[uuid.UUID]:
        result = await self.db.execute(select(PhotoComment.photo_id).where(PhotoComment.id == comment_id))
        return result.scalar_one_or_none()
