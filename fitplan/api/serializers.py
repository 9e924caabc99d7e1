"""ORM / view-model -> response model conversion that needs signed URLs."""

from __future__ import annotations

from fitplan.models.photo import ProgressPhoto
from fitplan.models.profile import Profile
from fitplan.schemas.community import CommentRead, FeedPhotoRead
from fitplan.schemas.photo import PhotoRead
from fitplan.schemas.profile import ProfileRead, ProfileRef
from fitplan.services.feed import AuthorRef, CommentNode, PhotoNode
from fitplan.services.storage import PhotoStorage


async def profile_read(storage: PhotoStorage, profile: Profile) -> ProfileRead:
    return ProfileRead(
        id=profile.id,
        username=profile.username,
        full_name=profile.full_name,
        email=profile.email,
        avatar_url=await storage.signed_url(profile.avatar_path),
        is_admin=profile.is_admin,
        created_at=profile.created_at,
    )


async def profile_ref(storage: PhotoStorage, author: AuthorRef | Profile) -> ProfileRef:
    return ProfileRef(
        id=author.id,
        username=author.username,
        full_name=author.full_name,
        avatar_url=await storage.signed_url(author.avatar_path),
    )


async def photo_read(storage: PhotoStorage, photo: ProgressPhoto) -> PhotoRead:
    return PhotoRead(
        id=photo.id,
        user_id=photo.user_id,
        image_url=await storage.signed_url(photo.storage_path),
        caption=photo.caption,
        week_number=photo.week_number,
        is_private=photo.is_private,
        community_visible=photo.community_visible,
        created_at=photo.created_at,
    )


async def comment_read(storage: PhotoStorage, node: CommentNode) -> CommentRead:
    return CommentRead(
        id=node.id,
        photo_id=node.photo_id,
        parent_id=node.parent_id,
        author=await profile_ref(storage, node.author),
        content=node.content,
        mentions=node.mentions,
        likes=node.likes,
        liked_by_viewer=node.liked_by_viewer,
        created_at=node.created_at,
        replies=[await comment_read(storage, r) for r in node.replies],
    )


async def feed_photo_read(storage: PhotoStorage, node: PhotoNode) -> FeedPhotoRead:
    return FeedPhotoRead(
        id=node.id,
        author=await profile_ref(storage, node.author),
        image_url=await storage.signed_url(node.storage_path),
        caption=node.caption,
        week_number=node.week_number,
        created_at=node.created_at,
        likes=node.likes,
        liked_by_viewer=node.liked_by_viewer,
        comments_count=node.comments_count,
        comments=[await comment_read(storage, c) for c in node.comments],
    )
