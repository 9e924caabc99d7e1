"""Community feed view: photo -> comments -> replies, each with its own like state.

The view is assembled from one batched fetch per level (photos, photo likes,
all comments of the visible photos, comment likes) and grouped in memory,
instead of one round trip per node. After loading, viewer actions patch the
in-memory tree directly:

- likes are optimistic: the node flips immediately, the store call follows,
  and a failed call restores the node and raises FeedMutationError;
- new comments and replies are appended to their list once the store has
  assigned an id and timestamp, never re-sorted in.

Depth is bounded at two: comment -> reply. Rows whose parent is itself a
reply are dropped when the tree is assembled.

A view is bound to the lifetime of its owner: after close(), fetches that
resolve are discarded instead of applied.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol, TypeVar

from fitplan.core.constants import MENTION_SEARCH_LIMIT
from fitplan.services.mentions import active_mention_query, extract_mentions

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FeedError(Exception):
    """Invalid feed operation (unknown node, reply to a reply, empty text)."""


class FeedNotFoundError(FeedError):
    """Target photo or comment is not part of this view."""


class FeedMutationError(FeedError):
    """The store rejected a write; the local tree was restored."""


@dataclass
class AuthorRef:
    id: uuid.UUID
    username: str
    full_name: Optional[str] = None
    avatar_path: Optional[str] = None


@dataclass
class CommentNode:
    id: uuid.UUID
    photo_id: uuid.UUID
    author: AuthorRef
    content: str
    created_at: datetime
    parent_id: Optional[uuid.UUID] = None
    mentions: list[uuid.UUID] = field(default_factory=list)
    likes: int = 0
    liked_by_viewer: bool = False
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    def attach_reply(self, reply: "CommentNode") -> None:
        if self.is_reply:
            raise FeedError("Replies cannot have replies")
        if reply.parent_id != self.id:
            raise FeedError("Reply belongs to a different comment")
        self.replies.append(reply)


@dataclass
class PhotoNode:
    id: uuid.UUID
    author: AuthorRef
    storage_path: str
    caption: Optional[str]
    week_number: int
    created_at: datetime
    likes: int = 0
    liked_by_viewer: bool = False
    comments: list[CommentNode] = field(default_factory=list)

    @property
    def comments_count(self) -> int:
        """Top-level comments plus all their replies."""
        return sum(1 + len(c.replies) for c in self.comments)


class FeedStore(Protocol):
    """Backing store the view reads from and writes to."""

    async def community_photos(
        self, photo_ids: Optional[Sequence[uuid.UUID]] = None, limit: Optional[int] = None
    ) -> list[PhotoNode]: ...

    async def photo_like_counts(self, photo_ids: Sequence[uuid.UUID]) -> dict[uuid.UUID, int]: ...

    async def photos_liked_by(self, viewer_id: uuid.UUID, photo_ids: Sequence[uuid.UUID]) -> set[uuid.UUID]: ...

    async def comments_for_photos(self, photo_ids: Sequence[uuid.UUID]) -> list[CommentNode]: ...

    async def comment_like_counts(self, comment_ids: Sequence[uuid.UUID]) -> dict[uuid.UUID, int]: ...

    async def comments_liked_by(self, viewer_id: uuid.UUID, comment_ids: Sequence[uuid.UUID]) -> set[uuid.UUID]: ...

    async def add_photo_like(self, viewer_id: uuid.UUID, photo_id: uuid.UUID) -> None: ...

    async def remove_photo_like(self, viewer_id: uuid.UUID, photo_id: uuid.UUID) -> None: ...

    async def add_comment_like(self, viewer_id: uuid.UUID, comment_id: uuid.UUID) -> None: ...

    async def remove_comment_like(self, viewer_id: uuid.UUID, comment_id: uuid.UUID) -> None: ...

    async def resolve_handles(self, handles: Sequence[str]) -> dict[str, uuid.UUID]: ...

    async def search_handles(self, prefix: str, limit: int) -> list[AuthorRef]: ...

    async def insert_comment(
        self,
        photo_id: uuid.UUID,
        author_id: uuid.UUID,
        content: str,
        parent_id: Optional[uuid.UUID],
        mentions: Sequence[uuid.UUID],
    ) -> CommentNode: ...


def assemble_feed(
    photos: Sequence[PhotoNode],
    photo_likes: dict[uuid.UUID, int],
    photos_liked: set[uuid.UUID],
    comments: Sequence[CommentNode],
    comment_likes: dict[uuid.UUID, int],
    comments_liked: set[uuid.UUID],
) -> list[PhotoNode]:
    """Group flat rows into the two-level tree in a single pass per level.

    comments must already be in ascending creation order; that order is kept.
    """
    by_photo: dict[uuid.UUID, PhotoNode] = {}
    for photo in photos:
        photo.likes = photo_likes.get(photo.id, 0)
        photo.liked_by_viewer = photo.id in photos_liked
        photo.comments = []
        by_photo[photo.id] = photo

    top_level: dict[uuid.UUID, CommentNode] = {}
    replies: list[CommentNode] = []
    for comment in comments:
        comment.likes = comment_likes.get(comment.id, 0)
        comment.liked_by_viewer = comment.id in comments_liked
        comment.replies = []
        if comment.parent_id is None:
            photo = by_photo.get(comment.photo_id)
            if photo is None:
                continue
            photo.comments.append(comment)
            top_level[comment.id] = comment
        else:
            replies.append(comment)

    for reply in replies:
        parent = top_level.get(reply.parent_id)
        if parent is None or parent.photo_id != reply.photo_id:
            # Parent is a reply itself, or missing: not displayed
            logger.debug("Dropping comment %s: parent %s is not a top-level comment", reply.id, reply.parent_id)
            continue
        parent.replies.append(reply)

    return list(photos)


class FeedView:
    """In-memory community feed for one viewer."""

    def __init__(self, store: FeedStore, viewer_id: uuid.UUID):
        self.store = store
        self.viewer_id = viewer_id
        self._photos: list[PhotoNode] = []
        self._photo_index: dict[uuid.UUID, PhotoNode] = {}
        self._comment_index: dict[uuid.UUID, CommentNode] = {}
        self._closed = False

    # ── lifecycle ──────────────────────────────────────────────────────

    @property
    def photos(self) -> list[PhotoNode]:
        return self._photos

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Detach the view from its owner; later fetch results are discarded."""
        self._closed = True

    async def _fetch_or(self, default: T, awaitable: Awaitable[T], what: str) -> T:
        try:
            return await awaitable
        except Exception:
            logger.exception("Feed fetch failed (%s); leaving nodes partially populated", what)
            return default

    async def load(self, photo_ids: Optional[Sequence[uuid.UUID]] = None, limit: Optional[int] = None) -> bool:
        """Fetch and assemble the tree. Returns False if the view was closed meanwhile."""
        photos = await self.store.community_photos(photo_ids, limit)
        ids = [p.id for p in photos]

        photo_likes: dict[uuid.UUID, int] = {}
        photos_liked: set[uuid.UUID] = set()
        comments: list[CommentNode] = []
        comment_likes: dict[uuid.UUID, int] = {}
        comments_liked: set[uuid.UUID] = set()

        if ids:
            photo_likes = await self._fetch_or({}, self.store.photo_like_counts(ids), "photo like counts")
            photos_liked = await self._fetch_or(
                set(), self.store.photos_liked_by(self.viewer_id, ids), "viewer photo likes"
            )
            comments = await self._fetch_or([], self.store.comments_for_photos(ids), "comments")
            comment_ids = [c.id for c in comments]
            if comment_ids:
                comment_likes = await self._fetch_or(
                    {}, self.store.comment_like_counts(comment_ids), "comment like counts"
                )
                comments_liked = await self._fetch_or(
                    set(), self.store.comments_liked_by(self.viewer_id, comment_ids), "viewer comment likes"
                )

        if self._closed:
            logger.debug("Feed view closed before load finished; discarding %d photos", len(photos))
            return False

        tree = assemble_feed(photos, photo_likes, photos_liked, comments, comment_likes, comments_liked)
        self._photos = tree
        self._photo_index = {p.id: p for p in tree}
        self._comment_index = {}
        for photo in tree:
            for comment in photo.comments:
                self._comment_index[comment.id] = comment
                for reply in comment.replies:
                    self._comment_index[reply.id] = reply
        return True

    # ── lookup ─────────────────────────────────────────────────────────

    def get_photo(self, photo_id: uuid.UUID) -> PhotoNode:
        photo = self._photo_index.get(photo_id)
        if photo is None:
            raise FeedNotFoundError("Photo not found")
        return photo

    def get_comment(self, comment_id: uuid.UUID) -> CommentNode:
        comment = self._comment_index.get(comment_id)
        if comment is None:
            raise FeedNotFoundError("Comment not found")
        return comment

    # ── likes (optimistic with rollback) ───────────────────────────────

    @staticmethod
    def _flip(node: PhotoNode | CommentNode) -> bool:
        """Toggle the viewer flag and adjust the count by one. Returns the previous flag."""
        was_liked = node.liked_by_viewer
        node.liked_by_viewer = not was_liked
        node.likes += -1 if was_liked else 1
        return was_liked

    @staticmethod
    def _restore(node: PhotoNode | CommentNode, was_liked: bool) -> None:
        node.liked_by_viewer = was_liked
        node.likes += 1 if was_liked else -1

    async def toggle_photo_like(self, photo_id: uuid.UUID) -> PhotoNode:
        photo = self.get_photo(photo_id)
        was_liked = self._flip(photo)
        try:
            if was_liked:
                await self.store.remove_photo_like(self.viewer_id, photo_id)
            else:
                await self.store.add_photo_like(self.viewer_id, photo_id)
        except Exception as exc:
            if not self._closed:
                self._restore(photo, was_liked)
            logger.warning("Photo like toggle failed for %s: %s", photo_id, exc)
            raise FeedMutationError("Could not update like") from exc
        return photo

    async def toggle_comment_like(self, comment_id: uuid.UUID) -> CommentNode:
        """Toggle like on a top-level comment or a reply."""
        comment = self.get_comment(comment_id)
        was_liked = self._flip(comment)
        try:
            if was_liked:
                await self.store.remove_comment_like(self.viewer_id, comment_id)
            else:
                await self.store.add_comment_like(self.viewer_id, comment_id)
        except Exception as exc:
            if not self._closed:
                self._restore(comment, was_liked)
            logger.warning("Comment like toggle failed for %s: %s", comment_id, exc)
            raise FeedMutationError("Could not update like") from exc
        return comment

    # ── comments ───────────────────────────────────────────────────────

    async def submit_comment(
        self,
        photo_id: uuid.UUID,
        content: str,
        parent_id: Optional[uuid.UUID] = None,
    ) -> CommentNode:
        """Persist a comment (or reply) with its resolved mentions and splice it into the tree."""
        photo = self.get_photo(photo_id)
        text = (content or "").strip()
        if not text:
            raise FeedError("Comment cannot be empty")

        parent: Optional[CommentNode] = None
        if parent_id is not None:
            parent = self.get_comment(parent_id)
            if parent.photo_id != photo.id:
                raise FeedNotFoundError("Comment not found")
            if parent.is_reply:
                raise FeedError("Replies can only be added to top-level comments")

        handles = extract_mentions(text)
        mentions: list[uuid.UUID] = []
        try:
            if handles:
                resolved = await self.store.resolve_handles(handles)
                for handle in handles:
                    user_id = resolved.get(handle.lower())
                    if user_id is not None and user_id not in mentions:
                        mentions.append(user_id)
            node = await self.store.insert_comment(photo.id, self.viewer_id, text, parent_id, mentions)
        except Exception as exc:
            logger.warning("Posting comment on %s failed: %s", photo_id, exc)
            raise FeedMutationError("Could not post comment") from exc

        if self._closed:
            return node
        node.likes = 0
        node.liked_by_viewer = False
        node.replies = []
        if parent is not None:
            parent.attach_reply(node)
        else:
            photo.comments.append(node)
        self._comment_index[node.id] = node
        return node

    # ── mention autocomplete ───────────────────────────────────────────

    async def search_mentions(
        self,
        text: str,
        cursor: Optional[int] = None,
        limit: int = MENTION_SEARCH_LIMIT,
    ) -> list[AuthorRef]:
        """Candidates for the unterminated @token before the cursor; [] when not typing one."""
        query = active_mention_query(text, cursor)
        if query is None:
            return []
        try:
            return await self.store.search_handles(query, limit)
        except Exception:
            logger.exception("Mention search failed for %r", query)
            return []
