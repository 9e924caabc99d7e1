"""FeedView against an in-memory store: assembly, optimistic likes, comments, lifetime."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from conftest import run

from fitplan.services.feed import (
    AuthorRef,
    CommentNode,
    FeedError,
    FeedMutationError,
    FeedNotFoundError,
    FeedView,
    PhotoNode,
)

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


class StoreDown(Exception):
    pass


class MemoryFeedStore:
    """Flat rows in dicts; fail_on names the methods that raise StoreDown."""

    def __init__(self):
        self.users: dict[uuid.UUID, AuthorRef] = {}
        self.photos: list[dict] = []
        self.comments: list[dict] = []
        self.photo_likes: set[tuple[uuid.UUID, uuid.UUID]] = set()
        self.comment_likes: set[tuple[uuid.UUID, uuid.UUID]] = set()
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        self.on_load = None
        self._clock = T0

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise StoreDown(name)

    def add_user(self, username: str) -> AuthorRef:
        ref = AuthorRef(id=uuid.uuid4(), username=username)
        self.users[ref.id] = ref
        return ref

    def add_photo(self, owner: AuthorRef, private: bool = False, community: bool = True) -> uuid.UUID:
        pid = uuid.uuid4()
        self.photos.append(
            {"id": pid, "owner": owner, "private": private, "community": community, "created_at": self._tick()}
        )
        return pid

    def add_comment(self, photo_id, author: AuthorRef, content: str, parent_id=None) -> uuid.UUID:
        cid = uuid.uuid4()
        self.comments.append(
            {
                "id": cid,
                "photo_id": photo_id,
                "author": author,
                "content": content,
                "parent_id": parent_id,
                "mentions": [],
                "created_at": self._tick(),
            }
        )
        return cid

    def _node(self, row: dict) -> CommentNode:
        return CommentNode(
            id=row["id"],
            photo_id=row["photo_id"],
            parent_id=row["parent_id"],
            author=row["author"],
            content=row["content"],
            mentions=list(row["mentions"]),
            created_at=row["created_at"],
        )

    async def community_photos(self, photo_ids=None, limit=None):
        self._call("community_photos")
        if self.on_load:
            self.on_load()
        rows = [p for p in self.photos if not p["private"] and p["community"]]
        if photo_ids is not None:
            rows = [p for p in rows if p["id"] in photo_ids]
        rows.sort(key=lambda p: p["created_at"], reverse=True)
        if limit is not None:
            rows = rows[:limit]
        return [
            PhotoNode(
                id=p["id"], author=p["owner"], storage_path=f"{p['id']}.jpg", caption=None,
                week_number=1, created_at=p["created_at"],
            )
            for p in rows
        ]

    async def photo_like_counts(self, photo_ids):
        self._call("photo_like_counts")
        counts: dict = {}
        for pid, _ in self.photo_likes:
            if pid in photo_ids:
                counts[pid] = counts.get(pid, 0) + 1
        return counts

    async def photos_liked_by(self, viewer_id, photo_ids):
        self._call("photos_liked_by")
        return {pid for pid, uid in self.photo_likes if uid == viewer_id and pid in photo_ids}

    async def comments_for_photos(self, photo_ids):
        self._call("comments_for_photos")
        rows = sorted((c for c in self.comments if c["photo_id"] in photo_ids), key=lambda c: c["created_at"])
        return [self._node(c) for c in rows]

    async def comment_like_counts(self, comment_ids):
        self._call("comment_like_counts")
        counts: dict = {}
        for cid, _ in self.comment_likes:
            if cid in comment_ids:
                counts[cid] = counts.get(cid, 0) + 1
        return counts

    async def comments_liked_by(self, viewer_id, comment_ids):
        self._call("comments_liked_by")
        return {cid for cid, uid in self.comment_likes if uid == viewer_id and cid in comment_ids}

    async def add_photo_like(self, viewer_id, photo_id):
        self._call("add_photo_like")
        self.photo_likes.add((photo_id, viewer_id))

    async def remove_photo_like(self, viewer_id, photo_id):
        self._call("remove_photo_like")
        self.photo_likes.discard((photo_id, viewer_id))

    async def add_comment_like(self, viewer_id, comment_id):
        self._call("add_comment_like")
        self.comment_likes.add((comment_id, viewer_id))

    async def remove_comment_like(self, viewer_id, comment_id):
        self._call("remove_comment_like")
        self.comment_likes.discard((comment_id, viewer_id))

    async def resolve_handles(self, handles):
        self._call("resolve_handles")
        wanted = {h.lower() for h in handles}
        return {u.username.lower(): u.id for u in self.users.values() if u.username.lower() in wanted}

    async def search_handles(self, prefix, limit):
        self._call("search_handles")
        matches = sorted((u for u in self.users.values() if u.username.lower().startswith(prefix)), key=lambda u: u.username)
        return matches[:limit]

    async def insert_comment(self, photo_id, author_id, content, parent_id, mentions):
        self._call("insert_comment")
        cid = self.add_comment(photo_id, self.users[author_id], content, parent_id)
        self.comments[-1]["mentions"] = list(mentions)
        return self._node(self.comments[-1])


@pytest.fixture
def store():
    return MemoryFeedStore()


@pytest.fixture
def world(store):
    owner = store.add_user("owner")
    viewer = store.add_user("viewer")
    photo = store.add_photo(owner)
    return {"owner": owner, "viewer": viewer, "photo": photo}


def loaded_view(store, viewer) -> FeedView:
    view = FeedView(store, viewer.id)
    assert run(view.load()) is True
    return view


def test_only_community_eligible_photos_are_loaded(store, world):
    store.add_photo(world["owner"], private=True, community=False)
    store.add_photo(world["owner"], private=False, community=False)
    view = loaded_view(store, world["viewer"])
    assert [p.id for p in view.photos] == [world["photo"]]


def test_batched_fetch_is_one_call_per_level(store, world):
    for i in range(3):
        pid = store.add_photo(world["owner"])
        cid = store.add_comment(pid, world["owner"], f"c{i}")
        store.add_comment(pid, world["viewer"], f"r{i}", parent_id=cid)
    loaded_view(store, world["viewer"])
    assert store.calls == [
        "community_photos",
        "photo_like_counts",
        "photos_liked_by",
        "comments_for_photos",
        "comment_like_counts",
        "comments_liked_by",
    ]


def test_tree_assembly_counts_and_order(store, world):
    pid = world["photo"]
    first = store.add_comment(pid, world["owner"], "first")
    second = store.add_comment(pid, world["viewer"], "second")
    r1 = store.add_comment(pid, world["viewer"], "reply 1", parent_id=first)
    r2 = store.add_comment(pid, world["owner"], "reply 2", parent_id=first)
    store.comment_likes.add((r1, world["owner"].id))
    store.photo_likes.add((pid, world["viewer"].id))

    view = loaded_view(store, world["viewer"])
    photo = view.get_photo(pid)
    assert [c.id for c in photo.comments] == [first, second]
    assert [r.id for r in photo.comments[0].replies] == [r1, r2]
    assert photo.comments_count == 4
    assert photo.likes == 1 and photo.liked_by_viewer is True
    assert view.get_comment(r1).likes == 1
    assert view.get_comment(r1).liked_by_viewer is False


def test_replies_to_replies_are_not_displayed(store, world):
    pid = world["photo"]
    top = store.add_comment(pid, world["owner"], "top")
    reply = store.add_comment(pid, world["viewer"], "reply", parent_id=top)
    deep = store.add_comment(pid, world["owner"], "too deep", parent_id=reply)

    view = loaded_view(store, world["viewer"])
    photo = view.get_photo(pid)
    assert photo.comments_count == 2
    assert photo.comments[0].replies[0].replies == []
    with pytest.raises(FeedNotFoundError):
        view.get_comment(deep)


def test_failed_like_count_fetch_leaves_partial_view(store, world):
    store.photo_likes.add((world["photo"], world["owner"].id))
    store.fail_on.add("photo_like_counts")
    view = loaded_view(store, world["viewer"])
    assert view.get_photo(world["photo"]).likes == 0


def test_like_then_unlike_restores_state(store, world):
    store.photo_likes.add((world["photo"], world["owner"].id))
    view = loaded_view(store, world["viewer"])
    photo = view.get_photo(world["photo"])
    before = (photo.likes, photo.liked_by_viewer)

    run(view.toggle_photo_like(world["photo"]))
    assert (photo.likes, photo.liked_by_viewer) == (2, True)
    run(view.toggle_photo_like(world["photo"]))
    assert (photo.likes, photo.liked_by_viewer) == before
    assert store.photo_likes == {(world["photo"], world["owner"].id)}


def test_failed_like_rolls_back(store, world):
    view = loaded_view(store, world["viewer"])
    photo = view.get_photo(world["photo"])
    store.fail_on.add("add_photo_like")
    with pytest.raises(FeedMutationError):
        run(view.toggle_photo_like(world["photo"]))
    assert (photo.likes, photo.liked_by_viewer) == (0, False)


def test_failed_comment_unlike_rolls_back(store, world):
    cid = store.add_comment(world["photo"], world["owner"], "hi")
    store.comment_likes.add((cid, world["viewer"].id))
    view = loaded_view(store, world["viewer"])
    store.fail_on.add("remove_comment_like")
    with pytest.raises(FeedMutationError):
        run(view.toggle_comment_like(cid))
    comment = view.get_comment(cid)
    assert (comment.likes, comment.liked_by_viewer) == (1, True)


def test_submit_comment_resolves_mentions_in_one_batch(store, world):
    alice = store.add_user("Alice")
    bob = store.add_user("bob")
    view = loaded_view(store, world["viewer"])
    store.calls.clear()

    node = run(view.submit_comment(world["photo"], "great job @alice @BOB @nobody @alice"))
    assert node.mentions == [alice.id, bob.id]
    assert store.calls == ["resolve_handles", "insert_comment"]
    assert view.get_photo(world["photo"]).comments[-1] is node


def test_new_comments_and_replies_are_appended(store, world):
    pid = world["photo"]
    existing = store.add_comment(pid, world["owner"], "existing")
    view = loaded_view(store, world["viewer"])

    top = run(view.submit_comment(pid, "second"))
    reply = run(view.submit_comment(pid, "a reply", parent_id=existing))
    photo = view.get_photo(pid)
    assert [c.id for c in photo.comments] == [existing, top.id]
    assert photo.comments[0].replies == [reply]
    assert photo.comments_count == 3
    assert view.get_comment(reply.id) is reply


def test_reply_to_reply_is_rejected(store, world):
    pid = world["photo"]
    top = store.add_comment(pid, world["owner"], "top")
    reply = store.add_comment(pid, world["viewer"], "reply", parent_id=top)
    view = loaded_view(store, world["viewer"])
    with pytest.raises(FeedError):
        run(view.submit_comment(pid, "deeper", parent_id=reply))
    assert "insert_comment" not in store.calls


def test_empty_comment_is_rejected(store, world):
    view = loaded_view(store, world["viewer"])
    with pytest.raises(FeedError):
        run(view.submit_comment(world["photo"], "   "))


def test_closed_view_discards_load_results(store, world):
    view = FeedView(store, world["viewer"].id)
    store.on_load = view.close
    assert run(view.load()) is False
    assert view.photos == []


def test_mention_search_only_while_typing_a_token(store, world):
    store.add_user("alice")
    store.add_user("alfred")
    store.add_user("bob")
    view = FeedView(store, world["viewer"].id)
    names = [u.username for u in run(view.search_mentions("hi @AL"))]
    assert names == ["alfred", "alice"]
    assert run(view.search_mentions("hi @al done")) == []
    assert run(view.search_mentions("hi @al", limit=1))[0].username == "alfred"


def test_mention_search_failure_returns_empty(store, world):
    store.fail_on.add("search_handles")
    view = FeedView(store, world["viewer"].id)
    assert run(view.search_mentions("@al")) == []


def test_handle_lookup_failure_is_a_mutation_error(store, world):
    view = loaded_view(store, world["viewer"])
    store.fail_on.add("resolve_handles")
    with pytest.raises(FeedMutationError):
        run(view.submit_comment(world["photo"], "nice @owner"))
    assert view.get_photo(world["photo"]).comments == []
    assert "insert_comment" not in store.calls
