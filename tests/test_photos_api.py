"""Progress photo endpoints: upload checks, ownership, visibility invariant, delete."""

import pytest
from conftest import headers

from fitplan.core.constants import MAX_PHOTO_BYTES

JPEG = b"\xff\xd8\xff\xe0fake-jpeg"


def upload(client, user, week=1, **form):
    data = {"week_number": str(week), **{k: str(v).lower() if isinstance(v, bool) else v for k, v in form.items()}}
    return client.post(
        "/api/v1/photos",
        headers=headers(user.id),
        files={"file": ("progress.jpg", JPEG, "image/jpeg")},
        data=data,
    )


@pytest.fixture
def owner(make_profile):
    return make_profile("owner")


def test_upload_stores_object_and_returns_signed_url(client, owner, s3_client):
    resp = upload(client, owner, week=3, caption="Week 3")
    assert resp.status_code == 201
    body = resp.json()
    assert body["week_number"] == 3
    assert body["caption"] == "Week 3"
    assert body["is_private"] is False and body["community_visible"] is False
    [key] = s3_client.objects
    assert key.startswith(f"progress-photos/{owner.id}/3/")
    assert body["image_url"].startswith("https://storage.test/fitplan-test/progress-photos/")


def test_non_image_upload_rejected(client, owner, s3_client):
    resp = client.post(
        "/api/v1/photos",
        headers=headers(owner.id),
        files={"file": ("notes.txt", b"hello", "text/plain")},
        data={"week_number": "1"},
    )
    assert resp.status_code == 400
    assert s3_client.objects == {}


def test_oversized_upload_rejected(client, owner):
    resp = client.post(
        "/api/v1/photos",
        headers=headers(owner.id),
        files={"file": ("big.jpg", b"0" * (MAX_PHOTO_BYTES + 1), "image/jpeg")},
        data={"week_number": "1"},
    )
    assert resp.status_code == 400


def test_private_upload_is_never_community_visible(client, owner):
    body = upload(client, owner, is_private=True, community_visible=True).json()
    assert body["is_private"] is True
    assert body["community_visible"] is False


def test_visibility_invariant_over_toggle_sequence(client, owner):
    photo_id = upload(client, owner).json()["id"]
    base = f"/api/v1/photos/{photo_id}"
    h = headers(owner.id)

    body = client.post(f"{base}/community", headers=h).json()
    assert body["community_visible"] is True

    body = client.post(f"{base}/privacy", headers=h).json()
    assert body["is_private"] is True
    assert body["community_visible"] is False

    resp = client.post(f"{base}/community", headers=h)
    assert resp.status_code == 400

    body = client.post(f"{base}/privacy", headers=h).json()
    assert (body["is_private"], body["community_visible"]) == (False, False)

    body = client.post(f"{base}/community", headers=h).json()
    assert (body["is_private"], body["community_visible"]) == (False, True)


def test_other_users_cannot_touch_photo(client, owner, make_profile):
    other = make_profile("other")
    photo_id = upload(client, owner).json()["id"]
    assert client.post(f"/api/v1/photos/{photo_id}/privacy", headers=headers(other.id)).status_code == 404
    assert client.delete(f"/api/v1/photos/{photo_id}", headers=headers(other.id)).status_code == 404
    assert client.get("/api/v1/photos", headers=headers(other.id)).json() == []


def test_gallery_sorted_by_week(client, owner):
    upload(client, owner, week=5)
    upload(client, owner, week=2)
    weeks = [p["week_number"] for p in client.get("/api/v1/photos", headers=headers(owner.id)).json()]
    assert weeks == [2, 5]


def test_delete_removes_row_dependents_and_object(client, owner, make_profile, s3_client):
    fan = make_profile("fan")
    photo_id = upload(client, owner, community_visible=True).json()["id"]
    h_fan = headers(fan.id)
    comment = client.post(
        f"/api/v1/community/photos/{photo_id}/comments", headers=h_fan, json={"content": "nice"}
    ).json()
    client.post(f"/api/v1/community/comments/{comment['id']}/like", headers=headers(owner.id))
    client.post(f"/api/v1/community/photos/{photo_id}/like", headers=h_fan)

    assert client.delete(f"/api/v1/photos/{photo_id}", headers=headers(owner.id)).status_code == 204
    assert s3_client.objects == {}
    assert client.get("/api/v1/photos", headers=headers(owner.id)).json() == []
    assert client.get("/api/v1/community/feed", headers=h_fan).json() == []


def test_requires_identity(client):
    assert client.get("/api/v1/photos").status_code == 401
    assert client.get("/api/v1/photos", headers={"x-user-id": "not-a-uuid"}).status_code == 401
