"""Profile endpoints: create/update, unique handles, avatar replacement, search."""

import uuid

from conftest import headers

PNG = b"\x89PNG\r\n\x1a\nfake"


def test_profile_created_on_first_put(client):
    uid = uuid.uuid4()
    h = headers(uid)
    assert client.get("/api/v1/profile/me", headers=h).status_code == 401

    resp = client.put("/api/v1/profile/me", headers=h, json={"username": "newbie", "full_name": "New Bie"})
    assert resp.status_code == 200
    assert resp.json()["id"] == str(uid)
    assert client.get("/api/v1/profile/me", headers=h).json()["full_name"] == "New Bie"


def test_handles_unique_case_insensitive(client, make_profile):
    make_profile("Taken")
    resp = client.put("/api/v1/profile/me", headers=headers(uuid.uuid4()), json={"username": "taken"})
    assert resp.status_code == 409


def test_invalid_handle_rejected(client):
    resp = client.put("/api/v1/profile/me", headers=headers(uuid.uuid4()), json={"username": "no spaces!"})
    assert resp.status_code == 422


def test_avatar_replace_uploads_then_removes_old(client, make_profile, s3_client):
    user = make_profile("avatar_user")
    h = headers(user.id)
    files = {"file": ("me.png", PNG, "image/png")}

    first = client.post("/api/v1/profile/me/avatar", headers=h, files=files).json()
    [first_key] = s3_client.objects
    assert first_key.startswith(f"avatars/{user.id}/")
    assert first["avatar_url"].endswith(f"{first_key}?expires=3600")

    client.post("/api/v1/profile/me/avatar", headers=h, files=files)
    [second_key] = s3_client.objects
    assert second_key != first_key
    assert s3_client.deleted == [first_key]


def test_avatar_size_limit(client, make_profile):
    user = make_profile("big_face")
    resp = client.post(
        "/api/v1/profile/me/avatar",
        headers=headers(user.id),
        files={"file": ("me.png", b"0" * (5 * 1024 * 1024 + 1), "image/png")},
    )
    assert resp.status_code == 400


def test_search_by_prefix(client, make_profile):
    viewer = make_profile("viewer")
    make_profile("sam_one")
    make_profile("Samantha")
    make_profile("bob")
    names = [p["username"] for p in client.get("/api/v1/profile/search", params={"q": "@sam"}, headers=headers(viewer.id)).json()]
    assert sorted(names) == ["Samantha", "sam_one"]
