import pytest

from conftest import TINY_IMAGE, image_of_size


def test_get_profile_requires_login(client):
    assert client.get("/profile").status_code == 401


def test_get_profile_returns_current_user(signup):
    member, user = signup()
    assert member.get("/profile").json()["user"] == user


def test_update_profile_fields(signup):
    member, _ = signup()
    response = member.patch("/profile", json={"name": " Ada King ", "bio": " Counting ", "avatarUrl": TINY_IMAGE})
    user = response.json()["user"]
    assert user["name"] == "Ada King"
    assert user["bio"] == "Counting"
    assert user["avatarUrl"] == TINY_IMAGE
    assert member.get("/auth/me").json()["user"]["name"] == "Ada King"


def test_empty_values_clear_bio_and_avatar(signup):
    member, _ = signup()
    member.patch("/profile", json={"bio": "hello", "avatarUrl": TINY_IMAGE})
    user = member.patch("/profile", json={"bio": "", "avatarUrl": None}).json()["user"]
    assert user["bio"] is None
    assert user["avatarUrl"] is None


@pytest.mark.parametrize("payload, message", [
    ({}, "No fields to update."),
    ({"name": "   "}, "Name cannot be empty."),
    ({"name": "n" * 101}, "Name must be 100 characters or less."),
    ({"bio": "b" * 501}, "Bio must be 500 characters or less."),
    ({"avatarUrl": "https://example.com/me.png"}, "Avatar must be an image file."),
])
def test_profile_validation(signup, payload, message):
    member, _ = signup()
    response = member.patch("/profile", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_avatar_size_limit(signup):
    member, _ = signup()
    response = member.patch("/profile", json={"avatarUrl": image_of_size(int(1.5 * 1024 * 1024))})
    assert response.json() == {"error": "Avatar must be smaller than 1MB."}


def test_new_avatar_shows_on_posts(signup, create_post):
    member, _ = signup()
    post = create_post(member)
    member.patch("/profile", json={"avatarUrl": TINY_IMAGE})
    assert member.get(f"/posts/{post['id']}").json()["post"]["authorAvatarUrl"] == TINY_IMAGE
