import sqlite3

import routes.feed
import routes.posts
from errors import InternalError


def test_unknown_route_uses_error_shape(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_wrong_method_uses_error_shape(client):
    response = client.put("/feed")
    assert response.status_code == 405
    assert "error" in response.json()


def test_malformed_json_is_a_400(signup):
    member, _ = signup()
    response = member.post("/posts", content="{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert set(response.json()) == {"error"}


def test_non_integer_id_is_a_400(client):
    response = client.get("/posts/abc")
    assert response.status_code == 400
    assert response.json()["error"].startswith("post_id:")


def test_database_errors_become_500(client, monkeypatch):
    def failing(viewer_id=None):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(routes.posts, "fetch_all_posts_with_meta", failing)
    response = client.get("/posts")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "message": "disk I/O error"}


def test_internal_error_renders_as_500(client, monkeypatch):
    def failing(viewer_id=None):
        raise InternalError("Internal server error", "feed unavailable")

    monkeypatch.setattr(routes.feed, "fetch_feed", failing)
    response = client.get("/feed")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "message": "feed unavailable"}
