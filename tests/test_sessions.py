from datetime import timedelta

from config import settings
from database import get_db, to_db_timestamp, utc_now
from sessions import create_session, get_session_user


def expire_all_sessions():
    with get_db() as conn:
        conn.execute("UPDATE sessions SET expires_at = ?", (to_db_timestamp(utc_now() - timedelta(minutes=1)),))
        conn.commit()


def test_session_expires_after_configured_duration(signup, db):
    _, user = signup()
    token, expires_at = create_session(user["id"])
    row = db("SELECT created_at, expires_at FROM sessions WHERE token = ?", (token,))[0]
    assert row["expires_at"] == to_db_timestamp(expires_at)
    assert expires_at - utc_now() <= timedelta(days=settings.session_duration_days)
    assert expires_at - utc_now() > timedelta(days=settings.session_duration_days) - timedelta(minutes=1)


def test_valid_token_resolves_user(signup):
    _, user = signup()
    token, _ = create_session(user["id"])
    resolved = get_session_user(token)
    assert resolved["id"] == user["id"]
    assert resolved["handle"] == user["handle"]
    assert "expires_at" not in resolved


def test_unknown_or_missing_token_is_anonymous():
    assert get_session_user(None) is None
    assert get_session_user("") is None
    assert get_session_user("f" * 64) is None


def test_expired_session_is_evicted_on_read(signup, db):
    member, user = signup()
    expire_all_sessions()

    response = member.get("/auth/me")

    assert response.json() == {"user": None}
    assert db("SELECT * FROM sessions WHERE user_id = ?", (user["id"],)) == []


def test_expired_session_cannot_mutate(signup):
    member, _ = signup()
    expire_all_sessions()
    response = member.post("/posts", json={"body": "too late"})
    assert response.status_code == 401
    assert response.json() == {"error": "You must be logged in."}


def test_expired_session_cookie_is_cleared_on_401(signup):
    member, _ = signup()
    expire_all_sessions()

    response = member.post("/posts", json={"body": "too late"})

    assert response.status_code == 401
    cleared = response.headers.get("set-cookie")
    assert cleared is not None
    assert cleared.startswith(f"{settings.session_cookie_name}=")
    assert "Max-Age=0" in cleared
