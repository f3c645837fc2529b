import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from auth import generate_session_token
from config import settings
from database import get_db, to_db_timestamp, utc_now

logger = logging.getLogger(__name__)

USER_COLUMNS = "users.id, users.name, users.handle, users.email, users.bio, users.avatar_url, users.created_at"


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def create_session(user_id: int, conn=None) -> tuple[str, datetime]:
    """Persist a new session and return its token and absolute expiry.

    Pass ``conn`` to write inside a caller's transaction; the caller commits.
    """
    token = generate_session_token()
    created_at = utc_now()
    expires_at = created_at + timedelta(days=settings.session_duration_days)
    params = (user_id, token, to_db_timestamp(created_at), to_db_timestamp(expires_at))
    query = "INSERT INTO sessions (user_id, token, created_at, expires_at) VALUES (?, ?, ?, ?)"
    if conn is not None:
        conn.execute(query, params)
    else:
        with get_db() as own_conn:
            own_conn.execute(query, params)
            own_conn.commit()
    return token, expires_at


def delete_session(token: str) -> None:
    with get_db() as conn:
        conn.execute("DELETE FROM sessions WHERE token = ?", (token,))
        conn.commit()


def delete_other_sessions(user_id: int, keep_token: Optional[str], conn) -> int:
    cursor = conn.execute(
        "DELETE FROM sessions WHERE user_id = ? AND token != ?",
        (user_id, keep_token or ""),
    )
    return cursor.rowcount


def get_session_user(token: Optional[str]) -> Optional[dict]:
    """Resolve a session token to its user row, evicting it if expired."""
    if not token:
        return None
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(f"""
            SELECT {USER_COLUMNS}, sessions.expires_at
            FROM sessions
            JOIN users ON sessions.user_id = users.id
            WHERE sessions.token = ?
        """, (token,))
        row = cursor.fetchone()
        if not row:
            return None
        if _parse_timestamp(row["expires_at"]) < utc_now():
            cursor.execute("DELETE FROM sessions WHERE token = ?", (token,))
            conn.commit()
            logger.info("Evicted expired session for user %s", row["id"])
            return None
        return {key: row[key] for key in row.keys() if key != "expires_at"}
