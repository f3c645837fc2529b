from typing import Optional

from fastapi import APIRouter, Depends

from database import get_db
from errors import ValidationError
from schemas.search import EventSearchResult, GroupSearchResult, SearchResponse, UserSearchResult
from utils.route_helpers import get_current_user_id

router = APIRouter(prefix="/search", tags=["search"])

MIN_QUERY_LENGTH = 2
RESULT_LIMIT = 20
SEARCH_TYPES = ("events", "groups", "users")


def like_pattern(query: str) -> str:
    """Substring LIKE pattern with the wildcard characters escaped by backslash."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def search_events(cursor, pattern: str):
    cursor.execute("""
        SELECT
            events.id,
            events.title,
            events.description,
            events.location,
            events.event_time,
            events.creator_id,
            users.name AS creator_name,
            users.handle AS creator_handle,
            "groups".name AS group_name,
            (SELECT COUNT(*) FROM event_rsvps WHERE event_rsvps.event_id = events.id) AS rsvp_count
        FROM events
        JOIN users ON events.creator_id = users.id
        LEFT JOIN "groups" ON events.group_id = "groups".id
        WHERE events.title LIKE ? ESCAPE '\\'
           OR events.description LIKE ? ESCAPE '\\'
           OR events.location LIKE ? ESCAPE '\\'
        ORDER BY events.event_time DESC, events.id DESC
        LIMIT ?
    """, (pattern, pattern, pattern, RESULT_LIMIT))
    return [EventSearchResult(**dict(row)) for row in cursor.fetchall()]


def search_groups(cursor, pattern: str, viewer_id: Optional[int]):
    cursor.execute("""
        SELECT
            "groups".id,
            "groups".name,
            "groups".description,
            "groups".location,
            "groups".icon_data AS icon,
            users.name AS creator_name,
            (SELECT COUNT(*) FROM group_members WHERE group_members.group_id = "groups".id) AS member_count,
            EXISTS (
                SELECT 1 FROM group_members
                WHERE group_members.group_id = "groups".id
                  AND group_members.user_id = COALESCE(?, -1)
            ) AS is_member
        FROM "groups"
        JOIN users ON "groups".creator_id = users.id
        WHERE "groups".name LIKE ? ESCAPE '\\'
           OR "groups".description LIKE ? ESCAPE '\\'
           OR "groups".location LIKE ? ESCAPE '\\'
        ORDER BY "groups".created_at DESC, "groups".id DESC
        LIMIT ?
    """, (viewer_id, pattern, pattern, pattern, RESULT_LIMIT))
    return [GroupSearchResult(**dict(row)) for row in cursor.fetchall()]


def search_users(cursor, pattern: str):
    cursor.execute("""
        SELECT id, name, handle, bio, avatar_url
        FROM users
        WHERE name LIKE ? ESCAPE '\\' OR handle LIKE ? ESCAPE '\\'
        ORDER BY name COLLATE NOCASE ASC, id ASC
        LIMIT ?
    """, (pattern, pattern, RESULT_LIMIT))
    return [UserSearchResult(**dict(row)) for row in cursor.fetchall()]


@router.get("", response_model=SearchResponse)
def search(q: str = "", type: Optional[str] = None, viewer_id: Optional[int] = Depends(get_current_user_id)):
    """Search events, groups and people by substring.

    ``type`` narrows the search to one category; the response always carries
    all three lists.
    """
    if type is not None and type not in SEARCH_TYPES:
        raise ValidationError(f"type must be one of: {', '.join(SEARCH_TYPES)}")

    query = q.strip()
    results = {"events": [], "groups": [], "users": []}
    if len(query) < MIN_QUERY_LENGTH:
        return results

    pattern = like_pattern(query)
    with get_db() as conn:
        cursor = conn.cursor()
        if type in (None, "events"):
            results["events"] = search_events(cursor, pattern)
        if type in (None, "groups"):
            results["groups"] = search_groups(cursor, pattern, viewer_id)
        if type in (None, "users"):
            results["users"] = search_users(cursor, pattern)
    return results
