"""Read models for events, mirroring queries.posts with RSVP data added."""
import sqlite3
from typing import List, Optional

from database import get_db
from file_utils import parse_stored_images
from schemas.events import EventResponse

EVENTS_BASE_QUERY = """
    SELECT
        events.id,
        events.title,
        events.description,
        events.location,
        events.latitude,
        events.longitude,
        events.event_time,
        events.rsvp_link,
        events.image_data,
        events.created_at,
        events.creator_id,
        events.group_id,
        users.handle AS creator_handle,
        users.name AS creator_name,
        "groups".name AS group_name,
        (SELECT COUNT(*) FROM event_likes WHERE event_likes.event_id = events.id) AS likes_count,
        (SELECT COUNT(*) FROM event_replies WHERE event_replies.event_id = events.id) AS replies_count,
        (SELECT COUNT(*) FROM event_rsvps WHERE event_rsvps.event_id = events.id) AS rsvp_count,
        EXISTS (
            SELECT 1 FROM event_likes
            WHERE event_likes.event_id = events.id
              AND event_likes.user_id = COALESCE(?, -1)
        ) AS liked_by_current_user,
        EXISTS (
            SELECT 1 FROM event_rsvps
            WHERE event_rsvps.event_id = events.id
              AND event_rsvps.user_id = COALESCE(?, -1)
        ) AS rsvpd_by_current_user
    FROM events
    JOIN users ON events.creator_id = users.id
    LEFT JOIN "groups" ON events.group_id = "groups".id
"""


def map_event_row(row: sqlite3.Row) -> EventResponse:
    return EventResponse(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        location=row["location"],
        latitude=row["latitude"],
        longitude=row["longitude"],
        event_time=row["event_time"],
        rsvp_link=row["rsvp_link"],
        images=parse_stored_images(row["image_data"]),
        created_at=row["created_at"],
        creator_id=row["creator_id"],
        creator_handle=row["creator_handle"],
        creator_name=row["creator_name"],
        group_id=row["group_id"],
        group_name=row["group_name"],
        likes_count=row["likes_count"] or 0,
        replies_count=row["replies_count"] or 0,
        rsvp_count=row["rsvp_count"] or 0,
        liked_by_current_user=bool(row["liked_by_current_user"]),
        rsvpd_by_current_user=bool(row["rsvpd_by_current_user"]),
    )


def fetch_event_with_meta(event_id: int, viewer_id: Optional[int] = None) -> Optional[EventResponse]:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(f"{EVENTS_BASE_QUERY} WHERE events.id = ?", (viewer_id, viewer_id, event_id))
        row = cursor.fetchone()
        return map_event_row(row) if row else None


def fetch_all_events_with_meta(viewer_id: Optional[int] = None, creator_id: Optional[int] = None,
                               group_id: Optional[int] = None) -> List[EventResponse]:
    conditions = []
    params = [viewer_id, viewer_id]
    if creator_id is not None:
        conditions.append("events.creator_id = ?")
        params.append(creator_id)
    if group_id is not None:
        conditions.append("events.group_id = ?")
        params.append(group_id)
    query = EVENTS_BASE_QUERY
    if conditions:
        query += " WHERE " + " AND ".join(conditions)
    query += " ORDER BY events.created_at DESC, events.id DESC"
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(query, params)
        return [map_event_row(row) for row in cursor.fetchall()]
