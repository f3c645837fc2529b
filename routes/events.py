from typing import Optional

from fastapi import APIRouter, Depends

from database import get_db, now_timestamp, to_db_timestamp
from errors import NotFoundError, ValidationError
from file_utils import serialize_images, validate_images
from queries.events import fetch_all_events_with_meta, fetch_event_with_meta
from queries.replies import add_reply, list_replies
from schemas.events import (
    EventCreate,
    EventEnvelope,
    EventListResponse,
    EventRepliesResponse,
    EventReplyCreated,
    EventUpdate,
)
from schemas.shared import MessageResponse, ReplyCreate
from utils.route_helpers import ensure_exists, ensure_owner, get_current_user_id, require_user
from validation import (
    clean_optional,
    parse_event_time,
    require_text,
    validate_coordinate,
    validate_reply_body,
)

router = APIRouter(prefix="/events", tags=["events"])

TITLE_REQUIRED = "Title is required"


def get_event_response(event_id: int, viewer_id: Optional[int]):
    event = fetch_event_with_meta(event_id, viewer_id)
    if not event:
        raise NotFoundError("Event not found")
    return event


def validate_group_reference(cursor, group_id: Optional[int]) -> Optional[int]:
    if group_id is None:
        return None
    cursor.execute('SELECT 1 FROM "groups" WHERE id = ?', (group_id,))
    if not cursor.fetchone():
        raise ValidationError("Selected group does not exist.")
    return group_id


@router.get("", response_model=EventListResponse)
def list_events(viewer_id: Optional[int] = Depends(get_current_user_id)):
    return {"events": fetch_all_events_with_meta(viewer_id)}


@router.post("", response_model=EventEnvelope, status_code=201)
def create_event(payload: EventCreate, user: dict = Depends(require_user)):
    title = require_text(payload.title, TITLE_REQUIRED)
    event_time = parse_event_time(payload.event_time)
    latitude = validate_coordinate(payload.latitude, "Latitude", 90)
    longitude = validate_coordinate(payload.longitude, "Longitude", 180)
    images = validate_images(payload.images, "event")
    created_at = now_timestamp()

    with get_db() as conn:
        cursor = conn.cursor()
        group_id = validate_group_reference(cursor, payload.group_id)
        cursor.execute("""
            INSERT INTO events
                (creator_id, group_id, title, location, latitude, longitude, description,
                 image_data, rsvp_link, event_time, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            user["id"],
            group_id,
            title,
            clean_optional(payload.location),
            latitude,
            longitude,
            clean_optional(payload.description),
            serialize_images(images),
            clean_optional(payload.rsvp_link),
            to_db_timestamp(event_time),
            created_at,
        ))
        event_id = cursor.lastrowid
        # The creator is attending their own event; committed together with the event row
        cursor.execute(
            "INSERT INTO event_rsvps (event_id, user_id, created_at) VALUES (?, ?, ?)",
            (event_id, user["id"], created_at)
        )
        conn.commit()
    return {"event": get_event_response(event_id, user["id"])}


@router.get("/{event_id}", response_model=EventEnvelope)
def get_event(event_id: int, viewer_id: Optional[int] = Depends(get_current_user_id)):
    return {"event": get_event_response(event_id, viewer_id)}


@router.patch("/{event_id}", response_model=EventEnvelope)
def update_event(event_id: int, payload: EventUpdate, user: dict = Depends(require_user)):
    ensure_owner("Event", event_id, user["id"], "edit")
    changes = payload.model_dump(exclude_unset=True)
    fields = []
    params = []
    if "title" in changes:
        fields.append("title = ?")
        params.append(require_text(payload.title, TITLE_REQUIRED))
    if "event_time" in changes:
        fields.append("event_time = ?")
        params.append(to_db_timestamp(parse_event_time(payload.event_time)))
    if "latitude" in changes:
        fields.append("latitude = ?")
        params.append(validate_coordinate(payload.latitude, "Latitude", 90))
    if "longitude" in changes:
        fields.append("longitude = ?")
        params.append(validate_coordinate(payload.longitude, "Longitude", 180))
    for column in ("location", "description", "rsvp_link"):
        if column in changes:
            fields.append(f"{column} = ?")
            params.append(clean_optional(changes[column]))
    if "images" in changes:
        fields.append("image_data = ?")
        params.append(serialize_images(validate_images(payload.images, "event")))

    with get_db() as conn:
        cursor = conn.cursor()
        if "group_id" in changes:
            fields.append("group_id = ?")
            params.append(validate_group_reference(cursor, payload.group_id))
        if fields:
            params.append(event_id)
            cursor.execute(f"UPDATE events SET {', '.join(fields)} WHERE id = ?", params)
            conn.commit()
    return {"event": get_event_response(event_id, user["id"])}


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event(event_id: int, user: dict = Depends(require_user)):
    ensure_owner("Event", event_id, user["id"], "delete")
    with get_db() as conn:
        conn.execute("DELETE FROM events WHERE id = ?", (event_id,))
        conn.commit()
    return {"message": "Event deleted successfully"}


@router.post("/{event_id}/likes", response_model=EventEnvelope)
def like_event(event_id: int, user: dict = Depends(require_user)):
    ensure_exists("Event", event_id)
    with get_db() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO event_likes (event_id, user_id, created_at) VALUES (?, ?, ?)",
            (event_id, user["id"], now_timestamp())
        )
        conn.commit()
    return {"event": get_event_response(event_id, user["id"])}


@router.delete("/{event_id}/likes", response_model=EventEnvelope)
def unlike_event(event_id: int, user: dict = Depends(require_user)):
    ensure_exists("Event", event_id)
    with get_db() as conn:
        conn.execute("DELETE FROM event_likes WHERE event_id = ? AND user_id = ?", (event_id, user["id"]))
        conn.commit()
    return {"event": get_event_response(event_id, user["id"])}


@router.post("/{event_id}/rsvps", response_model=EventEnvelope)
def rsvp_event(event_id: int, user: dict = Depends(require_user)):
    ensure_exists("Event", event_id)
    with get_db() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO event_rsvps (event_id, user_id, created_at) VALUES (?, ?, ?)",
            (event_id, user["id"], now_timestamp())
        )
        conn.commit()
    return {"event": get_event_response(event_id, user["id"])}


@router.delete("/{event_id}/rsvps", response_model=EventEnvelope)
def cancel_rsvp(event_id: int, user: dict = Depends(require_user)):
    ensure_exists("Event", event_id)
    with get_db() as conn:
        conn.execute("DELETE FROM event_rsvps WHERE event_id = ? AND user_id = ?", (event_id, user["id"]))
        conn.commit()
    return {"event": get_event_response(event_id, user["id"])}


@router.get("/{event_id}/replies", response_model=EventRepliesResponse)
def get_event_replies(event_id: int, viewer_id: Optional[int] = Depends(get_current_user_id)):
    event = get_event_response(event_id, viewer_id)
    return {"replies": list_replies("event", event_id), "event": event}


@router.post("/{event_id}/replies", response_model=EventReplyCreated, status_code=201)
def reply_to_event(event_id: int, payload: ReplyCreate, user: dict = Depends(require_user)):
    body = validate_reply_body(payload.body)
    ensure_exists("Event", event_id)
    reply = add_reply("event", event_id, user["id"], body)
    return {"reply": reply, "event": get_event_response(event_id, user["id"])}
