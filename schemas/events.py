from datetime import datetime
from typing import Any, List, Literal, Optional

from schemas.shared import CamelModel, ReplyResponse


class EventCreate(CamelModel):
    title: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    description: Optional[str] = None
    event_time: Optional[str] = None
    group_id: Optional[int] = None
    rsvp_link: Optional[str] = None
    images: Optional[List[Any]] = None


class EventUpdate(EventCreate):
    """Same fields as creation; only the ones sent are changed."""


class EventResponse(CamelModel):
    id: int
    type: Literal["event"] = "event"
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    event_time: datetime
    rsvp_link: Optional[str] = None
    images: List[str] = []
    created_at: datetime
    creator_id: int
    creator_handle: str
    creator_name: Optional[str] = None
    group_id: Optional[int] = None
    group_name: Optional[str] = None
    likes_count: int = 0
    replies_count: int = 0
    rsvp_count: int = 0
    liked_by_current_user: bool = False
    rsvpd_by_current_user: bool = False


class EventEnvelope(CamelModel):
    event: EventResponse


class EventListResponse(CamelModel):
    events: List[EventResponse]


class EventRepliesResponse(CamelModel):
    replies: List[ReplyResponse]
    event: EventResponse


class EventReplyCreated(CamelModel):
    reply: ReplyResponse
    event: EventResponse
