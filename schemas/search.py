from datetime import datetime
from typing import List, Optional

from schemas.shared import CamelModel


class EventSearchResult(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    event_time: datetime
    creator_id: int
    creator_name: Optional[str] = None
    creator_handle: str
    group_name: Optional[str] = None
    rsvp_count: int = 0


class GroupSearchResult(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    icon: Optional[str] = None
    creator_name: Optional[str] = None
    member_count: int = 0
    is_member: bool = False


class UserSearchResult(CamelModel):
    id: int
    name: Optional[str] = None
    handle: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


class SearchResponse(CamelModel):
    events: List[EventSearchResult] = []
    groups: List[GroupSearchResult] = []
    users: List[UserSearchResult] = []
