from datetime import datetime
from typing import List, Optional

from schemas.events import EventResponse
from schemas.groups import GroupResponse
from schemas.shared import CamelModel


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


class PublicUserResponse(CamelModel):
    id: int
    name: Optional[str] = None
    handle: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime


class PublicProfileResponse(CamelModel):
    user: PublicUserResponse
    events: List[EventResponse]
    groups: List[GroupResponse]
    member_groups: List[GroupResponse]
