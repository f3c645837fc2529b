from datetime import datetime
from typing import Any, List, Optional

from schemas.shared import CamelModel


class GroupCreate(CamelModel):
    name: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    website_url: Optional[str] = None
    icon: Optional[str] = None
    images: Optional[List[Any]] = None


class GroupUpdate(GroupCreate):
    pass


class GroupResponse(CamelModel):
    id: int
    name: str
    location: Optional[str] = None
    description: Optional[str] = None
    website_url: Optional[str] = None
    icon: Optional[str] = None
    images: List[str] = []
    created_at: datetime
    creator_id: int
    creator_handle: str
    creator_name: Optional[str] = None


class GroupEnvelope(CamelModel):
    group: GroupResponse


class GroupListResponse(CamelModel):
    groups: List[GroupResponse]


class MembershipResponse(CamelModel):
    member_count: int
    is_member: bool
