from datetime import datetime
from typing import Any, List, Literal, Optional

from schemas.shared import CamelModel, ReplyResponse


class PostCreate(CamelModel):
    body: Optional[str] = None
    images: Optional[List[Any]] = None


class PostUpdate(CamelModel):
    body: Optional[str] = None
    images: Optional[List[Any]] = None


class PostResponse(CamelModel):
    id: int
    type: Literal["post"] = "post"
    body: str
    images: List[str] = []
    created_at: datetime
    author_id: int
    author_handle: str
    author_name: Optional[str] = None
    author_avatar_url: Optional[str] = None
    likes_count: int = 0
    replies_count: int = 0
    liked_by_current_user: bool = False


class PostEnvelope(CamelModel):
    post: PostResponse


class PostListResponse(CamelModel):
    posts: List[PostResponse]


class PostRepliesResponse(CamelModel):
    replies: List[ReplyResponse]
    post: PostResponse


class PostReplyCreated(CamelModel):
    reply: ReplyResponse
    post: PostResponse
