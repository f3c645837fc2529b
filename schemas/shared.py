from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    message: str


class ReplyCreate(CamelModel):
    body: str | None = None


class ReplyResponse(CamelModel):
    id: int
    body: str
    created_at: datetime
    author_id: int
    author_name: str | None = None
    author_handle: str
