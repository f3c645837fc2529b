from typing import Annotated, List, Union

from pydantic import Field

from schemas.events import EventResponse
from schemas.posts import PostResponse
from schemas.shared import CamelModel

FeedItem = Annotated[Union[PostResponse, EventResponse], Field(discriminator="type")]


class FeedResponse(CamelModel):
    items: List[FeedItem]
