from typing import List, Optional, Union

from queries.events import fetch_all_events_with_meta
from queries.posts import fetch_all_posts_with_meta
from schemas.events import EventResponse
from schemas.posts import PostResponse


def merge_feed(posts: List[PostResponse], events: List[EventResponse]) -> List[Union[PostResponse, EventResponse]]:
    """Interleave posts and events newest first; the sort is stable for ties."""
    combined: List[Union[PostResponse, EventResponse]] = [*posts, *events]
    return sorted(combined, key=lambda item: item.created_at, reverse=True)


def fetch_feed(viewer_id: Optional[int] = None) -> List[Union[PostResponse, EventResponse]]:
    # TODO: cursor pagination on (created_at, type, id) once the feed outgrows full materialization
    return merge_feed(fetch_all_posts_with_meta(viewer_id), fetch_all_events_with_meta(viewer_id))
