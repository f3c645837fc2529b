from typing import Optional

from fastapi import APIRouter, Depends

from queries.feed import fetch_feed
from schemas.feed import FeedResponse
from utils.route_helpers import get_current_user_id

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=FeedResponse)
def get_feed(viewer_id: Optional[int] = Depends(get_current_user_id)):
    """Posts and events together, newest first."""
    return {"items": fetch_feed(viewer_id)}
