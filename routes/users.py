from typing import Optional

from fastapi import APIRouter, Depends

from database import get_db
from errors import NotFoundError
from queries.events import fetch_all_events_with_meta
from queries.groups import fetch_all_groups, fetch_joined_groups
from schemas.profile import PublicProfileResponse
from utils.route_helpers import get_current_user_id

router = APIRouter(prefix="/users", tags=["users"])


def get_public_user(user_id: int) -> dict:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT id, name, handle, bio, avatar_url, created_at FROM users WHERE id = ?",
            (user_id,)
        )
        row = cursor.fetchone()
        if not row:
            raise NotFoundError("User not found")
        return dict(row)


@router.get("/{user_id}", response_model=PublicProfileResponse)
def get_user_profile(user_id: int, viewer_id: Optional[int] = Depends(get_current_user_id)):
    """Public profile: the user without their email, plus what they organise and join."""
    user = get_public_user(user_id)
    return {
        "user": user,
        "events": fetch_all_events_with_meta(viewer_id, creator_id=user_id),
        "groups": fetch_all_groups(creator_id=user_id),
        "member_groups": fetch_joined_groups(user_id),
    }
