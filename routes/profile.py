from fastapi import APIRouter, Depends

from database import get_db
from errors import NotFoundError, ValidationError
from file_utils import MAX_AVATAR_MB, validate_single_image
from schemas.auth import UserEnvelope
from schemas.profile import ProfileUpdate
from sessions import USER_COLUMNS
from utils.route_helpers import require_user
from validation import validate_bio, validate_profile_name

router = APIRouter(prefix="/profile", tags=["profile"])


def get_user_row(user_id: int) -> dict:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,))
        row = cursor.fetchone()
        if not row:
            raise NotFoundError("User not found")
        return dict(row)


@router.get("", response_model=UserEnvelope)
def get_profile(user: dict = Depends(require_user)):
    return {"user": get_user_row(user["id"])}


@router.patch("", response_model=UserEnvelope)
def update_profile(payload: ProfileUpdate, user: dict = Depends(require_user)):
    """Update the signed-in user's name, bio or avatar.

    Only supplied fields change. An empty bio or avatar clears the stored value.
    """
    changes = payload.model_dump(exclude_unset=True)
    fields = []
    params = []
    if "name" in changes:
        fields.append("name = ?")
        params.append(validate_profile_name(payload.name))
    if "bio" in changes:
        fields.append("bio = ?")
        params.append(validate_bio(payload.bio))
    if "avatar_url" in changes:
        fields.append("avatar_url = ?")
        params.append(validate_single_image(payload.avatar_url, "Avatar", MAX_AVATAR_MB))

    if not fields:
        raise ValidationError("No fields to update.")

    params.append(user["id"])
    with get_db() as conn:
        conn.execute(f"UPDATE users SET {', '.join(fields)} WHERE id = ?", params)
        conn.commit()
    return {"user": get_user_row(user["id"])}
