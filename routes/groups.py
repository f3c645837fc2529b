import logging
from typing import Optional

from fastapi import APIRouter, Depends

from database import get_db, now_timestamp
from errors import NotFoundError
from file_utils import serialize_images, validate_images, validate_single_image
from queries.groups import fetch_all_groups, fetch_group, get_membership
from schemas.groups import (
    GroupCreate,
    GroupEnvelope,
    GroupListResponse,
    GroupUpdate,
    MembershipResponse,
)
from schemas.shared import MessageResponse
from utils.route_helpers import ensure_exists, ensure_owner, get_current_user_id, require_user
from validation import clean_optional, require_text, validate_website

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups", tags=["groups"])

NAME_REQUIRED = "Group name is required"
ICON_LABEL = "Group icon"
MAX_ICON_MB = 2


def get_group_response(group_id: int):
    group = fetch_group(group_id)
    if not group:
        raise NotFoundError("Group not found")
    return group


@router.get("", response_model=GroupListResponse)
def list_groups():
    return {"groups": fetch_all_groups()}


@router.post("", response_model=GroupEnvelope, status_code=201)
def create_group(payload: GroupCreate, user: dict = Depends(require_user)):
    name = require_text(payload.name, NAME_REQUIRED)
    website_url = validate_website(payload.website_url)
    icon = validate_single_image(payload.icon, ICON_LABEL, MAX_ICON_MB)
    images = validate_images(payload.images, "group")
    created_at = now_timestamp()

    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO "groups"
                (creator_id, name, location, description, website_url, icon_data, image_data, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            user["id"],
            name,
            clean_optional(payload.location),
            clean_optional(payload.description),
            website_url,
            icon,
            serialize_images(images),
            created_at,
        ))
        group_id = cursor.lastrowid
        cursor.execute(
            "INSERT INTO group_members (group_id, user_id, created_at) VALUES (?, ?, ?)",
            (group_id, user["id"], created_at)
        )
        conn.commit()
    logger.info("Group %s created by user %s", group_id, user["id"])
    return {"group": get_group_response(group_id)}


@router.get("/{group_id}", response_model=GroupEnvelope)
def get_group(group_id: int):
    return {"group": get_group_response(group_id)}


@router.patch("/{group_id}", response_model=GroupEnvelope)
def update_group(group_id: int, payload: GroupUpdate, user: dict = Depends(require_user)):
    ensure_owner("Group", group_id, user["id"], "edit")
    changes = payload.model_dump(exclude_unset=True)
    fields = []
    params = []
    if "name" in changes:
        fields.append("name = ?")
        params.append(require_text(payload.name, NAME_REQUIRED))
    if "website_url" in changes:
        fields.append("website_url = ?")
        params.append(validate_website(payload.website_url))
    if "icon" in changes:
        fields.append("icon_data = ?")
        params.append(validate_single_image(payload.icon, ICON_LABEL, MAX_ICON_MB))
    for column in ("location", "description"):
        if column in changes:
            fields.append(f"{column} = ?")
            params.append(clean_optional(changes[column]))
    if "images" in changes:
        fields.append("image_data = ?")
        params.append(serialize_images(validate_images(payload.images, "group")))
    if fields:
        params.append(group_id)
        with get_db() as conn:
            conn.execute(f'UPDATE "groups" SET {", ".join(fields)} WHERE id = ?', params)
            conn.commit()
    return {"group": get_group_response(group_id)}


@router.delete("/{group_id}", response_model=MessageResponse)
def delete_group(group_id: int, user: dict = Depends(require_user)):
    ensure_owner("Group", group_id, user["id"], "delete")
    # Memberships cascade; events keep existing with their group cleared
    with get_db() as conn:
        conn.execute('DELETE FROM "groups" WHERE id = ?', (group_id,))
        conn.commit()
    logger.info("Group %s deleted by user %s", group_id, user["id"])
    return {"message": "Group deleted successfully"}


@router.get("/{group_id}/members", response_model=MembershipResponse)
def get_group_members(group_id: int, viewer_id: Optional[int] = Depends(get_current_user_id)):
    ensure_exists("Group", group_id)
    return get_membership(group_id, viewer_id)


@router.post("/{group_id}/members", response_model=MembershipResponse)
def join_group(group_id: int, user: dict = Depends(require_user)):
    ensure_exists("Group", group_id)
    with get_db() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO group_members (group_id, user_id, created_at) VALUES (?, ?, ?)",
            (group_id, user["id"], now_timestamp())
        )
        conn.commit()
    return get_membership(group_id, user["id"])


@router.delete("/{group_id}/members", response_model=MembershipResponse)
def leave_group(group_id: int, user: dict = Depends(require_user)):
    ensure_exists("Group", group_id)
    with get_db() as conn:
        conn.execute("DELETE FROM group_members WHERE group_id = ? AND user_id = ?", (group_id, user["id"]))
        conn.commit()
    return get_membership(group_id, user["id"])
