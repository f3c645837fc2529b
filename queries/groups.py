import sqlite3
from typing import List, Optional

from database import get_db
from file_utils import parse_stored_images
from schemas.groups import GroupResponse

GROUPS_BASE_QUERY = """
    SELECT
        "groups".id,
        "groups".name,
        "groups".location,
        "groups".description,
        "groups".website_url,
        "groups".icon_data,
        "groups".image_data,
        "groups".created_at,
        "groups".creator_id,
        users.handle AS creator_handle,
        users.name AS creator_name
    FROM "groups"
    JOIN users ON "groups".creator_id = users.id
"""


def map_group_row(row: sqlite3.Row) -> GroupResponse:
    return GroupResponse(
        id=row["id"],
        name=row["name"],
        location=row["location"],
        description=row["description"],
        website_url=row["website_url"],
        icon=row["icon_data"],
        images=parse_stored_images(row["image_data"]),
        created_at=row["created_at"],
        creator_id=row["creator_id"],
        creator_handle=row["creator_handle"],
        creator_name=row["creator_name"],
    )


def fetch_group(group_id: int) -> Optional[GroupResponse]:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(f'{GROUPS_BASE_QUERY} WHERE "groups".id = ?', (group_id,))
        row = cursor.fetchone()
        return map_group_row(row) if row else None


def fetch_all_groups(creator_id: Optional[int] = None) -> List[GroupResponse]:
    query = GROUPS_BASE_QUERY
    params = []
    if creator_id is not None:
        query += ' WHERE "groups".creator_id = ?'
        params.append(creator_id)
    query += ' ORDER BY "groups".created_at DESC, "groups".id DESC'
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(query, params)
        return [map_group_row(row) for row in cursor.fetchall()]


def fetch_joined_groups(user_id: int) -> List[GroupResponse]:
    """Groups the user belongs to without having created them."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(f"""
            {GROUPS_BASE_QUERY}
            JOIN group_members ON group_members.group_id = "groups".id
            WHERE group_members.user_id = ? AND "groups".creator_id != ?
            ORDER BY group_members.created_at DESC
        """, (user_id, user_id))
        return [map_group_row(row) for row in cursor.fetchall()]


def get_membership(group_id: int, viewer_id: Optional[int]) -> dict:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("""
            SELECT
                (SELECT COUNT(*) FROM group_members WHERE group_id = ?) AS member_count,
                EXISTS (
                    SELECT 1 FROM group_members WHERE group_id = ? AND user_id = COALESCE(?, -1)
                ) AS is_member
        """, (group_id, group_id, viewer_id))
        row = cursor.fetchone()
        return {"member_count": row["member_count"], "is_member": bool(row["is_member"])}
