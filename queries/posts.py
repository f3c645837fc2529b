"""Read models for posts: stored fields plus counts and viewer flags.

The list and detail endpoints both go through ``POSTS_BASE_QUERY`` and
``map_post_row`` so a post looks the same wherever it is returned.
"""
import sqlite3
from typing import List, Optional

from database import get_db
from file_utils import parse_stored_images
from schemas.posts import PostResponse

# Anonymous viewers are bound as NULL and matched against -1, which no user id takes
POSTS_BASE_QUERY = """
    SELECT
        posts.id,
        posts.body,
        posts.image_data,
        posts.created_at,
        posts.author_id,
        users.handle AS author_handle,
        users.name AS author_name,
        users.avatar_url AS author_avatar_url,
        (SELECT COUNT(*) FROM post_likes WHERE post_likes.post_id = posts.id) AS likes_count,
        (SELECT COUNT(*) FROM post_replies WHERE post_replies.post_id = posts.id) AS replies_count,
        EXISTS (
            SELECT 1 FROM post_likes
            WHERE post_likes.post_id = posts.id
              AND post_likes.user_id = COALESCE(?, -1)
        ) AS liked_by_current_user
    FROM posts
    JOIN users ON posts.author_id = users.id
"""


def map_post_row(row: sqlite3.Row) -> PostResponse:
    return PostResponse(
        id=row["id"],
        body=row["body"],
        images=parse_stored_images(row["image_data"]),
        created_at=row["created_at"],
        author_id=row["author_id"],
        author_handle=row["author_handle"],
        author_name=row["author_name"],
        author_avatar_url=row["author_avatar_url"],
        likes_count=row["likes_count"] or 0,
        replies_count=row["replies_count"] or 0,
        liked_by_current_user=bool(row["liked_by_current_user"]),
    )


def fetch_post_with_meta(post_id: int, viewer_id: Optional[int] = None) -> Optional[PostResponse]:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(f"{POSTS_BASE_QUERY} WHERE posts.id = ?", (viewer_id, post_id))
        row = cursor.fetchone()
        return map_post_row(row) if row else None


def fetch_all_posts_with_meta(viewer_id: Optional[int] = None) -> List[PostResponse]:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(f"{POSTS_BASE_QUERY} ORDER BY posts.created_at DESC, posts.id DESC", (viewer_id,))
        return [map_post_row(row) for row in cursor.fetchall()]
