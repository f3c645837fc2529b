from typing import Optional

from fastapi import APIRouter, Depends

from database import get_db, now_timestamp
from errors import NotFoundError
from file_utils import serialize_images, validate_images
from queries.posts import fetch_all_posts_with_meta, fetch_post_with_meta
from queries.replies import add_reply, list_replies
from schemas.posts import (
    PostCreate,
    PostEnvelope,
    PostListResponse,
    PostRepliesResponse,
    PostReplyCreated,
    PostUpdate,
)
from schemas.shared import MessageResponse, ReplyCreate
from utils.route_helpers import ensure_exists, ensure_owner, get_current_user_id, require_user
from validation import require_text, validate_reply_body

router = APIRouter(prefix="/posts", tags=["posts"])

POST_BODY_REQUIRED = "Post body is required."


def get_post_response(post_id: int, viewer_id: Optional[int]):
    post = fetch_post_with_meta(post_id, viewer_id)
    if not post:
        raise NotFoundError("Post not found")
    return post


@router.get("", response_model=PostListResponse)
def list_posts(viewer_id: Optional[int] = Depends(get_current_user_id)):
    return {"posts": fetch_all_posts_with_meta(viewer_id)}


@router.post("", response_model=PostEnvelope, status_code=201)
def create_post(payload: PostCreate, user: dict = Depends(require_user)):
    body = require_text(payload.body, POST_BODY_REQUIRED)
    images = validate_images(payload.images, "post")
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "INSERT INTO posts (author_id, body, image_data, created_at) VALUES (?, ?, ?, ?)",
            (user["id"], body, serialize_images(images), now_timestamp())
        )
        post_id = cursor.lastrowid
        conn.commit()
    return {"post": get_post_response(post_id, user["id"])}


@router.get("/{post_id}", response_model=PostEnvelope)
def get_post(post_id: int, viewer_id: Optional[int] = Depends(get_current_user_id)):
    return {"post": get_post_response(post_id, viewer_id)}


@router.patch("/{post_id}", response_model=PostEnvelope)
def edit_post(post_id: int, payload: PostUpdate, user: dict = Depends(require_user)):
    ensure_owner("Post", post_id, user["id"], "edit")
    changes = payload.model_dump(exclude_unset=True)
    fields = []
    params = []
    if "body" in changes:
        fields.append("body = ?")
        params.append(require_text(payload.body, POST_BODY_REQUIRED))
    if "images" in changes:
        fields.append("image_data = ?")
        params.append(serialize_images(validate_images(payload.images, "post")))
    if fields:
        params.append(post_id)
        with get_db() as conn:
            conn.execute(f"UPDATE posts SET {', '.join(fields)} WHERE id = ?", params)
            conn.commit()
    return {"post": get_post_response(post_id, user["id"])}


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(post_id: int, user: dict = Depends(require_user)):
    ensure_owner("Post", post_id, user["id"], "delete")
    # Likes and replies go with it through ON DELETE CASCADE
    with get_db() as conn:
        conn.execute("DELETE FROM posts WHERE id = ?", (post_id,))
        conn.commit()
    return {"message": "Post deleted successfully"}


@router.post("/{post_id}/likes", response_model=PostEnvelope)
def like_post(post_id: int, user: dict = Depends(require_user)):
    ensure_exists("Post", post_id)
    with get_db() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO post_likes (post_id, user_id, created_at) VALUES (?, ?, ?)",
            (post_id, user["id"], now_timestamp())
        )
        conn.commit()
    return {"post": get_post_response(post_id, user["id"])}


@router.delete("/{post_id}/likes", response_model=PostEnvelope)
def unlike_post(post_id: int, user: dict = Depends(require_user)):
    ensure_exists("Post", post_id)
    with get_db() as conn:
        conn.execute("DELETE FROM post_likes WHERE post_id = ? AND user_id = ?", (post_id, user["id"]))
        conn.commit()
    return {"post": get_post_response(post_id, user["id"])}


@router.get("/{post_id}/replies", response_model=PostRepliesResponse)
def get_post_replies(post_id: int, viewer_id: Optional[int] = Depends(get_current_user_id)):
    post = get_post_response(post_id, viewer_id)
    return {"replies": list_replies("post", post_id), "post": post}


@router.post("/{post_id}/replies", response_model=PostReplyCreated, status_code=201)
def reply_to_post(post_id: int, payload: ReplyCreate, user: dict = Depends(require_user)):
    body = validate_reply_body(payload.body)
    ensure_exists("Post", post_id)
    reply = add_reply("post", post_id, user["id"], body)
    return {"reply": reply, "post": get_post_response(post_id, user["id"])}
