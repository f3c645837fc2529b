from datetime import datetime
from typing import Optional

from fastapi import Depends, Request, Response

from config import settings
from database import get_db
from errors import AuthError, ForbiddenError, NotFoundError
from sessions import get_session_user

# Entity tables and their owner column, keyed by the name used in messages
OWNED_ENTITIES = {
    "Post": ("posts", "author_id"),
    "Event": ("events", "creator_id"),
    "Group": ('"groups"', "creator_id"),
}


def set_session_cookie(response: Response, token: str, expires_at: datetime):
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        expires=expires_at,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


def clear_session_cookie(response: Response):
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)


def get_current_user(request: Request, response: Response) -> Optional[dict]:
    """Return the signed-in user or None; stale cookies are cleared."""
    token = get_session_token(request)
    user = get_session_user(token)
    if token and user is None:
        clear_session_cookie(response)
        request.state.clear_session = True
    return user


def get_current_user_id(user: Optional[dict] = Depends(get_current_user)) -> Optional[int]:
    return user["id"] if user else None


def require_user(user: Optional[dict] = Depends(get_current_user)) -> dict:
    if not user:
        raise AuthError("You must be logged in.")
    return user


def get_owner_id(entity: str, entity_id: int) -> int:
    """Load the owner of an entity, raising NotFoundError when it is absent."""
    table, owner_column = OWNED_ENTITIES[entity]
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {owner_column} FROM {table} WHERE id = ?", (entity_id,))
        row = cursor.fetchone()
        if not row:
            raise NotFoundError(f"{entity} not found")
        return row[0]


def ensure_owner(entity: str, entity_id: int, user_id: int, action: str) -> None:
    if get_owner_id(entity, entity_id) != user_id:
        raise ForbiddenError(f"Forbidden: You can only {action} your own {entity.lower()}s")


def ensure_exists(entity: str, entity_id: int) -> None:
    get_owner_id(entity, entity_id)
