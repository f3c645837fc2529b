import logging
import sqlite3
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response

from auth import (
    base_handle,
    handle_candidates,
    hash_password,
    normalize_email,
    verify_password,
)
from database import get_db, now_timestamp
from errors import AuthError, ConflictError, ValidationError
from schemas.auth import (
    ChangePasswordRequest,
    CurrentUserEnvelope,
    LoginRequest,
    SignupRequest,
    UserEnvelope,
)
from schemas.shared import MessageResponse
from sessions import create_session, delete_other_sessions, delete_session
from utils.route_helpers import (
    clear_session_cookie,
    get_current_user,
    get_session_token,
    require_user,
    set_session_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Invalid email or password."


def get_user_by_email(email: str, include_password=False):
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT id, name, handle, email, bio, avatar_url, created_at, password_hash FROM users WHERE email = ? LIMIT 1",
            (email,)
        )
        row = cursor.fetchone()
        if not row:
            return None
        user = dict(row)
        if not include_password:
            user.pop("password_hash")
        return user


def email_exists(email: str) -> bool:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT 1 FROM users WHERE email = ?", (email,))
        return cursor.fetchone() is not None


def handle_exists(cursor, handle: str) -> bool:
    cursor.execute("SELECT 1 FROM users WHERE handle = ?", (handle,))
    return cursor.fetchone() is not None


def insert_user_with_unique_handle(name: str, email: str, password_hash: str):
    """Insert a user under the first free handle and open their session.

    The handle pre-check only skips known collisions; a concurrent signup that
    claims the same handle first surfaces as an IntegrityError on
    users.handle, and the next candidate is tried.
    """
    created_at = now_timestamp()
    for handle in handle_candidates(base_handle(name, email)):
        with get_db() as conn:
            cursor = conn.cursor()
            if handle_exists(cursor, handle):
                continue
            try:
                cursor.execute(
                    "INSERT INTO users (handle, name, email, password_hash, created_at) VALUES (?, ?, ?, ?, ?)",
                    (handle, name, email, password_hash, created_at)
                )
            except sqlite3.IntegrityError as exc:
                if "users.email" in str(exc):
                    raise ConflictError("An account with this email already exists.")
                if "users.handle" in str(exc):
                    continue
                raise
            user_id = cursor.lastrowid
            token, expires_at = create_session(user_id, conn=conn)
            conn.commit()
            return user_id, handle, created_at, token, expires_at


@router.post("/signup", response_model=UserEnvelope, status_code=201)
def signup(payload: SignupRequest, response: Response):
    name = (payload.name or "").strip()
    email = normalize_email(payload.email)
    password = (payload.password or "").strip()

    if len(name) < MIN_NAME_LENGTH:
        raise ValidationError("Please provide your full name.")
    if not email or "@" not in email:
        raise ValidationError("Please provide a valid email address.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")

    if email_exists(email):
        raise ConflictError("An account with this email already exists.")

    user_id, handle, created_at, token, expires_at = insert_user_with_unique_handle(
        name, email, hash_password(password)
    )
    set_session_cookie(response, token, expires_at)
    logger.info("New account %s created with handle %s", user_id, handle)
    return {
        "user": {
            "id": user_id,
            "name": name,
            "handle": handle,
            "email": email,
            "bio": None,
            "avatar_url": None,
            "created_at": created_at,
        }
    }


@router.post("/login", response_model=UserEnvelope)
def login(payload: LoginRequest, response: Response):
    email = normalize_email(payload.email)
    password = (payload.password or "").strip()

    if not email:
        raise ValidationError("Email is required.")
    if not password:
        raise ValidationError("Password is required.")

    user = get_user_by_email(email, include_password=True)
    if not user or not verify_password(password, user.pop("password_hash")):
        logger.warning("Failed login for %s", email)
        raise AuthError(INVALID_CREDENTIALS)

    token, expires_at = create_session(user["id"])
    set_session_cookie(response, token, expires_at)
    return {"user": user}


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response):
    token = get_session_token(request)
    if token:
        delete_session(token)
    clear_session_cookie(response)
    return {"message": "Logged out successfully."}


@router.post("/change-password", response_model=MessageResponse)
def change_password(payload: ChangePasswordRequest, request: Request, user: dict = Depends(require_user)):
    current_password = (payload.current_password or "").strip()
    new_password = (payload.new_password or "").strip()

    if not current_password or not new_password:
        raise ValidationError("Current password and new password are required.")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters.")

    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT password_hash FROM users WHERE id = ?", (user["id"],))
        row = cursor.fetchone()
        if not row or not verify_password(current_password, row["password_hash"]):
            raise ValidationError("Current password is incorrect.")
        cursor.execute("UPDATE users SET password_hash = ? WHERE id = ?", (hash_password(new_password), user["id"]))
        revoked = delete_other_sessions(user["id"], get_session_token(request), conn)
        conn.commit()

    logger.info("Password changed for user %s; %d other session(s) revoked", user["id"], revoked)
    return {"message": "Password changed successfully."}


@router.get("/me", response_model=CurrentUserEnvelope)
def me(user: Optional[dict] = Depends(get_current_user)):
    return {"user": user}
