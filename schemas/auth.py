from datetime import datetime
from typing import Optional

from schemas.shared import CamelModel


class SignupRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ChangePasswordRequest(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class UserResponse(CamelModel):
    id: int
    name: Optional[str] = None
    handle: str
    email: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime


class UserEnvelope(CamelModel):
    user: UserResponse


class CurrentUserEnvelope(CamelModel):
    user: Optional[UserResponse] = None
