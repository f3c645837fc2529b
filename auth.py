import re
import secrets
from typing import Iterator, Optional

from passlib.context import CryptContext

from config import settings

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

SESSION_TOKEN_BYTES = 32
HANDLE_MAX_LENGTH = 20
DEFAULT_HANDLE = "earthling"
MAX_NUMBERED_HANDLES = 1000

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def generate_session_token() -> str:
    """64 hex characters of unguessable randomness."""
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def normalize_handle(value: Optional[str]) -> str:
    if not value:
        return ""
    return _NON_ALPHANUMERIC.sub("", value.lower())[:HANDLE_MAX_LENGTH]


def base_handle(name: Optional[str], email: Optional[str]) -> str:
    local_part = (email or "").split("@")[0]
    return normalize_handle(name) or normalize_handle(local_part) or DEFAULT_HANDLE


def handle_candidates(base: str) -> Iterator[str]:
    """Yield base, base1, base2, ... and fall back to random suffixes.

    The numbered run is bounded; after it the candidates carry entropy so a
    crowded base cannot spin forever. Uniqueness itself is enforced by the
    users.handle constraint, callers move to the next candidate on conflict.
    """
    yield base
    for suffix in range(1, MAX_NUMBERED_HANDLES + 1):
        yield f"{base}{suffix}"
    while True:
        yield f"{base}{secrets.token_hex(3)}"
