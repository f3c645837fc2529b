from datetime import datetime
from typing import Any, Optional

from errors import ValidationError

MAX_REPLY_CHARS = 280
MAX_NAME_CHARS = 100
MAX_BIO_CHARS = 500


def clean_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def clean_optional(value: Any) -> Optional[str]:
    """Trim a free-text field, storing blanks as NULL."""
    return clean_text(value) or None


def require_text(value: Any, message: str) -> str:
    cleaned = clean_text(value)
    if not cleaned:
        raise ValidationError(message)
    return cleaned


def validate_reply_body(body: Any) -> str:
    trimmed = clean_text(body)
    if not trimmed:
        raise ValidationError("Reply cannot be empty.")
    if len(trimmed) > MAX_REPLY_CHARS:
        raise ValidationError(f"Replies are limited to {MAX_REPLY_CHARS} characters.")
    return trimmed


def parse_event_time(value: Any) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Valid eventTime is required")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise ValidationError("Valid eventTime is required")


def validate_coordinate(value: Optional[float], label: str, limit: float) -> Optional[float]:
    if value is None:
        return None
    if not -limit <= value <= limit:
        raise ValidationError(f"{label} must be between -{limit:g} and {limit:g}.")
    return value


def validate_website(value: Any) -> Optional[str]:
    cleaned = clean_optional(value)
    if cleaned and not cleaned.startswith(("http://", "https://")):
        raise ValidationError("Website must start with http:// or https://")
    return cleaned


def validate_profile_name(value: Any) -> str:
    name = require_text(value, "Name cannot be empty.")
    if len(name) > MAX_NAME_CHARS:
        raise ValidationError(f"Name must be {MAX_NAME_CHARS} characters or less.")
    return name


def validate_bio(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Bio must be a string.")
    if len(value) > MAX_BIO_CHARS:
        raise ValidationError(f"Bio must be {MAX_BIO_CHARS} characters or less.")
    return value.strip() or None
