import json
from typing import Any, List, Optional

from errors import ValidationError

# Configuration
IMAGE_PREFIX = "data:image/"
MAX_IMAGES = 4
MAX_IMAGE_MB = 2
MAX_AVATAR_MB = 1


def is_image_data(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(IMAGE_PREFIX)


def approximate_image_bytes(data_uri: str) -> float:
    """Decoded size of a base64 data URI, estimated from its payload length."""
    parts = data_uri.split(",", 1)
    payload = parts[1] if len(parts) > 1 else ""
    return len(payload) * 3 / 4


def validate_images(images: Optional[List[Any]], noun: str, max_count: int = MAX_IMAGES,
                    max_mb: int = MAX_IMAGE_MB) -> List[str]:
    """Check an uploaded image list and return the trimmed data URIs."""
    incoming = images if isinstance(images, list) else []
    if len(incoming) > max_count:
        raise ValidationError(f"You can upload up to {max_count} images per {noun}.")
    max_bytes = max_mb * 1024 * 1024
    sanitized = []
    for image in incoming:
        if not isinstance(image, str):
            raise ValidationError("Each image must be a base64 encoded string.")
        trimmed = image.strip()
        if not trimmed.startswith(IMAGE_PREFIX):
            raise ValidationError("Only image files are supported.")
        if approximate_image_bytes(trimmed) > max_bytes:
            raise ValidationError(f"Images must be smaller than {max_mb}MB.")
        sanitized.append(trimmed)
    return sanitized


def validate_single_image(value: Any, label: str, max_mb: int) -> Optional[str]:
    """Validate an avatar or icon; empty or missing values clear it."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a valid image.")
    trimmed = value.strip()
    if not trimmed:
        return None
    if not trimmed.startswith(IMAGE_PREFIX):
        raise ValidationError(f"{label} must be an image file.")
    if approximate_image_bytes(trimmed) > max_mb * 1024 * 1024:
        raise ValidationError(f"{label} must be smaller than {max_mb}MB.")
    return trimmed


def serialize_images(images: List[str]) -> Optional[str]:
    return json.dumps(images) if images else None


def parse_stored_images(image_data: Any) -> List[str]:
    """Decode a stored image payload, tolerating legacy single-URI values."""
    if not image_data:
        return []
    if isinstance(image_data, list):
        return [value for value in image_data if is_image_data(value)]
    if isinstance(image_data, str):
        try:
            parsed = json.loads(image_data)
        except ValueError:
            return [image_data] if is_image_data(image_data) else []
        if isinstance(parsed, list):
            return [value for value in parsed if is_image_data(value)]
    return []
