import json

import pytest

from errors import ValidationError
from file_utils import parse_stored_images, serialize_images, validate_images, validate_single_image
from validation import parse_event_time, validate_bio, validate_coordinate, validate_website

PNG = "data:image/png;base64,AAAA"


@pytest.mark.parametrize("stored, expected", [
    (None, []),
    ("", []),
    ([PNG, "https://example.com/x.png", 3], [PNG]),
    (json.dumps([PNG, "nope"]), [PNG]),
    (PNG, [PNG]),
    ("not json and not an image", []),
    (json.dumps({"image": PNG}), []),
    (42, []),
])
def test_parse_stored_images(stored, expected):
    assert parse_stored_images(stored) == expected


def test_serialize_images_stores_null_for_none():
    assert serialize_images([]) is None
    assert json.loads(serialize_images([PNG])) == [PNG]


def test_validate_images_trims_and_checks_types():
    assert validate_images([f"  {PNG}  "], "post") == [PNG]
    assert validate_images(None, "post") == []
    with pytest.raises(ValidationError, match="Each image must be a base64 encoded string."):
        validate_images([123], "post")


def test_validate_single_image_clears_on_blank():
    assert validate_single_image("   ", "Avatar", 1) is None
    assert validate_single_image(None, "Avatar", 1) is None
    assert validate_single_image(PNG, "Avatar", 1) == PNG


def test_parse_event_time_accepts_offsets():
    parsed = parse_event_time("2030-05-01T09:00:00+02:00")
    assert parsed.utcoffset().total_seconds() == 7200
    assert parse_event_time("2030-05-01T09:00:00Z").utcoffset().total_seconds() == 0
    with pytest.raises(ValidationError):
        parse_event_time(None)


def test_coordinates_allow_boundaries():
    assert validate_coordinate(90, "Latitude", 90) == 90
    assert validate_coordinate(None, "Latitude", 90) is None
    with pytest.raises(ValidationError, match="Longitude must be between -180 and 180."):
        validate_coordinate(180.5, "Longitude", 180)


def test_website_must_be_http():
    assert validate_website("  ") is None
    assert validate_website("http://x.org") == "http://x.org"
    with pytest.raises(ValidationError):
        validate_website("ftp://x.org")


def test_bio_blank_becomes_none():
    assert validate_bio("   ") is None
    with pytest.raises(ValidationError, match="Bio must be a string."):
        validate_bio(12)
