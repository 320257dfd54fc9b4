"""Unit tests for uploaded image validation and naming."""

import io

import pytest
from PIL import Image

from ohshop_admin.application.services.image_upload import (
    INVALID_TYPE_MESSAGE,
    sanitise_filename,
    validate_image,
)
from ohshop_admin.domain.exceptions import InvalidFileError


def _image_bytes(fmt: str) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (3, 3), "green").save(buffer, format=fmt)
    return buffer.getvalue()


def test_detected_type_wins_over_declared_type():
    upload = validate_image(_image_bytes("PNG"), "image/jpeg", "photo.jpg")
    assert upload.content_type == "image/png"
    assert upload.extension == "png"


def test_declared_type_must_be_an_image():
    with pytest.raises(InvalidFileError) as excinfo:
        validate_image(_image_bytes("PNG"), "text/plain", "notes.txt")
    assert str(excinfo.value) == INVALID_TYPE_MESSAGE


def test_size_limit():
    with pytest.raises(InvalidFileError, match="smaller than 1MB"):
        validate_image(b"\0" * (1024 * 1024 + 1), "image/png", "big.png", max_size_mb=1)


def test_garbage_bytes_are_rejected():
    with pytest.raises(InvalidFileError, match="not a valid image"):
        validate_image(b"definitely not an image", "image/gif", "x.gif")


def test_unsupported_format_is_rejected():
    with pytest.raises(InvalidFileError):
        validate_image(_image_bytes("BMP"), "image/png", "x.png")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("my photo.png", "my_photo.png"),
        ("../../etc/passwd", "etc_passwd"),
        ("???", "unnamed"),
    ],
)
def test_sanitise_filename(name, expected):
    assert sanitise_filename(name) == expected
