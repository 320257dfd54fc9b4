"""Validation and naming of uploaded images."""

import io
import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone

from PIL import Image, UnidentifiedImageError

from ohshop_admin.domain.exceptions import InvalidFileError

ALLOWED_IMAGE_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}
_PIL_FORMATS: dict[str, str] = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
}

INVALID_TYPE_MESSAGE = "Invalid file type. Please upload a JPEG, PNG, GIF, or WebP image."


@dataclass(frozen=True)
class ImageUpload:
    content: bytes
    content_type: str
    filename: str

    @property
    def extension(self) -> str:
        return ALLOWED_IMAGE_TYPES[self.content_type]


def validate_image(
    content: bytes, content_type: str | None, filename: str | None, max_size_mb: int = 5
) -> ImageUpload:
    """Check the declared type, the size and the actual bytes of an upload.

    The returned content type is the one Pillow detects, not the one the
    client declared.
    """
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise InvalidFileError(INVALID_TYPE_MESSAGE)
    if len(content) > max_size_mb * 1024 * 1024:
        raise InvalidFileError(
            f"File too large. Please upload an image smaller than {max_size_mb}MB."
        )
    try:
        with Image.open(io.BytesIO(content)) as image:
            detected = image.format
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidFileError("The uploaded file is not a valid image.") from e

    if detected not in _PIL_FORMATS:
        raise InvalidFileError(INVALID_TYPE_MESSAGE)
    return ImageUpload(
        content=content,
        content_type=_PIL_FORMATS[detected],
        filename=filename or f"image.{ALLOWED_IMAGE_TYPES[_PIL_FORMATS[detected]]}",
    )


def sanitise_filename(name: str, max_len: int = 80) -> str:
    """Replace characters outside ``[\\w.-]`` with underscores and truncate."""
    return re.sub(r"[^\w.\-]", "_", name)[:max_len].strip("_.") or "unnamed"


def millis_stamp() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def random_suffix(length: int = 7) -> str:
    alphabet = "abcdefghijklmnopqrstuvwxyz0123456789"
    return "".join(secrets.choice(alphabet) for _ in range(length))
