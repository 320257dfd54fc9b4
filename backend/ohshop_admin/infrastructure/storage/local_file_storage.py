"""Local filesystem storage for uploaded images.

Files are addressed by bucket-style relative paths, mirroring the layout the
dashboard used in its object storage:
    <upload_dir>/main_categories/<stamp>_<rand>.<ext>
    <upload_dir>/content_categories/<id>/logo.<ext>
    <upload_dir>/content_media/thumbnails/<user_id>/<file_name>
    <upload_dir>/profile_images/<uid>/<stamp>_<name>
"""

import logging
from pathlib import Path, PurePosixPath

from ohshop_admin.application.interfaces import FileStorage, StoredFile
from ohshop_admin.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class LocalFileStorage(FileStorage):
    """Infrastructure adapter for local file storage."""

    def __init__(self, upload_dir: str, url_prefix: str = "/uploads"):
        self._upload_dir = Path(upload_dir).resolve()
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        self._url_prefix = url_prefix.rstrip("/")

    def _resolve(self, relative_path: str) -> Path:
        """Absolute path for a stored file; refuses paths outside the upload dir."""
        clean = PurePosixPath(relative_path.lstrip("/"))
        target = (self._upload_dir / clean).resolve()
        if self._upload_dir not in target.parents:
            raise StorageError(f"Path escapes the upload directory: {relative_path}")
        return target

    def _relative(self, path_or_url: str) -> str:
        if self._url_prefix and path_or_url.startswith(self._url_prefix + "/"):
            return path_or_url[len(self._url_prefix) + 1:]
        return path_or_url

    def url_for(self, relative_path: str) -> str:
        return f"{self._url_prefix}/{relative_path.lstrip('/')}"

    # ── File Storage ────────────────────────────────────────────────

    async def save(self, path: str, content: bytes, content_type: str) -> StoredFile:
        """Write ``content`` at ``<upload_dir>/<path>``, replacing any existing file."""
        dest_path = self._resolve(path)
        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            dest_path.write_bytes(content)
        except OSError as e:
            raise StorageError(f"Failed to store {path}: {e}") from e

        logger.info("Stored file: %s (%d bytes)", dest_path, len(content))

        return StoredFile(
            path=path,
            url=self.url_for(path),
            content_type=content_type,
            size=len(content),
        )

    async def delete(self, path_or_url: str) -> bool:
        """Delete a stored file from disk.

        Returns True if successfully deleted, False if not found.
        Empty parent directories are *not* pruned.
        """
        file_path = self._resolve(self._relative(path_or_url))
        if not file_path.exists():
            return False

        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {path_or_url}: {e}") from e
        logger.info("Deleted file from disk: %s", file_path)
        return True
