"""Abstract file storage interface (port) for uploaded images."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredFile:
    """Metadata returned after persisting an upload."""

    path: str
    url: str
    content_type: str
    size: int


class FileStorage(ABC):
    """Port for bucket-style file storage: files are addressed by relative path."""

    @abstractmethod
    async def save(self, path: str, content: bytes, content_type: str) -> StoredFile:
        """Write ``content`` at ``path`` (overwriting) and return its metadata."""
        ...

    @abstractmethod
    async def delete(self, path_or_url: str) -> bool:
        """Remove a stored file. Returns False if it did not exist."""
        ...
