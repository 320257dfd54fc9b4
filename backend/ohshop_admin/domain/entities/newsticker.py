"""Domain entity for scrolling news ticker entries."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ohshop_admin.domain.entities.document import Document, parse_timestamp


class NewstickerStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


@dataclass
class Newsticker:
    id: str
    title: str
    content: str
    start_time: datetime | None
    end_time: datetime | None
    position: int = 0
    status: NewstickerStatus = NewstickerStatus.DRAFT
    deleted: bool = False
    uid: str | None = None
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "Newsticker":
        data = doc.data
        return cls(
            id=doc.id,
            title=data.get("title") or "",
            content=data.get("content") or "",
            start_time=parse_timestamp(data.get("start_time")),
            end_time=parse_timestamp(data.get("end_time")),
            position=data.get("position") or 0,
            status=NewstickerStatus(data.get("status") or "draft"),
            deleted=data.get("deleted", False),
            uid=data.get("uid"),
            created=parse_timestamp(data.get("created")) or doc.created_at,
            updated=parse_timestamp(data.get("updated")) or doc.updated_at,
        )

    def is_live(self, now: datetime) -> bool:
        """Published, not deleted and inside its display window."""
        if self.status is not NewstickerStatus.PUBLISHED or self.deleted:
            return False
        if self.start_time is None or self.end_time is None:
            return False
        return self.start_time <= now <= self.end_time


def validate_newsticker(
    title: str | None,
    content: str | None,
    start_time: datetime | None,
    end_time: datetime | None,
    position: int | None,
) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not (title or "").strip():
        errors["title"] = "Title is required"
    if not (content or "").strip():
        errors["content"] = "Content is required"
    if start_time is None:
        errors["start_time"] = "Invalid start time"
    if end_time is None:
        errors["end_time"] = "Invalid end time"
    if start_time is not None and end_time is not None and end_time <= start_time:
        errors["end_time"] = "End time must be after start time"
    if position is not None and position < 0:
        errors["position"] = "Position must be a non-negative number"
    return errors
