"""Domain entity for content categories (HPV, articles, videos...)."""

from dataclasses import dataclass, field
from datetime import datetime

from ohshop_admin.domain.entities.document import Document, parse_timestamp


@dataclass
class ContentCategory:
    id: str
    name: str
    type: str
    description: str = ""
    logo: str = ""
    active: bool = False
    featured: bool = False
    position: int = 0
    pinned_content: bool = False
    pinned_contents: list[str] = field(default_factory=list)
    deleted: bool = False
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "ContentCategory":
        data = doc.data
        return cls(
            id=doc.id,
            name=data.get("name", ""),
            type=data.get("type", ""),
            description=data.get("description") or "",
            logo=data.get("logo") or "",
            active=data.get("active", False),
            featured=data.get("featured", False),
            position=data.get("position", 0),
            pinned_content=data.get("pinned_content", False),
            pinned_contents=list(data.get("pinned_contents") or []),
            deleted=data.get("deleted", False),
            created=parse_timestamp(data.get("created")) or doc.created_at,
            updated=parse_timestamp(data.get("updated")) or doc.updated_at,
        )


def validate_content_category(data: dict, *, partial: bool = False) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not partial or "name" in data:
        if not (data.get("name") or "").strip():
            errors["name"] = "Name is required"
    if not partial or "type" in data:
        if not (data.get("type") or "").strip():
            errors["type"] = "Type is required"
    position = data.get("position")
    if position is not None and position < 0:
        errors["position"] = "Position must be a non-negative number"
    return errors
