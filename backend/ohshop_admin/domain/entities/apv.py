"""Domain entity for APV road videos shown in the green view."""

from dataclasses import dataclass, field
from datetime import datetime

from ohshop_admin.domain.entities.document import Document, parse_timestamp
from ohshop_admin.domain.entities.episode import Episode, episodes_from


@dataclass
class ApvVideo:
    id: str
    road: str
    category_id: str | None = None
    position: int = 0
    orientation: str = ""
    version: str = ""
    dh: str = ""
    active: bool = True
    pinned: bool = False
    deleted: bool = False
    episodes: list[Episode] = field(default_factory=list)
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "ApvVideo":
        data = doc.data
        return cls(
            id=doc.id,
            road=data.get("road") or "",
            category_id=data.get("category_id"),
            position=data.get("position") or 0,
            orientation=data.get("orientation") or "",
            version=data.get("version") or "",
            dh=data.get("dh") or "",
            active=data.get("active", True),
            pinned=data.get("pinned", False),
            deleted=data.get("deleted", False),
            episodes=episodes_from(data.get("episodes")),
            created=parse_timestamp(data.get("created")) or doc.created_at,
            updated=parse_timestamp(data.get("updated")) or doc.updated_at,
        )


def validate_apv(road: str | None, position: int | None, dh: str | None) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not (road or "").strip():
        errors["road"] = "Road name is required"
    if position is not None and position < 0:
        errors["position"] = "Position must be a positive number"
    if dh and not dh.startswith("http"):
        errors["dh"] = "Video URL should be a valid URL"
    return errors
