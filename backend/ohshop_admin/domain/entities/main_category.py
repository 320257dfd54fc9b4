"""Domain entity for top-level storefront categories."""

from dataclasses import dataclass
from datetime import datetime

from ohshop_admin.domain.entities.document import Document, parse_timestamp

MAIN_CATEGORY_NAME_MAX = 100
MAIN_CATEGORY_DESCRIPTION_MAX = 1000


@dataclass
class MainCategory:
    id: str
    name: str
    description: str = ""
    photo_url: str = ""
    active: bool = True
    featured: bool = False
    position: int = 0
    clicks: int = 0
    deleted: bool = False
    date_deleted: datetime | None = None
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "MainCategory":
        data = doc.data
        return cls(
            id=doc.id,
            name=data.get("name", ""),
            description=data.get("description") or "",
            photo_url=data.get("photo_url") or "",
            active=data.get("active", True),
            featured=data.get("featured", False),
            position=data.get("position", 0),
            clicks=data.get("clicks", 0),
            deleted=data.get("deleted", False),
            date_deleted=parse_timestamp(data.get("date_deleted")),
            created=parse_timestamp(data.get("created")) or doc.created_at,
            updated=parse_timestamp(data.get("updated")) or doc.updated_at,
        )


def validate_main_category(data: dict) -> dict[str, str]:
    """Return field → message for every rule ``data`` breaks.

    Only the fields present in ``data`` are checked, so the same rules serve
    both creation (with the full payload) and partial updates.
    """
    errors: dict[str, str] = {}

    if "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            errors["name"] = "Name is required"
        elif len(name) > MAIN_CATEGORY_NAME_MAX:
            errors["name"] = f"Name must be less than {MAIN_CATEGORY_NAME_MAX} characters"

    description = data.get("description")
    if description and len(description) > MAIN_CATEGORY_DESCRIPTION_MAX:
        errors["description"] = (
            f"Description must be less than {MAIN_CATEGORY_DESCRIPTION_MAX} characters"
        )

    position = data.get("position")
    if position is not None and position < 0:
        errors["position"] = "Position must be a non-negative number"

    return errors
