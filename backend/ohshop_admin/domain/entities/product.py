"""Domain entity for marketplace products (billboards, rentals, merchandise)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ohshop_admin.domain.entities.document import Document, parse_timestamp

# Fields every product carries; anything else on the document is a custom field.
PRODUCT_CORE_FIELDS = frozenset({
    "name", "description", "price", "status", "type", "active", "deleted",
    "position", "seller_id", "seller_name", "company_id", "site_code",
    "categories", "category_names", "media", "ai_text_tags", "ai_logo_tags",
    "specs_rental", "content_type", "action", "action_url", "cms",
    "created", "updated", "updated_at",
})


@dataclass
class Product:
    id: str
    name: str
    description: str = ""
    price: float = 0.0
    status: str = ""
    type: str = ""
    active: bool = False
    deleted: bool = False
    position: int = 0
    seller_id: str | None = None
    seller_name: str = ""
    company_id: str | None = None
    site_code: str = ""
    content_type: str = ""
    categories: list[str] = field(default_factory=list)
    category_names: list[str] = field(default_factory=list)
    media: list[dict[str, Any]] = field(default_factory=list)
    ai_text_tags: list[str] = field(default_factory=list)
    ai_logo_tags: list[str] = field(default_factory=list)
    specs_rental: dict[str, Any] | None = None
    custom_fields: dict[str, Any] = field(default_factory=dict)
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "Product":
        data = doc.data
        return cls(
            id=doc.id,
            name=data.get("name") or "",
            description=data.get("description") or "",
            price=data.get("price") or 0.0,
            status=data.get("status") or "",
            type=data.get("type") or "",
            active=data.get("active", False),
            deleted=data.get("deleted", False),
            position=data.get("position") or 0,
            seller_id=data.get("seller_id"),
            seller_name=data.get("seller_name") or "",
            company_id=data.get("company_id"),
            site_code=data.get("site_code") or "",
            content_type=data.get("content_type") or "",
            categories=list(data.get("categories") or []),
            category_names=list(data.get("category_names") or []),
            media=list(data.get("media") or []),
            ai_text_tags=list(data.get("ai_text_tags") or []),
            ai_logo_tags=list(data.get("ai_logo_tags") or []),
            specs_rental=data.get("specs_rental"),
            custom_fields={k: v for k, v in data.items() if k not in PRODUCT_CORE_FIELDS},
            created=parse_timestamp(data.get("created")) or doc.created_at,
            updated=parse_timestamp(data.get("updated")) or doc.updated_at,
        )

    def matches_search(self, term: str) -> bool:
        needle = term.lower()
        haystacks = [self.name, self.description, self.seller_name, self.site_code]
        haystacks.extend(self.ai_text_tags)
        haystacks.extend(self.ai_logo_tags)
        return any(needle in (text or "").lower() for text in haystacks)
