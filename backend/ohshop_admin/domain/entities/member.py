"""Domain entity for platform members (OOH! Shop, OH! Plus and Sellah users)."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ohshop_admin.domain.entities.document import Document, parse_timestamp


class MemberPlatform(str, Enum):
    MEMBERS = "members"
    OH_PLUS = "oh-plus"
    SELLAH = "sellah"


@dataclass
class Member:
    id: str
    platform: MemberPlatform
    email: str = ""
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    display_name: str = ""
    phone_number: str = ""
    gender: str = ""
    photo_url: str = ""
    type: str = ""
    company_id: str | None = None
    company_name: str | None = None
    company_position: str = ""
    active: bool = False
    deleted: bool = False
    onboarding: bool = False
    followers: int = 0
    products: int = 0
    rating: float = 0.0
    created: datetime | None = None
    updated: datetime | None = None

    @property
    def full_name(self) -> str:
        return format_full_name(self.first_name, self.middle_name, self.last_name)

    @classmethod
    def from_document(cls, doc: Document, platform: MemberPlatform) -> "Member":
        data = doc.data
        company_info = data.get("company_info") if isinstance(data.get("company_info"), dict) else {}
        created_raw = data.get("created_time") or data.get("created") or data.get("created_at")
        return cls(
            id=doc.id,
            platform=platform,
            email=data.get("email") or "",
            first_name=data.get("first_name") or "",
            middle_name=data.get("middle_name") or "",
            last_name=data.get("last_name") or "",
            display_name=data.get("display_name") or "",
            phone_number=data.get("phone_number") or "",
            gender=data.get("gender") or "",
            photo_url=data.get("photo_url") or data.get("photoURL") or "",
            type=data.get("type") or "",
            company_id=data.get("company_id") or None,
            company_name=company_info.get("company_name") or data.get("company_name") or None,
            company_position=company_info.get("company_position") or data.get("position") or "",
            active=data.get("active") is True,
            deleted=data.get("deleted") is True,
            onboarding=data.get("onboarding") is True,
            followers=data.get("followers") or 0,
            products=data.get("products") or data.get("product") or 0,
            rating=data.get("rating") or 0.0,
            created=parse_timestamp(created_raw) or doc.created_at,
            updated=parse_timestamp(data.get("updated")),
        )


def format_full_name(first: str | None, middle: str | None, last: str | None) -> str:
    return " ".join(part for part in (first, middle, last) if part)
