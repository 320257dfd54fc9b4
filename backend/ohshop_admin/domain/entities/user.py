"""Admin user profiles and the password policy they sign up under."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ohshop_admin.domain.entities.document import Document, parse_timestamp

DEFAULT_COUNTRY_CODE = "+63"
DEFAULT_USER_TYPE = "OHADMIN"


@dataclass
class UserProfile:
    uid: str
    email: str
    display_name: str
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    gender: str = ""
    phone_number: str = ""
    country_code: str = DEFAULT_COUNTRY_CODE
    photo_url: str = ""
    banner: str = ""
    location: Any = ""
    active: bool = True
    onboarding: bool = False
    type: str = DEFAULT_USER_TYPE
    role: list[str] = field(default_factory=lambda: ["user"])
    company_id: str | None = None
    license_key: str | None = None
    followers: int = 0
    rating: float = 0.0
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "UserProfile":
        data = doc.data
        return cls(
            uid=doc.id,
            email=data.get("email", ""),
            display_name=data.get("display_name", ""),
            first_name=data.get("first_name", ""),
            middle_name=data.get("middle_name", ""),
            last_name=data.get("last_name", ""),
            gender=data.get("gender", ""),
            phone_number=data.get("phone_number", ""),
            country_code=data.get("country_code") or DEFAULT_COUNTRY_CODE,
            photo_url=data.get("photo_url", ""),
            banner=data.get("banner", ""),
            location=data.get("location", ""),
            active=data.get("active", True),
            onboarding=data.get("onboarding", False),
            type=data.get("type") or DEFAULT_USER_TYPE,
            role=list(data.get("role") or ["user"]),
            company_id=data.get("company_id"),
            license_key=data.get("license_key"),
            followers=data.get("followers", 0),
            rating=data.get("rating", 0.0),
            created=parse_timestamp(data.get("created")) or doc.created_at,
            updated=parse_timestamp(data.get("updated")) or doc.updated_at,
        )


# ── Password policy ─────────────────────────────────────────────────

@dataclass(frozen=True)
class PasswordRequirement:
    key: str
    label: str
    pattern: str

    def is_met(self, password: str) -> bool:
        return re.search(self.pattern, password) is not None


PASSWORD_REQUIREMENTS: tuple[PasswordRequirement, ...] = (
    PasswordRequirement("length", "At least 8 characters", r".{8,}"),
    PasswordRequirement("uppercase", "At least one uppercase letter", r"[A-Z]"),
    PasswordRequirement("lowercase", "At least one lowercase letter", r"[a-z]"),
    PasswordRequirement("number", "At least one number", r"[0-9]"),
    PasswordRequirement("special", "At least one special character", r"[^A-Za-z0-9]"),
)


@dataclass
class PasswordCheck:
    met: dict[str, bool]

    @property
    def strength(self) -> float:
        """Fraction of requirements met, between 0 and 1."""
        return sum(self.met.values()) / len(PASSWORD_REQUIREMENTS)

    @property
    def is_valid(self) -> bool:
        return all(self.met.values())

    @property
    def missing(self) -> list[str]:
        return [r.label for r in PASSWORD_REQUIREMENTS if not self.met[r.key]]


def check_password(password: str) -> PasswordCheck:
    return PasswordCheck(met={r.key: r.is_met(password) for r in PASSWORD_REQUIREMENTS})
