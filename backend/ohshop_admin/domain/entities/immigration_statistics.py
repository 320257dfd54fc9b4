from dataclasses import dataclass, field
from datetime import datetime

from ohshop_admin.domain.entities.document import Document, parse_timestamp

IMMIGRATION_CATEGORIES = ("OHPLUS", "SELLAH", "OHSHOP")


@dataclass
class UserDevice:
    android: int = 0
    ios: int = 0
    web: int = 0


@dataclass
class ImmigrationStatistics:
    id: str
    type: str
    active_users: int = 0
    total_users: int = 0
    male_users: int = 0
    female_users: int = 0
    registered_visitors: int = 0
    unregistered_visitors: int = 0
    app_store: int = 0
    play_store: int = 0
    user_device: UserDevice = field(default_factory=UserDevice)
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "ImmigrationStatistics":
        data = doc.data
        device = data.get("user_device") or {}
        return cls(
            id=doc.id,
            type=data.get("type", ""),
            active_users=data.get("active_users") or 0,
            total_users=data.get("total_users") or 0,
            male_users=data.get("male_users") or 0,
            female_users=data.get("female_users") or 0,
            registered_visitors=data.get("registered_visitors") or 0,
            unregistered_visitors=data.get("unregistered_visitors") or 0,
            app_store=data.get("app_store") or 0,
            play_store=data.get("play_store") or 0,
            user_device=UserDevice(
                android=device.get("android") or 0,
                ios=device.get("ios") or 0,
                web=device.get("web") or 0,
            ),
            created=parse_timestamp(data.get("created")) or doc.created_at,
            updated=parse_timestamp(data.get("updated")) or doc.updated_at,
        )
