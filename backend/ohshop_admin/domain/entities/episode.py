"""Episodes (chapters of a video) and reusable episode templates."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ohshop_admin.domain.entities.document import Document, parse_timestamp


@dataclass
class Episode:
    """One chapter of a video; ``start`` and ``end`` are ``HH:MM:SS`` marks."""

    episode: int
    name: str
    start: str = "00:00:00"
    end: str = ""
    public: bool = False
    description: str | None = None
    thumbnail: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Episode":
        return cls(
            episode=int(raw.get("episode") or 0),
            name=raw.get("name") or "",
            start=raw.get("start") or "00:00:00",
            end=raw.get("end") or "",
            public=bool(raw.get("public", False)),
            description=raw.get("description"),
            thumbnail=raw.get("thumbnail"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "episode": self.episode,
            "name": self.name,
            "start": self.start,
            "end": self.end,
            "public": self.public,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.thumbnail is not None:
            data["thumbnail"] = self.thumbnail
        return data


def episodes_from(raw: Any) -> list[Episode]:
    return [Episode.from_dict(item) for item in raw or [] if isinstance(item, dict)]


@dataclass
class EpisodeTemplate:
    id: str
    name: str
    description: str = ""
    episodes: list[Episode] = field(default_factory=list)
    created_by: str | None = None
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "EpisodeTemplate":
        data = doc.data
        return cls(
            id=doc.id,
            name=data.get("name") or "",
            description=data.get("description") or "",
            episodes=episodes_from(data.get("episodes")),
            created_by=data.get("createdBy"),
            created=parse_timestamp(data.get("created")) or doc.created_at,
            updated=parse_timestamp(data.get("updated")) or doc.updated_at,
        )
