"""Domain entity for content media items (HPV posts, articles, videos)."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ohshop_admin.domain.entities.document import Document, parse_timestamp
from ohshop_admin.domain.entities.episode import Episode, episodes_from


class MediaType(str, Enum):
    HPV = "HPV"
    ARTICLE = "Article"
    VIDEO = "Video"

    @classmethod
    def coerce(cls, value: str | None) -> "MediaType":
        """Unknown or empty types fall back to Article."""
        for member in cls:
            if member.value == value:
                return member
        return cls.ARTICLE


@dataclass
class MediaItem:
    id: str
    url: str
    description: str = ""
    created: datetime | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "MediaItem":
        return cls(
            id=raw.get("id", ""),
            url=raw.get("url") or raw.get("imageUrl") or "",
            description=raw.get("description") or "",
            created=parse_timestamp(raw.get("created")),
        )


@dataclass
class UrlReference:
    url: str
    label: str = ""


@dataclass
class ContentMedia:
    id: str
    title: str
    type: str = MediaType.ARTICLE.value
    category_id: str | None = None
    author: str = ""
    author_id: str | None = None
    description: str = ""
    synopsis: str = ""
    body: str = ""
    thumbnail: str | None = None
    video_url: str | None = None
    orientation: str | None = None
    episode: int | None = None
    episodes: list[Episode] = field(default_factory=list)
    views: int = 0
    likes: int = 0
    shares: int = 0
    active: bool = True
    public: bool = True
    featured: bool = False
    pinned: bool = False
    pinned_order: int | None = None
    position: int = 0
    deleted: bool = False
    start_date: datetime | None = None
    end_date: datetime | None = None
    media: list[MediaItem] = field(default_factory=list)
    url_references: list[UrlReference] = field(default_factory=list)
    link_ref: list[str] = field(default_factory=list)
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "ContentMedia":
        data = doc.data
        date_range = data.get("dateTimeRange") or {}
        media_raw = data.get("media") or data.get("articleMedia") or []
        return cls(
            id=doc.id,
            title=data.get("title", ""),
            type=data.get("type") or MediaType.ARTICLE.value,
            category_id=data.get("category_id") or data.get("categoryId"),
            author=data.get("author") or "",
            author_id=data.get("author_id"),
            description=data.get("description") or data.get("body") or "",
            synopsis=data.get("synopsis") or "",
            body=data.get("body") or data.get("description") or "",
            thumbnail=data.get("thumbnail"),
            video_url=data.get("video_url"),
            orientation=data.get("orientation"),
            episode=data.get("episode"),
            episodes=episodes_from(data.get("episodes")),
            views=data.get("views", 0),
            likes=data.get("likes", 0),
            shares=data.get("shares", 0),
            active=data.get("active", True),
            public=data.get("public", True),
            featured=data.get("featured", False),
            pinned=data.get("pinned", False),
            pinned_order=data.get("pinnedOrder"),
            position=data.get("position", 0),
            deleted=data.get("deleted", False),
            start_date=parse_timestamp(data.get("start_date") or date_range.get("start")),
            end_date=parse_timestamp(data.get("end_date") or date_range.get("end")),
            media=[MediaItem.from_dict(item) for item in media_raw if isinstance(item, dict)],
            url_references=[
                UrlReference(url=ref.get("url", ""), label=ref.get("label", ""))
                for ref in data.get("urlReferences") or []
                if isinstance(ref, dict)
            ],
            link_ref=list(data.get("link_ref") or []),
            created=parse_timestamp(data.get("created")) or doc.created_at,
            updated=parse_timestamp(data.get("updated")) or doc.updated_at,
        )
