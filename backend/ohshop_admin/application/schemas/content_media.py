"""Pydantic DTOs for the content media feature."""

from datetime import datetime

from pydantic import BaseModel, Field

from ohshop_admin.application.schemas.episode import EpisodeSchema


class MediaItemSchema(BaseModel):
    id: str = ""
    url: str = ""
    description: str = ""
    created: datetime | None = None

    model_config = {"from_attributes": True}


class UrlReferenceSchema(BaseModel):
    url: str = ""
    label: str = ""

    model_config = {"from_attributes": True}


class ContentMediaCreate(BaseModel):
    """Schema for creating a content media item.

    ``type`` values other than HPV, Article and Video are stored as Article.
    """

    title: str = Field("", examples=["Summer campaign"])
    type: str | None = Field(None, examples=["Video"])
    category_id: str | None = None
    author: str = ""
    author_id: str | None = None
    description: str = ""
    synopsis: str = ""
    thumbnail: str | None = None
    video_url: str | None = None
    orientation: str | None = None
    episode: int | None = None
    episodes: list[EpisodeSchema] = Field(default_factory=list)
    active: bool = True
    public: bool = True
    featured: bool = False
    start_date: datetime | None = None
    end_date: datetime | None = None
    media: list[MediaItemSchema] = Field(default_factory=list)
    url_references: list[UrlReferenceSchema] = Field(default_factory=list)
    link_ref: list[str] = Field(default_factory=list)


class ContentMediaUpdate(BaseModel):
    """Schema for updating a content media item; all fields optional."""

    title: str | None = None
    type: str | None = None
    category_id: str | None = None
    author: str | None = None
    description: str | None = None
    synopsis: str | None = None
    thumbnail: str | None = None
    video_url: str | None = None
    orientation: str | None = None
    episode: int | None = None
    episodes: list[EpisodeSchema] | None = None
    active: bool | None = None
    public: bool | None = None
    featured: bool | None = None
    position: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    media: list[MediaItemSchema] | None = None
    url_references: list[UrlReferenceSchema] | None = None
    link_ref: list[str] | None = None


class ContentMediaResponse(BaseModel):
    id: str
    title: str
    type: str
    category_id: str | None
    author: str
    author_id: str | None
    description: str
    synopsis: str
    body: str
    thumbnail: str | None
    video_url: str | None
    orientation: str | None
    episode: int | None
    episodes: list[EpisodeSchema]
    views: int
    likes: int
    shares: int
    active: bool
    public: bool
    featured: bool
    pinned: bool
    pinned_order: int | None
    position: int
    deleted: bool
    start_date: datetime | None
    end_date: datetime | None
    media: list[MediaItemSchema]
    url_references: list[UrlReferenceSchema]
    link_ref: list[str]
    created: datetime | None
    updated: datetime | None

    model_config = {"from_attributes": True}


class PinnedSyncResponse(BaseModel):
    categories_updated: int
    errors: list[str]


class ThumbnailUploadResponse(BaseModel):
    url: str
    path: str
