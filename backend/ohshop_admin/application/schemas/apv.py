"""Pydantic DTOs for APV videos."""

from datetime import datetime

from pydantic import BaseModel, Field

from ohshop_admin.application.schemas.episode import EpisodeSchema


class ApvVideoCreate(BaseModel):
    """Schema for creating an APV video.

    ``pinned`` pins the new video in its category once it is stored.
    """

    road: str = Field("", examples=["EDSA Northbound"])
    category_id: str | None = None
    position: int = 0
    orientation: str = ""
    version: str = ""
    dh: str = Field("", examples=["https://videos.example.com/edsa.m3u8"])
    active: bool = True
    pinned: bool = False
    episodes: list[EpisodeSchema] = Field(default_factory=list)


class ApvVideoUpdate(BaseModel):
    """Schema for updating an APV video; all fields optional."""

    road: str | None = None
    position: int | None = None
    orientation: str | None = None
    version: str | None = None
    dh: str | None = None
    active: bool | None = None
    pinned: bool | None = None
    episodes: list[EpisodeSchema] | None = None


class ApvVideoResponse(BaseModel):
    id: str
    road: str
    category_id: str | None
    position: int
    orientation: str
    version: str
    dh: str
    active: bool
    pinned: bool
    deleted: bool
    episodes: list[EpisodeSchema]
    created: datetime | None
    updated: datetime | None

    model_config = {"from_attributes": True}


class PinLatestResponse(BaseModel):
    pinned_id: str | None
