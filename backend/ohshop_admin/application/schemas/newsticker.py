"""Pydantic DTOs for news ticker entries."""

from datetime import datetime

from pydantic import BaseModel, Field

from ohshop_admin.domain.entities.newsticker import NewstickerStatus


class NewstickerCreate(BaseModel):
    title: str = Field("", examples=["Holiday sale starts Friday"])
    content: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None
    position: int = 0
    status: NewstickerStatus = NewstickerStatus.DRAFT


class NewstickerUpdate(BaseModel):
    """Schema for updating a ticker; all fields optional."""

    title: str | None = None
    content: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    position: int | None = None
    status: NewstickerStatus | None = None


class NewstickerResponse(BaseModel):
    id: str
    title: str
    content: str
    start_time: datetime | None
    end_time: datetime | None
    position: int
    status: NewstickerStatus
    deleted: bool
    uid: str | None
    created: datetime | None
    updated: datetime | None

    model_config = {"from_attributes": True}
