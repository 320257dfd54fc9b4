"""Pydantic DTOs for episodes and episode templates."""

from datetime import datetime

from pydantic import BaseModel, Field


class EpisodeSchema(BaseModel):
    episode: int = Field(..., ge=0, examples=[1])
    name: str = ""
    start: str = Field("00:00:00", examples=["00:01:30"])
    end: str = ""
    public: bool = False
    description: str | None = None
    thumbnail: str | None = None

    model_config = {"from_attributes": True}


class EpisodeTemplateCreate(BaseModel):
    name: str = Field("", examples=["Standard road tour"])
    description: str = ""
    episodes: list[EpisodeSchema] = Field(default_factory=list)


class EpisodeTemplateUpdate(BaseModel):
    """Schema for updating a template; all fields optional."""

    name: str | None = None
    description: str | None = None
    episodes: list[EpisodeSchema] | None = None


class EpisodeTemplateResponse(BaseModel):
    id: str
    name: str
    description: str
    episodes: list[EpisodeSchema]
    created_by: str | None
    created: datetime | None
    updated: datetime | None

    model_config = {"from_attributes": True}
