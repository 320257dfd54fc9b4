"""Pydantic DTOs for the content category feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class ContentCategoryCreate(BaseModel):
    name: str = Field("", examples=["Highlights"])
    type: str = Field("", examples=["HPV"])
    description: str = ""
    logo: str = ""
    active: bool = False
    featured: bool = False
    position: int = 0
    pinned_content: bool = False


class ContentCategoryUpdate(BaseModel):
    """Schema for updating a content category; all fields optional."""

    name: str | None = None
    type: str | None = None
    description: str | None = None
    logo: str | None = None
    active: bool | None = None
    featured: bool | None = None
    position: int | None = None
    pinned_content: bool | None = None


class ContentCategoryResponse(BaseModel):
    id: str
    name: str
    type: str
    description: str
    logo: str
    active: bool
    featured: bool
    position: int
    pinned_content: bool
    pinned_contents: list[str]
    deleted: bool
    created: datetime | None
    updated: datetime | None

    model_config = {"from_attributes": True}
