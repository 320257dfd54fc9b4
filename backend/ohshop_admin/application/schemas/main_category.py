"""Pydantic DTOs for the main category feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class MainCategoryCreate(BaseModel):
    """Schema for creating a main category.

    Business rules (required name, length limits) are checked by the service
    so that every broken rule is reported at once.
    """

    name: str = Field("", examples=["Billboards"])
    description: str = ""
    photo_url: str = ""
    active: bool = True
    featured: bool = False
    position: int = 0


class MainCategoryUpdate(BaseModel):
    """Schema for updating a main category; all fields optional."""

    name: str | None = None
    description: str | None = None
    photo_url: str | None = None
    active: bool | None = None
    featured: bool | None = None
    position: int | None = None


class MainCategoryResponse(BaseModel):
    id: str
    name: str
    description: str
    photo_url: str
    active: bool
    featured: bool
    position: int
    clicks: int
    deleted: bool
    date_deleted: datetime | None
    created: datetime | None
    updated: datetime | None

    model_config = {"from_attributes": True}


class MainCategoryListResponse(BaseModel):
    categories: list[MainCategoryResponse]
    total: int
