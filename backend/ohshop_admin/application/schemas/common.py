"""Pydantic DTOs shared by several features."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class PaginationResponse(BaseModel):
    """Page metadata returned with every paginated listing (camelCase on the wire)."""

    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class PositionUpdate(BaseModel):
    id: str = Field(..., min_length=1)
    position: int = Field(..., ge=0)


class PositionUpdateRequest(BaseModel):
    """Batch reorder: every listed item gets its new position in one write batch."""

    updates: list[PositionUpdate] = Field(..., min_length=1)


class NextPositionResponse(BaseModel):
    position: int


class MessageResponse(BaseModel):
    message: str


class ImageUploadResponse(BaseModel):
    url: str
