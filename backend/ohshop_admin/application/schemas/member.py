"""Pydantic DTOs for platform members."""

from datetime import datetime

from pydantic import BaseModel

from ohshop_admin.application.schemas.common import PaginationResponse
from ohshop_admin.domain.entities.member import MemberPlatform


class MemberResponse(BaseModel):
    id: str
    platform: MemberPlatform
    email: str
    first_name: str
    middle_name: str
    last_name: str
    full_name: str
    display_name: str
    phone_number: str
    gender: str
    photo_url: str
    type: str
    company_id: str | None
    company_name: str | None
    company_position: str
    active: bool
    onboarding: bool
    followers: int
    products: int
    rating: float
    created: datetime | None
    updated: datetime | None

    model_config = {"from_attributes": True}


class MemberListResponse(BaseModel):
    members: list[MemberResponse]
    pagination: PaginationResponse


class MemberCountsResponse(BaseModel):
    members: int
    oh_plus: int
    sellah: int
