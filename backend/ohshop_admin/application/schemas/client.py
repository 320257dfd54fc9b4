"""Pydantic DTOs for client companies, their subscriptions and projects."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ohshop_admin.application.schemas.common import PaginationResponse


class ClientCreate(BaseModel):
    """Schema for onboarding a client: company, subscription and project in one go."""

    name: str = Field("", examples=["Acme Outdoor"])
    plan_type: str = Field("", examples=["family"])
    billing_cycle: str = Field("", examples=["monthly"])
    business_type: str | None = None
    website: str | None = None
    address: dict[str, Any] | None = Field(
        None, examples=[{"street": "1 Ayala Ave", "city": "Makati", "province": "Metro Manila"}],
    )
    point_person: dict[str, Any] | None = None
    phone: str | None = None
    email: str | None = None
    description: str | None = None
    industry: str | None = None
    size: str | None = None
    project_name: str | None = None
    social_media: dict[str, str] | None = None


class CompanyUpdate(BaseModel):
    """Schema for updating a company; all fields optional."""

    name: str | None = None
    business_type: str | None = None
    website: str | None = None
    address: dict[str, Any] | None = None
    point_person: dict[str, Any] | None = None
    phone: str | None = None
    email: str | None = None
    description: str | None = None
    industry: str | None = None
    size: str | None = None
    status: str | None = None


class CompanyResponse(BaseModel):
    id: str
    name: str
    business_type: str | None
    address: dict[str, Any] | None
    point_person: dict[str, Any] | None
    website: str | None
    phone: str | None
    email: str | None
    description: str | None
    industry: str | None
    size: str | None
    status: str | None
    deleted: bool
    created_by: str | None
    updated_by: str | None
    created_at: datetime | None
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class SubscriptionResponse(BaseModel):
    id: str
    license_key: str
    plan_type: str
    billing_cycle: str
    company_id: str
    status: str
    max_products: int
    max_users: int
    start_date: datetime | None
    end_date: datetime | None
    trial_end_date: datetime | None

    model_config = {"from_attributes": True}


class ProjectResponse(BaseModel):
    id: str
    project_name: str
    license_key: str
    company_name: str
    company_location: str
    company_website: str
    social_media: dict[str, str]
    deleted: bool

    model_config = {"from_attributes": True}


class ClientCreatedResponse(BaseModel):
    company: CompanyResponse
    subscription: SubscriptionResponse
    project: ProjectResponse


class CompanyListResponse(BaseModel):
    companies: list[CompanyResponse]
    pagination: PaginationResponse
