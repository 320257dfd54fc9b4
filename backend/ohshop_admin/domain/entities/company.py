"""Domain entities for client companies and their subscriptions/projects."""

import calendar
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ohshop_admin.domain.entities.document import Document, parse_timestamp

LICENSE_KEY_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
LICENSE_KEY_LENGTH = 16

_MAX_PRODUCTS: dict[str, int] = {
    "solo": 3,
    "family": 5,
    "membership": 8,
    "enterprise": 99999,
    "trial": 3,
    "graphic-expo-event": 5,
}
_MAX_USERS: dict[str, int] = {
    "enterprise": 99999,
}
_DEFAULT_MAX_USERS = 12
_FALLBACK_MAX_PRODUCTS = 100
_FALLBACK_MAX_USERS = 10


@dataclass(frozen=True)
class PlanLimits:
    max_products: int
    max_users: int

    @classmethod
    def for_plan(cls, plan_type: str) -> "PlanLimits":
        """Plan table lookup; a zero limit falls back to the legacy defaults."""
        max_products = _MAX_PRODUCTS.get(plan_type, 0)
        max_users = _MAX_USERS.get(plan_type, _DEFAULT_MAX_USERS)
        return cls(
            max_products=max_products or _FALLBACK_MAX_PRODUCTS,
            max_users=max_users or _FALLBACK_MAX_USERS,
        )


def add_months(start: datetime, months: int) -> datetime:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


def subscription_end_date(start: datetime, billing_cycle: str) -> datetime | None:
    if billing_cycle == "monthly":
        return add_months(start, 1)
    if billing_cycle == "annually":
        return add_months(start, 12)
    return None


@dataclass
class Company:
    id: str
    name: str
    business_type: str | None = None
    address: dict[str, Any] | None = None
    point_person: dict[str, Any] | None = None
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    description: str | None = None
    industry: str | None = None
    size: str | None = None
    status: str | None = None
    deleted: bool = False
    created_by: str | None = None
    updated_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "Company":
        data = doc.data
        return cls(
            id=doc.id,
            name=data.get("name") or "",
            business_type=data.get("business_type"),
            address=data.get("address"),
            point_person=data.get("point_person"),
            website=data.get("website"),
            phone=data.get("phone"),
            email=data.get("email"),
            description=data.get("description"),
            industry=data.get("industry"),
            size=data.get("size"),
            status=data.get("status"),
            deleted=data.get("deleted", False),
            created_by=data.get("created_by"),
            updated_by=data.get("updated_by"),
            created_at=parse_timestamp(data.get("created_at")) or doc.created_at,
            updated_at=parse_timestamp(data.get("updated_at")) or doc.updated_at,
        )


@dataclass
class Subscription:
    id: str
    license_key: str
    plan_type: str
    billing_cycle: str
    company_id: str
    status: str = "active"
    max_products: int = 0
    max_users: int = 0
    start_date: datetime | None = None
    end_date: datetime | None = None
    trial_end_date: datetime | None = None
    uid: str | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "Subscription":
        data = doc.data
        return cls(
            id=doc.id,
            license_key=data.get("licenseKey", ""),
            plan_type=data.get("planType", ""),
            billing_cycle=data.get("billingCycle", ""),
            company_id=data.get("companyId", ""),
            status=data.get("status", "active"),
            max_products=data.get("maxProducts", 0),
            max_users=data.get("maxUsers", 0),
            start_date=parse_timestamp(data.get("startDate")),
            end_date=parse_timestamp(data.get("endDate")),
            trial_end_date=parse_timestamp(data.get("trialEndDate")),
            uid=data.get("uid"),
        )


@dataclass
class Project:
    id: str
    project_name: str
    license_key: str
    company_name: str
    company_location: str = ""
    company_website: str = ""
    social_media: dict[str, str] = field(default_factory=dict)
    tenant_id: str | None = None
    deleted: bool = False
    uid: str | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "Project":
        data = doc.data
        return cls(
            id=doc.id,
            project_name=data.get("project_name", ""),
            license_key=data.get("license_key", ""),
            company_name=data.get("company_name", ""),
            company_location=data.get("company_location", ""),
            company_website=data.get("company_website", ""),
            social_media=dict(data.get("social_media") or {}),
            tenant_id=data.get("tenant_id"),
            deleted=data.get("deleted", False),
            uid=data.get("uid"),
        )


def format_location(address: dict[str, Any] | None) -> str:
    if not address:
        return ""
    return f"{address.get('city', '')}, {address.get('province', '')}"
