"""Application service (use case) for client companies.

Creating a client writes three documents: the company, its subscription
(with a generated license key and the plan's limits) and a default project.
"""

import logging
import secrets
from typing import Any

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.application.schemas.client import ClientCreate, CompanyUpdate
from ohshop_admin.domain.entities.company import (
    LICENSE_KEY_ALPHABET,
    LICENSE_KEY_LENGTH,
    Company,
    PlanLimits,
    Project,
    Subscription,
    format_location,
    subscription_end_date,
)
from ohshop_admin.domain.entities.document import (
    FieldFilter,
    OrderBy,
    to_iso,
    utc_now,
    utc_now_iso,
)
from ohshop_admin.domain.entities.pagination import PageRequest, Pagination
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError

logger = logging.getLogger(__name__)

COMPANIES = "companies"
SUBSCRIPTIONS = "subscriptions"
PROJECTS = "projects"


def generate_license_key() -> str:
    return "".join(secrets.choice(LICENSE_KEY_ALPHABET) for _ in range(LICENSE_KEY_LENGTH))


class ClientService:
    """Orchestrates company listing, onboarding and maintenance."""

    def __init__(self, store: DocumentStore, tenant_id: str | None = None):
        self._store = store
        self._tenant_id = tenant_id

    async def list_companies(self, request: PageRequest) -> tuple[list[Company], Pagination]:
        """One page of live companies.

        Without a search term companies come newest first. With one, names
        starting with the term are returned in name order.
        """
        if request.search:
            filters = [
                FieldFilter("name", ">=", request.search),
                FieldFilter("name", "<=", request.search + "\uf8ff"),
            ]
            order = [OrderBy("name")]
        else:
            filters = []
            order = [OrderBy("created_at", descending=True)]

        docs = await self._store.query(COMPANIES, filters, order)
        live = [d for d in docs if not d.data.get("deleted")]
        page = live[request.offset:request.offset + request.page_size]
        return (
            [Company.from_document(d) for d in page],
            Pagination.build(request, len(live)),
        )

    async def get_company(self, company_id: str) -> Company:
        doc = await self._store.get(COMPANIES, company_id)
        if doc is None:
            raise EntityNotFoundError("Company", company_id)
        return Company.from_document(doc)

    async def create_client(
        self, data: ClientCreate, user_id: str | None = None
    ) -> tuple[Company, Subscription, Project]:
        errors: dict[str, str] = {}
        if not data.name.strip():
            errors["name"] = "Name is required"
        if not data.plan_type:
            errors["plan_type"] = "Plan type is required"
        if not data.billing_cycle:
            errors["billing_cycle"] = "Billing cycle is required"
        if errors:
            raise ValidationError(errors)

        name = data.name.strip()
        now = utc_now_iso()
        license_key = generate_license_key()
        limits = PlanLimits.for_plan(data.plan_type)
        start = utc_now()

        async with self._store.transaction():
            company_doc = await self._store.add(
                COMPANIES,
                {
                    "name": name,
                    "business_type": data.business_type,
                    "website": data.website,
                    "address": data.address,
                    "point_person": data.point_person,
                    "phone": data.phone,
                    "email": data.email,
                    "description": data.description,
                    "industry": data.industry,
                    "size": data.size,
                    "deleted": False,
                    "created_at": now,
                    "created_by": user_id,
                    "updated_at": now,
                    "updated_by": user_id,
                },
            )
            subscription_doc = await self._store.add(
                SUBSCRIPTIONS,
                {
                    "licenseKey": license_key,
                    "planType": data.plan_type,
                    "billingCycle": data.billing_cycle,
                    "uid": user_id,
                    "startDate": to_iso(start),
                    "endDate": to_iso(subscription_end_date(start, data.billing_cycle)),
                    "status": "active",
                    "maxProducts": limits.max_products,
                    "maxUsers": limits.max_users,
                    "trialEndDate": None,
                    "companyId": company_doc.id,
                    "createdAt": now,
                    "updatedAt": now,
                },
            )
            project_doc = await self._store.add(
                PROJECTS,
                {
                    "uid": user_id,
                    "license_key": license_key,
                    "project_name": data.project_name or f"{name} Project",
                    "company_name": name,
                    "company_location": format_location(data.address),
                    "company_website": data.website or "",
                    "social_media": data.social_media
                    or {"facebook": "", "instagram": "", "youtube": ""},
                    "created": now,
                    "updated": now,
                    "deleted": False,
                    "tenant_id": self._tenant_id,
                },
            )

        logger.info(
            "Created client %s (company=%s, plan=%s)", name, company_doc.id, data.plan_type
        )
        return (
            Company.from_document(company_doc),
            Subscription.from_document(subscription_doc),
            Project.from_document(project_doc),
        )

    async def update_company(
        self, company_id: str, data: CompanyUpdate, user_id: str | None = None
    ) -> Company:
        await self.get_company(company_id)
        changes: dict[str, Any] = data.model_dump(exclude_unset=True, exclude_none=True)
        changes["updated_at"] = utc_now_iso()
        changes["updated_by"] = user_id
        doc = await self._store.update(COMPANIES, company_id, changes)
        return Company.from_document(doc)

    async def delete_company(self, company_id: str, user_id: str | None = None) -> None:
        """Soft delete: the company stays stored with ``deleted: true``."""
        await self.get_company(company_id)
        await self._store.update(
            COMPANIES,
            company_id,
            {"deleted": True, "updated_at": utc_now_iso(), "updated_by": user_id},
        )
