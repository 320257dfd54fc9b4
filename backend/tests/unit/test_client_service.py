"""Unit tests for client onboarding and company listing."""

from datetime import datetime, timezone

import pytest

from fakes import FakeDocumentStore
from ohshop_admin.application.schemas.client import ClientCreate, CompanyUpdate
from ohshop_admin.application.services import ClientService
from ohshop_admin.application.services.client_service import generate_license_key
from ohshop_admin.domain.entities.company import PlanLimits, add_months, subscription_end_date
from ohshop_admin.domain.entities.pagination import PageRequest, Pagination
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore(
        {
            "companies": {
                "c1": {"name": "Acme", "created_at": "2024-01-01T00:00:00+00:00"},
                "c2": {"name": "Acorn", "created_at": "2024-03-01T00:00:00+00:00"},
                "c3": {"name": "Beta", "created_at": "2024-02-01T00:00:00+00:00"},
                "c4": {"name": "Ace", "created_at": "2024-04-01T00:00:00+00:00", "deleted": True},
            }
        }
    )


@pytest.fixture
def service(store) -> ClientService:
    return ClientService(store, tenant_id="tenant-1")


def test_plan_limits():
    assert PlanLimits.for_plan("family") == PlanLimits(max_products=5, max_users=12)
    assert PlanLimits.for_plan("enterprise") == PlanLimits(max_products=99999, max_users=99999)
    assert PlanLimits.for_plan("unknown").max_products == 100


def test_subscription_end_date_clamps_month_end():
    start = datetime(2024, 1, 31, tzinfo=timezone.utc)
    assert subscription_end_date(start, "monthly") == datetime(2024, 2, 29, tzinfo=timezone.utc)
    assert subscription_end_date(start, "annually") == datetime(2025, 1, 31, tzinfo=timezone.utc)
    assert subscription_end_date(start, "lifetime") is None
    assert add_months(start, 11).month == 12


def test_license_key_shape():
    key = generate_license_key()
    assert len(key) == 16
    assert key.isalnum() and key.upper() == key


def test_pagination_build():
    pagination = Pagination.build(PageRequest(page=2, page_size=10), 25)
    assert pagination.total_pages == 3
    assert pagination.has_next_page and pagination.has_prev_page
    assert Pagination.build(PageRequest(), 0).total_pages == 0


def test_pagination_of_an_empty_listing():
    pagination = Pagination.build(PageRequest(), 0)
    assert pagination.total_count == 0
    assert pagination.total_pages == 0
    assert pagination.has_next_page is False
    assert pagination.has_prev_page is False


def test_page_request_rejects_bad_values():
    with pytest.raises(ValueError):
        PageRequest(page=0)


@pytest.mark.asyncio
async def test_list_newest_first_without_deleted(service: ClientService):
    companies, pagination = await service.list_companies(PageRequest(page=1, page_size=2))
    assert [c.id for c in companies] == ["c2", "c3"]
    assert pagination.total_count == 3
    assert pagination.has_next_page is True


@pytest.mark.asyncio
async def test_search_is_a_name_prefix(service: ClientService):
    companies, pagination = await service.list_companies(PageRequest(search="Ac"))
    assert [c.name for c in companies] == ["Acme", "Acorn"]
    assert pagination.total_count == 2


@pytest.mark.asyncio
async def test_create_client_writes_three_linked_documents(service: ClientService, store):
    company, subscription, project = await service.create_client(
        ClientCreate(
            name=" Acme Outdoor ",
            plan_type="solo",
            billing_cycle="monthly",
            address={"city": "Makati", "province": "Metro Manila"},
        ),
        user_id="admin-1",
    )
    assert company.name == "Acme Outdoor"
    assert company.created_by == "admin-1"
    assert subscription.company_id == company.id
    assert subscription.max_products == 3
    assert subscription.end_date is not None
    assert project.license_key == subscription.license_key
    assert project.project_name == "Acme Outdoor Project"
    assert project.company_location == "Makati, Metro Manila"
    assert project.tenant_id == "tenant-1"
    assert project.social_media == {"facebook": "", "instagram": "", "youtube": ""}
    assert store.data("subscriptions", subscription.id)["status"] == "active"


@pytest.mark.asyncio
async def test_create_client_validates_required_fields(service: ClientService, store):
    with pytest.raises(ValidationError) as excinfo:
        await service.create_client(ClientCreate(name=""))
    assert set(excinfo.value.errors) == {"name", "plan_type", "billing_cycle"}
    assert await store.count("subscriptions") == 0


@pytest.mark.asyncio
async def test_update_and_soft_delete(service: ClientService, store):
    company = await service.update_company("c1", CompanyUpdate(phone="555"), user_id="u")
    assert company.phone == "555"
    assert company.updated_by == "u"

    await service.delete_company("c1")
    assert store.data("companies", "c1")["deleted"] is True

    with pytest.raises(EntityNotFoundError):
        await service.delete_company("missing")
