"""Unit tests for the company_id backfills."""

import pytest

from fakes import FakeDocumentStore, RecordingSSE
from ohshop_admin.application.services import CompanyBackfillService, MigrationHistoryService
from ohshop_admin.application.services.company_backfill_service import (
    SKIP_NO_OWNER_FIELD,
    SKIP_OWNER_NOT_FOUND,
    SKIP_OWNER_WITHOUT_COMPANY,
    is_valid_company_id,
)
from ohshop_admin.domain.entities.migration import MigrationStatus
from ohshop_admin.domain.exceptions import MigrationAbortedError


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore(
        {
            "iboard_users": {
                "s1": {"company_id": "comp-1", "license_key": "LK-A"},
                "s2": {"company_id": "", "license_key": "LK-A"},
                "s3": {"license_key": "LK-B"},
                "s4": {},
            },
            "products": {
                "p1": {"seller_id": "s1"},
                "p2": {"seller_id": "s2"},
                "p3": {"name": "no seller"},
                "p4": {"seller_id": "ghost"},
                "p5": {"seller_id": "s1", "company_id": "comp-9"},
            },
            "booking": {
                "b1": {"seller_id": "s2", "buyer_id": "s1"},
            },
        }
    )


@pytest.fixture
def sse() -> RecordingSSE:
    return RecordingSSE()


@pytest.fixture
def service(store, sse) -> CompanyBackfillService:
    return CompanyBackfillService(store, MigrationHistoryService(store), sse, batch_size=2)


def test_valid_company_id():
    assert is_valid_company_id("abc")
    assert not is_valid_company_id("ab")
    assert not is_valid_company_id("   ")
    assert not is_valid_company_id(None)


@pytest.mark.asyncio
async def test_products_backfill(service: CompanyBackfillService, store, sse):
    result = await service.backfill("products")

    assert (result.total, result.updated, result.skipped, result.errors) == (4, 1, 3, 0)
    assert result.skip_reasons == {
        SKIP_OWNER_WITHOUT_COMPANY: 1,
        SKIP_NO_OWNER_FIELD: 1,
        SKIP_OWNER_NOT_FOUND: 1,
    }
    assert store.data("products", "p1")["company_id"] == "comp-1"
    assert store.data("products", "p5")["company_id"] == "comp-9"

    history = store.data("migration_history", result.history_id)
    assert history["status"] == "completed"
    assert history["successfulItems"] == 1

    statuses = [event["status"] for event in sse.of_type("migration")]
    assert statuses[0] == "running"
    assert statuses[-1] == "completed"


@pytest.mark.asyncio
async def test_booking_falls_back_to_buyer(service: CompanyBackfillService, store):
    result = await service.backfill("booking")
    assert result.updated == 1
    assert store.data("booking", "b1")["company_id"] == "comp-1"


@pytest.mark.asyncio
async def test_dry_run_writes_nothing(service: CompanyBackfillService, store):
    result = await service.backfill("products", dry_run=True)
    assert result.updated == 1
    assert "company_id" not in store.data("products", "p1")


@pytest.mark.asyncio
async def test_unknown_target(service: CompanyBackfillService):
    with pytest.raises(ValueError):
        await service.backfill("invoices")


@pytest.mark.asyncio
async def test_user_companies_grouped_by_license_key(service: CompanyBackfillService, store):
    result = await service.backfill_user_companies()

    assert result.total == 3
    assert result.updated == 2
    assert result.skipped == 1
    assert result.companies_created == 1
    assert store.data("iboard_users", "s2")["company_id"] == "comp-1"
    new_company = store.data("iboard_users", "s3")["company_id"]
    assert store.data("companies", new_company)["migration_source"] == "user_company_migration"


@pytest.mark.asyncio
async def test_user_companies_dry_run_counts_new_companies(service: CompanyBackfillService, store):
    result = await service.backfill_user_companies(dry_run=True)
    assert result.companies_created == 1
    assert await store.count("companies") == 0


@pytest.mark.asyncio
async def test_stats(service: CompanyBackfillService):
    stats = await service.get_stats("products")
    assert (stats.total, stats.successful) == (5, 1)


@pytest.mark.asyncio
async def test_chats_resolve_through_participants(service: CompanyBackfillService, store):
    await store.add("chats", {"participants": ["ghost", "s1"]}, doc_id="c1")
    await store.add("chats", {"participants": []}, doc_id="c2")
    await store.add("chats", {"participants": ["s2"]}, doc_id="c3")

    result = await service.backfill("chats")

    assert store.data("chats", "c1")["company_id"] == "comp-1"
    assert result.updated == 1
    assert result.skip_reasons == {SKIP_NO_OWNER_FIELD: 1, SKIP_OWNER_WITHOUT_COMPANY: 1}


@pytest.mark.asyncio
async def test_backfill_stopped_by_history_failure_is_closed_as_failed(
    service: CompanyBackfillService, store, sse, monkeypatch
):
    async def history_offline(self, migration_id, **changes):
        raise RuntimeError("history offline")

    monkeypatch.setattr(MigrationHistoryService, "update_progress", history_offline)

    with pytest.raises(MigrationAbortedError) as excinfo:
        await service.backfill("products")

    result = excinfo.value.result
    assert result.status is MigrationStatus.FAILED
    assert result.error == "history offline"
    assert result.updated == 1

    history = store.data("migration_history", result.history_id)
    assert history["status"] == "failed"
    assert "history offline" in history["errorDetails"]

    last_event = sse.of_type("migration")[-1]
    assert last_event["status"] == "failed"
    assert last_event["error"] == "history offline"


@pytest.mark.asyncio
async def test_user_company_backfill_failure_is_closed_as_failed(
    service: CompanyBackfillService, store
):
    store.fail_on_update.add(("iboard_users", "s2"))

    with pytest.raises(MigrationAbortedError) as excinfo:
        await service.backfill_user_companies()

    history = store.data("migration_history", excinfo.value.result.history_id)
    assert history["status"] == "failed"
    assert store.data("iboard_users", "s2")["company_id"] == ""
