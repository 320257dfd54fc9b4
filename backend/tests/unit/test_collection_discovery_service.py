"""Unit tests for collection discovery, its cache and its events."""

import asyncio
from contextlib import asynccontextmanager

import pytest

from fakes import FakeDocumentStore
from ohshop_admin.application.services import CollectionCatalog, CollectionDiscoveryService
from ohshop_admin.application.services.collection_discovery_service import (
    detect_schema,
    estimate_size,
    load_catalog,
)
from ohshop_admin.domain.entities.collection_metadata import (
    CollectionPriority,
    DiscoveryEventType,
)
from ohshop_admin.domain.exceptions import (
    DiscoveryFailedError,
    DiscoveryInProgressError,
    EntityNotFoundError,
)

CATALOG = CollectionCatalog(
    known_collections=["products", "empty_known"],
    categories={"Commerce": ["product", "order"], "Users": ["user"]},
    high_priority=["products"],
)


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore(
        {
            "products": {"p1": {"name": "Mug", "price": 10, "tags": []}, "p2": {"active": True}},
            "users": {"u1": {"email": "a@b.c"}},
            "test_things": {"t1": {}},
            "logs_2024": {"l1": {}},
        }
    )


def _factory(store):
    @asynccontextmanager
    async def open_store():
        yield store

    return open_store


def _service(store, **kwargs) -> CollectionDiscoveryService:
    kwargs.setdefault("exclude_patterns", ["logs_*"])
    return CollectionDiscoveryService(_factory(store), CATALOG, **kwargs)


def test_estimate_size():
    assert estimate_size(0) == "0 B"
    assert estimate_size(3) == "3.0 KB"
    assert estimate_size(2048) == "2.0 MB"


def test_detect_schema_keeps_first_seen_type():
    schema = detect_schema([{"a": 1, "b": None}, {"a": "x", "c": [1]}])
    assert schema.fields == ["a", "b", "c"]
    assert schema.types == {"a": "number", "b": "null", "c": "array"}


def test_catalog_rules():
    assert CATALOG.categorize("ProductReviews") == "Commerce"
    assert CATALOG.categorize("misc") == "Other"
    assert CATALOG.priority("products") is CollectionPriority.HIGH
    assert CATALOG.priority("test_x") is CollectionPriority.LOW
    assert CATALOG.priority("users") is CollectionPriority.MEDIUM


def test_load_catalog(tmp_path):
    path = tmp_path / "collections.yaml"
    path.write_text(
        "known_collections: [products]\n"
        "categories:\n  Commerce: [product]\n"
        "priority:\n  high: [products]\n",
        encoding="utf-8",
    )
    catalog = load_catalog(path)
    assert catalog.known_collections == ["products"]
    assert catalog.categories == {"Commerce": ["product"]}
    assert catalog.medium_priority == []


@pytest.mark.asyncio
async def test_discovery_merges_known_and_stored_collections(store):
    service = _service(store)
    result = await service.discover_collections()

    names = [c.name for c in result.collections]
    assert names == ["products", "empty_known", "users"]
    products = service.get_collection("products")
    assert products.document_count == 2
    assert products.category == "Commerce"
    assert products.schema.fields == ["name", "price", "tags", "active"]
    assert service.get_collection("empty_known").schema is None
    assert result.cache_hit is False


@pytest.mark.asyncio
async def test_test_collections_can_be_included(store):
    service = _service(store, include_test_collections=True)
    result = await service.discover_collections()
    assert "test_things" in [c.name for c in result.collections]


@pytest.mark.asyncio
async def test_second_call_uses_cache(store):
    service = _service(store)
    await service.discover_collections()
    cached = await service.discover_collections()
    assert cached.cache_hit is True
    assert cached.warnings == ["Using cached data"]


@pytest.mark.asyncio
async def test_added_and_removed_events_after_first_run(store):
    service = _service(store, cache_seconds=0)
    events = []
    for event_type in DiscoveryEventType:
        service.add_listener(event_type, events.append)

    await service.discover_collections()
    assert [e.type for e in events] == [DiscoveryEventType.DISCOVERY_COMPLETE]

    await store.add("orders", {"total": 5}, doc_id="o1")
    await store.delete("users", "u1")
    events.clear()
    await service.discover_collections()

    added = [e.collection.name for e in events if e.type is DiscoveryEventType.COLLECTION_ADDED]
    removed = [e.collection.name for e in events if e.type is DiscoveryEventType.COLLECTION_REMOVED]
    assert added == ["orders"]
    assert removed == ["users"]
    assert events[-1].type is DiscoveryEventType.DISCOVERY_COMPLETE


@pytest.mark.asyncio
async def test_failing_listener_does_not_break_discovery(store):
    service = _service(store)

    async def broken(event):
        raise RuntimeError("listener down")

    service.add_listener(DiscoveryEventType.DISCOVERY_COMPLETE, broken)
    result = await service.discover_collections()
    assert result.total_count == 3


@pytest.mark.asyncio
async def test_concurrent_discovery_is_rejected(store):
    gate = asyncio.Event()

    @asynccontextmanager
    async def slow_store():
        await gate.wait()
        yield store

    service = CollectionDiscoveryService(slow_store, CATALOG)
    first = asyncio.create_task(service.discover_collections())
    await asyncio.sleep(0)
    assert service.in_progress is True
    with pytest.raises(DiscoveryInProgressError):
        await service.discover_collections(force_refresh=True)

    gate.set()
    await first
    assert service.in_progress is False


@pytest.mark.asyncio
async def test_refresh_statistics_and_clear(store):
    service = _service(store)
    await service.discover_collections()

    await store.add("products", {"name": "Cap"}, doc_id="p3")
    refreshed = await service.refresh_collection("products")
    assert refreshed.document_count == 3

    stats = service.get_statistics()
    assert stats.total_collections == 3
    assert stats.category_counts == {"Commerce": 1, "Other": 1, "Users": 1}
    assert [c.name for c in service.get_collections_by_priority(CollectionPriority.HIGH)] == [
        "products"
    ]

    service.clear_cache()
    with pytest.raises(EntityNotFoundError):
        service.get_collection("products")


def _flaky_factory(store, failures: list[Exception]):
    """Raises the queued errors on open, then hands out ``store``."""

    @asynccontextmanager
    async def open_store():
        if failures:
            raise failures.pop(0)
        yield store

    return open_store


@pytest.mark.asyncio
async def test_failed_run_emits_error_and_records_it(store):
    service = CollectionDiscoveryService(
        _flaky_factory(store, [ConnectionError("store unreachable")]), CATALOG
    )
    errors = []
    service.add_listener(DiscoveryEventType.DISCOVERY_ERROR, errors.append)

    with pytest.raises(DiscoveryFailedError, match="store unreachable"):
        await service.discover_collections()

    assert service.in_progress is False
    assert len(errors) == 1
    assert errors[0].error.severity == "high"
    assert "store unreachable" in errors[0].error.message
    assert "store unreachable" in service.get_statistics().last_error

    await service.discover_collections()
    assert service.last_error is None
    assert service.get_statistics().last_error is None


@pytest.mark.asyncio
async def test_failed_refresh_names_the_collection(store):
    failures: list[Exception] = []
    service = CollectionDiscoveryService(_flaky_factory(store, failures), CATALOG)
    await service.discover_collections()
    errors = []
    service.add_listener(DiscoveryEventType.DISCOVERY_ERROR, errors.append)

    failures.append(ConnectionError("store unreachable"))
    with pytest.raises(DiscoveryFailedError):
        await service.refresh_collection("products")

    assert errors[0].error.collection == "products"
    assert service.last_error.startswith("Could not refresh collection products")
    assert service.get_collection("products").document_count == 2
