"""Unit tests for the ProductService."""

import pytest

from fakes import FakeDocumentStore
from ohshop_admin.application.schemas.product import ProductUpdate
from ohshop_admin.application.services import ProductService
from ohshop_admin.application.services.product_service import ProductFilters
from ohshop_admin.domain.entities.pagination import PageRequest
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore(
        {
            "products": {
                "p1": {"name": "EDSA Billboard", "price": 5000, "status": "APPROVED",
                       "type": "RENTAL", "active": True, "deleted": False,
                       "categories": ["billboard"], "updated": "2024-03-01T00:00:00+00:00"},
                "p2": {"name": "Mug", "price": 150, "status": "PENDING", "type": "MERCHANDISE",
                       "active": False, "ai_text_tags": ["ceramic"],
                       "updated": "2024-02-01T00:00:00+00:00"},
                "p3": {"name": "LED Wall", "price": 12000, "status": "APPROVED", "type": "RENTAL",
                       "active": True, "deleted": True, "updated": "2024-01-01T00:00:00+00:00",
                       "screen_size": "10x20"},
            }
        }
    )


@pytest.fixture
def service(store) -> ProductService:
    return ProductService(store)


@pytest.mark.asyncio
async def test_all_means_no_status_filter(service: ProductService):
    products, pagination = await service.list_products(ProductFilters(status="ALL"), PageRequest())
    assert [p.id for p in products] == ["p1", "p2", "p3"]
    assert pagination.total_count == 3


@pytest.mark.asyncio
async def test_filters_combine(service: ProductService):
    products, _ = await service.list_products(
        ProductFilters(type="RENTAL", price_max=10000, category="billboard"), PageRequest()
    )
    assert [p.id for p in products] == ["p1"]


@pytest.mark.asyncio
async def test_search_looks_at_ai_tags(service: ProductService):
    products, pagination = await service.list_products(
        ProductFilters(search="CERAMIC"), PageRequest()
    )
    assert [p.id for p in products] == ["p2"]
    assert pagination.total_count == 1


@pytest.mark.asyncio
async def test_custom_fields_are_exposed(service: ProductService):
    product = await service.get_product("p3")
    assert product.custom_fields == {"screen_size": "10x20"}


@pytest.mark.asyncio
async def test_update_writes_extra_keys(service: ProductService, store):
    product = await service.update_product("p2", ProductUpdate(price=175, material="clay"))
    assert product.price == 175
    assert store.data("products", "p2")["material"] == "clay"


@pytest.mark.asyncio
async def test_soft_delete(service: ProductService):
    product = await service.soft_delete_product("p1")
    assert product.deleted is True
    with pytest.raises(ValidationError):
        await service.soft_delete_product("p1")
    with pytest.raises(EntityNotFoundError):
        await service.soft_delete_product("missing")


@pytest.mark.asyncio
async def test_stats(service: ProductService):
    stats = await service.get_stats()
    assert stats.total == 3
    assert stats.active == 2
    assert stats.deleted == 1
    assert stats.pending == 1
    assert stats.approved == 2
    assert stats.total_value == 17150
    assert stats.by_type == {"RENTAL": 2, "MERCHANDISE": 1}


@pytest.mark.asyncio
async def test_add_deleted_field_only_touches_missing(service: ProductService, store):
    result = await service.add_deleted_field()
    assert (result.processed, result.updated, result.already_had_field) == (3, 1, 2)
    assert store.data("products", "p2")["deleted"] is False
