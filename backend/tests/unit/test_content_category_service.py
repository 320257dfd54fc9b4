"""Unit tests for the ContentCategoryService."""

import io

import pytest
from PIL import Image

from fakes import FakeDocumentStore, FakeFileStorage
from ohshop_admin.application.schemas.content_category import (
    ContentCategoryCreate,
    ContentCategoryUpdate,
)
from ohshop_admin.application.services import ContentCategoryService
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError


def _jpeg() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), "blue").save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore(
        {
            "content_category": {
                "hpv": {"name": "HPV", "type": "HPV", "position": 1, "deleted": False,
                        "pinned_contents": ["m2", "gone", "m1"]},
                "news": {"name": "News", "type": "Article", "position": 0, "deleted": False,
                         "description": "Daily headlines"},
                "old": {"name": "Old", "type": "Video", "position": 2, "deleted": True},
            },
            "content_media": {
                "m1": {"title": "First", "type": "Video", "category_id": "hpv"},
                "m2": {"title": "Second", "type": "Video", "category_id": "hpv"},
            },
        }
    )


@pytest.fixture
def files() -> FakeFileStorage:
    return FakeFileStorage()


@pytest.fixture
def service(store, files) -> ContentCategoryService:
    return ContentCategoryService(store, files)


@pytest.mark.asyncio
async def test_list_orders_by_position_and_hides_deleted(service: ContentCategoryService):
    categories = await service.list_categories()
    assert [c.id for c in categories] == ["news", "hpv"]

    deleted = await service.list_categories(show_deleted=True)
    assert [c.id for c in deleted] == ["old"]


@pytest.mark.asyncio
async def test_list_filters_by_type_and_search(service: ContentCategoryService):
    assert [c.id for c in await service.list_categories(type="HPV")] == ["hpv"]
    assert [c.id for c in await service.list_categories(search_query="headlines")] == ["news"]


@pytest.mark.asyncio
async def test_create_requires_name_and_type(service: ContentCategoryService):
    with pytest.raises(ValidationError) as excinfo:
        await service.create_category(ContentCategoryCreate(name=" ", type=""))
    assert excinfo.value.errors == {"name": "Name is required", "type": "Type is required"}


@pytest.mark.asyncio
async def test_create_starts_with_empty_pinned_list(service: ContentCategoryService):
    category = await service.create_category(ContentCategoryCreate(name="Tips", type="Article"))
    assert category.pinned_contents == []
    assert category.deleted is False


@pytest.mark.asyncio
async def test_partial_update_only_checks_given_fields(service: ContentCategoryService):
    updated = await service.update_category("news", ContentCategoryUpdate(active=True))
    assert updated.active is True
    assert updated.name == "News"

    with pytest.raises(ValidationError):
        await service.update_category("news", ContentCategoryUpdate(name=""))


@pytest.mark.asyncio
async def test_content_types_are_distinct_and_sorted(service: ContentCategoryService):
    assert await service.get_content_types() == ["Article", "HPV", "Video"]


@pytest.mark.asyncio
async def test_pinned_media_keeps_pin_order_and_skips_missing(service: ContentCategoryService):
    media = await service.get_pinned_media("hpv")
    assert [m.id for m in media] == ["m2", "m1"]


@pytest.mark.asyncio
async def test_upload_logo_replaces_url(service: ContentCategoryService, files):
    category = await service.upload_logo("news", _jpeg(), "image/jpeg", "logo.jpg")
    assert category.logo == "/uploads/content_categories/news/logo.jpg"
    assert "content_categories/news/logo.jpg" in files.files


@pytest.mark.asyncio
async def test_hard_delete_missing_category(service: ContentCategoryService):
    with pytest.raises(EntityNotFoundError):
        await service.hard_delete_category("nope")
