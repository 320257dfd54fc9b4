"""Unit tests for the MainCategoryService."""

import io

import pytest
from PIL import Image

from fakes import FakeDocumentStore, FakeFileStorage
from ohshop_admin.application.schemas.common import PositionUpdate
from ohshop_admin.application.schemas.main_category import MainCategoryCreate, MainCategoryUpdate
from ohshop_admin.application.services import MainCategoryService
from ohshop_admin.domain.exceptions import EntityNotFoundError, InvalidFileError, ValidationError


def _png() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), "red").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def files() -> FakeFileStorage:
    return FakeFileStorage()


@pytest.fixture
def service(store, files) -> MainCategoryService:
    return MainCategoryService(store, files)


@pytest.mark.asyncio
async def test_create_category_sets_defaults(service: MainCategoryService):
    category = await service.create_category(MainCategoryCreate(name="  Billboards ", position=3))
    assert category.name == "Billboards"
    assert category.clicks == 0
    assert category.deleted is False
    assert category.position == 3


@pytest.mark.asyncio
async def test_create_category_reports_every_broken_rule(service: MainCategoryService):
    with pytest.raises(ValidationError) as excinfo:
        await service.create_category(
            MainCategoryCreate(name="", description="x" * 1001, position=-1)
        )
    assert set(excinfo.value.errors) == {"name", "description", "position"}


@pytest.mark.asyncio
async def test_list_pages_and_searches(service: MainCategoryService):
    for i, name in enumerate(["Alpha", "Beta", "Gamma", "Alphabet"]):
        await service.create_category(MainCategoryCreate(name=name, position=i))

    page, total = await service.list_categories(page=2, limit=3)
    assert total == 4
    assert [c.name for c in page] == ["Alphabet"]

    found, total = await service.list_categories(search_term="alpha")
    assert total == 2
    assert [c.name for c in found] == ["Alpha", "Alphabet"]


@pytest.mark.asyncio
async def test_list_rejects_unknown_sort_field(service: MainCategoryService):
    with pytest.raises(ValidationError):
        await service.list_categories(sort_by="secret")


@pytest.mark.asyncio
async def test_soft_delete_hides_and_restore_shows(service: MainCategoryService):
    category = await service.create_category(MainCategoryCreate(name="Gone"))
    deleted = await service.soft_delete_category(category.id)
    assert deleted.deleted is True
    assert deleted.date_deleted is not None

    live, _ = await service.list_categories()
    assert live == []
    trash, _ = await service.list_categories(show_deleted=True)
    assert [c.id for c in trash] == [category.id]

    restored = await service.restore_category(category.id)
    assert restored.deleted is False
    assert restored.date_deleted is None


@pytest.mark.asyncio
async def test_update_missing_category(service: MainCategoryService):
    with pytest.raises(EntityNotFoundError):
        await service.update_category("nope", MainCategoryUpdate(name="x"))


@pytest.mark.asyncio
async def test_toggles_and_clicks(service: MainCategoryService):
    category = await service.create_category(MainCategoryCreate(name="Promo"))
    assert (await service.toggle_featured(category.id)).featured is True
    assert (await service.toggle_active(category.id)).active is False
    await service.increment_clicks(category.id)
    assert (await service.increment_clicks(category.id)).clicks == 2


@pytest.mark.asyncio
async def test_next_position(service: MainCategoryService):
    assert await service.next_position() == 0
    await service.create_category(MainCategoryCreate(name="A", position=4))
    assert await service.next_position() == 5


@pytest.mark.asyncio
async def test_update_positions_is_all_or_nothing(service: MainCategoryService, store):
    category = await service.create_category(MainCategoryCreate(name="A", position=0))
    with pytest.raises(EntityNotFoundError):
        await service.update_positions(
            [PositionUpdate(id=category.id, position=7), PositionUpdate(id="missing", position=1)]
        )
    assert store.data("main_categories", category.id)["position"] == 0


@pytest.mark.asyncio
async def test_upload_photo_and_hard_delete_removes_it(service: MainCategoryService, files):
    url = await service.upload_photo(_png(), "image/png", "photo.png")
    assert url.startswith("/uploads/main_categories/")
    assert url.endswith(".png")

    category = await service.create_category(MainCategoryCreate(name="Pic", photo_url=url))
    assert await service.hard_delete_category(category.id) is True
    assert files.files == {}


@pytest.mark.asyncio
async def test_upload_photo_rejects_non_images(service: MainCategoryService):
    with pytest.raises(InvalidFileError):
        await service.upload_photo(b"plain text", "image/png", "fake.png")
    with pytest.raises(InvalidFileError):
        await service.upload_photo(_png(), "application/pdf", "doc.pdf")
