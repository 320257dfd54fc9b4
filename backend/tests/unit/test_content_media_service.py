"""Unit tests for the ContentMediaService pin/feature handling."""

import io

import pytest
from PIL import Image

from fakes import FakeDocumentStore, FakeFileStorage
from ohshop_admin.application.schemas.content_media import (
    ContentMediaCreate,
    ContentMediaUpdate,
    MediaItemSchema,
)
from ohshop_admin.application.schemas.episode import EpisodeSchema
from ohshop_admin.application.services import ContentMediaService
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore(
        {
            "content_category": {
                "cat-1": {"name": "Highlights", "type": "Video", "pinned_contents": []},
                "cat-2": {"name": "Articles", "type": "Article", "pinned_contents": ["stale"]},
            },
            "content_media": {
                "m1": {"title": "Launch", "type": "Video", "category_id": "cat-1",
                       "pinned": False, "featured": False, "deleted": False,
                       "updated": "2024-01-01T00:00:00+00:00"},
                "m2": {"title": "Recap", "type": "Video", "category_id": "cat-1",
                       "pinned": True, "deleted": False, "updated": "2024-02-01T00:00:00+00:00"},
                "m3": {"title": "Orphan", "type": "Article", "category_id": "ghost",
                       "pinned": True, "deleted": False},
            },
        }
    )


@pytest.fixture
def service(store) -> ContentMediaService:
    return ContentMediaService(store, FakeFileStorage())


@pytest.mark.asyncio
async def test_toggle_pin_mirrors_into_category(service: ContentMediaService, store):
    media = await service.toggle_pin("m1")
    assert media.pinned is True
    assert store.data("content_category", "cat-1")["pinned_contents"] == ["m1"]

    media = await service.toggle_pin("m1")
    assert media.pinned is False
    assert store.data("content_category", "cat-1")["pinned_contents"] == []


@pytest.mark.asyncio
async def test_toggle_feature_uses_stored_state(service: ContentMediaService, store):
    media = await service.toggle_feature("m1")
    assert media.featured is True
    assert "m1" in store.data("content_category", "cat-1")["pinned_contents"]


@pytest.mark.asyncio
async def test_pin_with_missing_category_still_updates_media(service: ContentMediaService, store):
    media = await service.toggle_pin("m3")
    assert media.pinned is False
    assert store.data("content_category", "ghost") is None


@pytest.mark.asyncio
async def test_failed_category_write_rolls_back_media(service: ContentMediaService, store):
    store.fail_on_update.add(("content_category", "cat-1"))
    with pytest.raises(RuntimeError):
        await service.toggle_pin("m1")
    assert store.data("content_media", "m1")["pinned"] is False


@pytest.mark.asyncio
async def test_unpin_is_a_no_op_when_not_pinned(service: ContentMediaService, store):
    media = await service.unpin("m1")
    assert media.pinned is False
    assert store.data("content_category", "cat-1")["pinned_contents"] == []


@pytest.mark.asyncio
async def test_sync_all_pinned_contents(service: ContentMediaService, store):
    updated, errors = await service.sync_all_pinned_contents()
    assert updated == 2
    assert errors == ["Media m3 references missing category ghost"]
    assert store.data("content_category", "cat-1")["pinned_contents"] == ["m2"]
    assert store.data("content_category", "cat-2")["pinned_contents"] == []


@pytest.mark.asyncio
async def test_sync_one_category(service: ContentMediaService, store):
    assert await service.sync_pinned_contents("cat-1") == ["m2"]
    with pytest.raises(EntityNotFoundError):
        await service.sync_pinned_contents("ghost")


@pytest.mark.asyncio
async def test_create_appends_after_last_sibling(service: ContentMediaService):
    media = await service.create_media(
        ContentMediaCreate(
            title=" Teaser ",
            type="Podcast",
            category_id="cat-1",
            media=[MediaItemSchema(url=""), MediaItemSchema(url="https://cdn/x.jpg")],
        )
    )
    assert media.title == "Teaser"
    assert media.type == "Article"
    assert media.position == 1
    assert [item.url for item in media.media] == ["https://cdn/x.jpg"]


@pytest.mark.asyncio
async def test_create_requires_title_and_type_or_category(service: ContentMediaService):
    with pytest.raises(ValidationError):
        await service.create_media(ContentMediaCreate(title="", type="Video"))
    with pytest.raises(ValidationError) as excinfo:
        await service.create_media(ContentMediaCreate(title="Lonely"))
    assert excinfo.value.errors == {"type": "Type and Category are required"}


@pytest.mark.asyncio
async def test_update_keeps_body_in_step_with_description(service: ContentMediaService, store):
    await service.update_media("m1", ContentMediaUpdate(description="New copy"))
    data = store.data("content_media", "m1")
    assert data["description"] == data["body"] == "New copy"


@pytest.mark.asyncio
async def test_episodes_are_stored_and_replaced(service: ContentMediaService, store):
    media = await service.create_media(
        ContentMediaCreate(
            title="Road trip",
            type="Video",
            category_id="cat-1",
            episodes=[
                EpisodeSchema(episode=1, name="Start", start="00:00:00", end="00:02:00"),
                EpisodeSchema(episode=2, name="Bridge", start="00:02:00", public=True),
            ],
        )
    )
    assert [e.name for e in media.episodes] == ["Start", "Bridge"]
    assert store.data("content_media", media.id)["episodes"][0] == {
        "episode": 1, "name": "Start", "start": "00:00:00", "end": "00:02:00", "public": False,
    }

    updated = await service.update_media(
        media.id, ContentMediaUpdate(episodes=[EpisodeSchema(episode=1, name="Only")])
    )
    assert [(e.episode, e.name) for e in updated.episodes] == [(1, "Only")]

    untouched = await service.update_media(media.id, ContentMediaUpdate(title="Road trip 2"))
    assert len(untouched.episodes) == 1


@pytest.mark.asyncio
async def test_list_is_newest_first_and_searchable(service: ContentMediaService):
    media = await service.list_media(category_id="cat-1")
    assert [m.id for m in media] == ["m2", "m1"]
    assert [m.id for m in await service.list_media(search_query="launch")] == ["m1"]


@pytest.mark.asyncio
async def test_upload_thumbnail_path(service: ContentMediaService):
    buffer = io.BytesIO()
    Image.new("RGB", (2, 2)).save(buffer, format="PNG")
    stored = await service.upload_thumbnail("user 1", buffer.getvalue(), "image/png", "my thumb.png")
    assert stored.path.startswith("content_media/thumbnails/user_1/")
    assert stored.path.endswith("_my_thumb.png")
    assert stored.content_type == "image/png"
