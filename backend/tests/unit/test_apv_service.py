"""Unit tests for APV videos and per-category pinning."""

import pytest

from fakes import FakeDocumentStore
from ohshop_admin.application.schemas.apv import ApvVideoCreate, ApvVideoUpdate
from ohshop_admin.application.schemas.episode import EpisodeSchema
from ohshop_admin.application.services import ApvService
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError


def _video(road: str, category_id: str | None, created: str, **extra) -> dict:
    return {
        "road": road,
        "category_id": category_id,
        "active": True,
        "deleted": False,
        "pinned": False,
        "created": created,
        **extra,
    }


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore(
        {
            "green_view_categories": {
                "north": {"name": "North", "pinned": "a1", "latest_apv_id": "a1"},
                "south": {"name": "South", "pinned": "b1"},
            },
            "apv": {
                "a1": _video("EDSA", "north", "2024-01-01T00:00:00+00:00", pinned=True, position=2),
                "a2": _video("C5", "north", "2024-03-01T00:00:00+00:00", position=1),
                "a3": _video("Skyway", "north", "2024-05-01T00:00:00+00:00", active=False),
                "b1": _video("SLEX", "south", "2024-02-01T00:00:00+00:00", pinned=True),
            },
        }
    )


@pytest.fixture
def service(store) -> ApvService:
    return ApvService(store)


@pytest.mark.asyncio
async def test_list_by_category_follows_position(service: ApvService):
    assert [v.id for v in await service.list_by_category("north")] == ["a3", "a2", "a1"]


@pytest.mark.asyncio
async def test_pin_unpins_others_in_the_same_category_only(service: ApvService, store):
    video = await service.pin_video("a2")

    assert video.pinned is True
    assert store.data("apv", "a1")["pinned"] is False
    assert store.data("apv", "b1")["pinned"] is True
    category = store.data("green_view_categories", "north")
    assert category["pinned"] == "a2"
    assert category["latest_apv_id"] == "a2"
    assert "latest_apv_updated" in category


@pytest.mark.asyncio
async def test_pin_can_keep_other_pins(service: ApvService, store):
    await service.pin_video("a2", unpin_others=False)
    assert store.data("apv", "a1")["pinned"] is True
    assert {v.id for v in await service.get_pinned_videos("north")} == {"a1", "a2"}


@pytest.mark.asyncio
async def test_failed_category_write_rolls_back_pin(service: ApvService, store):
    store.fail_on_update.add(("green_view_categories", "north"))
    with pytest.raises(RuntimeError):
        await service.pin_video("a2")
    assert store.data("apv", "a1")["pinned"] is True
    assert store.data("apv", "a2")["pinned"] is False


@pytest.mark.asyncio
async def test_unpin_clears_category_only_when_it_points_here(service: ApvService, store):
    await service.unpin_video("a1")
    assert store.data("green_view_categories", "north")["pinned"] == ""
    assert store.data("green_view_categories", "north")["latest_apv_id"] == ""

    await store.update("apv", "a2", {"pinned": True})
    await store.update("green_view_categories", "north", {"pinned": "a3"})
    await service.unpin_video("a2")
    assert store.data("green_view_categories", "north")["pinned"] == "a3"


@pytest.mark.asyncio
async def test_pinned_videos_across_categories(service: ApvService):
    assert {v.id for v in await service.get_pinned_videos()} == {"a1", "b1"}


@pytest.mark.asyncio
async def test_pin_latest_skips_inactive_videos(service: ApvService, store):
    assert await service.pin_latest_video("north") == "a2"
    assert store.data("apv", "a1")["pinned"] is False
    assert store.data("green_view_categories", "north")["pinned"] == "a2"

    assert await service.pin_latest_video() == "a2"
    assert await service.pin_latest_video("empty") is None


@pytest.mark.asyncio
async def test_create_with_episodes_and_pin(service: ApvService, store):
    video = await service.create_video(
        ApvVideoCreate(
            road=" Coastal Road ",
            category_id="south",
            dh="https://videos.example.com/coastal.m3u8",
            pinned=True,
            episodes=[EpisodeSchema(episode=1, name="Toll plaza", start="00:00:10")],
        )
    )
    assert video.road == "Coastal Road"
    assert video.pinned is True
    assert video.episodes[0].start == "00:00:10"
    assert store.data("apv", "b1")["pinned"] is False
    assert store.data("green_view_categories", "south")["pinned"] == video.id


@pytest.mark.asyncio
async def test_create_validation(service: ApvService):
    with pytest.raises(ValidationError) as excinfo:
        await service.create_video(ApvVideoCreate(road="", position=-1, dh="ftp://x"))
    assert set(excinfo.value.errors) == {"road", "position", "dh"}


@pytest.mark.asyncio
async def test_update_fields_and_pin_state(service: ApvService, store):
    video = await service.update_video("a1", ApvVideoUpdate(version="v2", pinned=False))
    assert video.version == "v2"
    assert video.pinned is False
    assert store.data("green_view_categories", "north")["pinned"] == ""

    video = await service.update_video("a2", ApvVideoUpdate(pinned=True))
    assert video.pinned is True

    with pytest.raises(ValidationError):
        await service.update_video("a2", ApvVideoUpdate(road="   "))


@pytest.mark.asyncio
async def test_delete_pinned_video_releases_category(service: ApvService, store):
    assert await service.delete_video("b1") is True
    assert store.data("green_view_categories", "south")["pinned"] == ""
    with pytest.raises(EntityNotFoundError):
        await service.get_video("b1")
