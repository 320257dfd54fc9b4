"""Unit tests for EpisodeTemplateService."""

import pytest

from fakes import FakeDocumentStore
from ohshop_admin.application.schemas.episode import (
    EpisodeSchema,
    EpisodeTemplateCreate,
    EpisodeTemplateUpdate,
)
from ohshop_admin.application.services import EpisodeTemplateService
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore(
        {
            "episode_templates": {
                "t1": {
                    "name": "weekend loop",
                    "description": "",
                    "createdBy": "u1",
                    "episodes": [{"episode": 1, "name": "Intro", "start": "00:00:00"}],
                },
                "t2": {"name": "Airport run", "createdBy": "u2", "episodes": []},
            }
        }
    )


@pytest.fixture
def service(store) -> EpisodeTemplateService:
    return EpisodeTemplateService(store)


@pytest.mark.asyncio
async def test_create_records_creator(service: EpisodeTemplateService, store):
    template = await service.create_template(
        EpisodeTemplateCreate(
            name="  City tour ",
            episodes=[EpisodeSchema(episode=1, name="Plaza", description="Main square")],
        ),
        user_id="u1",
    )
    assert template.name == "City tour"
    assert template.created_by == "u1"
    stored = store.data("episode_templates", template.id)
    assert stored["createdBy"] == "u1"
    assert stored["episodes"][0]["description"] == "Main square"


@pytest.mark.asyncio
async def test_create_requires_a_name(service: EpisodeTemplateService):
    with pytest.raises(ValidationError) as excinfo:
        await service.create_template(EpisodeTemplateCreate(name="  "))
    assert excinfo.value.errors == {"name": "Template name is required"}


@pytest.mark.asyncio
async def test_list_all_and_by_creator(service: EpisodeTemplateService):
    assert [t.id for t in await service.list_templates()] == ["t2", "t1"]
    mine = await service.list_templates(created_by="u1")
    assert [t.id for t in mine] == ["t1"]
    assert mine[0].episodes[0].name == "Intro"


@pytest.mark.asyncio
async def test_update_replaces_episodes(service: EpisodeTemplateService):
    template = await service.update_template(
        "t2",
        EpisodeTemplateUpdate(
            episodes=[EpisodeSchema(episode=1, name="Gate"), EpisodeSchema(episode=2, name="Runway")]
        ),
    )
    assert [e.name for e in template.episodes] == ["Gate", "Runway"]
    assert template.name == "Airport run"


@pytest.mark.asyncio
async def test_delete_and_missing(service: EpisodeTemplateService):
    assert await service.delete_template("t1") is True
    with pytest.raises(EntityNotFoundError):
        await service.get_template("t1")
    with pytest.raises(EntityNotFoundError):
        await service.update_template("t1", EpisodeTemplateUpdate(name="x"))
