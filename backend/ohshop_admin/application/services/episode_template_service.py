"""Application service (use case) for reusable episode templates."""

import logging
from typing import Any

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.application.schemas.episode import (
    EpisodeSchema,
    EpisodeTemplateCreate,
    EpisodeTemplateUpdate,
)
from ohshop_admin.domain.entities.document import FieldFilter, utc_now_iso
from ohshop_admin.domain.entities.episode import Episode, EpisodeTemplate
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError

logger = logging.getLogger(__name__)

COLLECTION = "episode_templates"


def episode_dicts(items: list[EpisodeSchema]) -> list[dict[str, Any]]:
    """Stored form of an episode list, in the order given."""
    return [Episode(**item.model_dump()).to_dict() for item in items]


def _require_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError({"name": "Template name is required"})
    return name


class EpisodeTemplateService:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def get_template(self, template_id: str) -> EpisodeTemplate:
        doc = await self._store.get(COLLECTION, template_id)
        if doc is None:
            raise EntityNotFoundError("EpisodeTemplate", template_id)
        return EpisodeTemplate.from_document(doc)

    async def list_templates(self, created_by: str | None = None) -> list[EpisodeTemplate]:
        """All templates, or only those created by ``created_by``, sorted by name."""
        filters = []
        if created_by:
            filters.append(FieldFilter("createdBy", "==", created_by))
        docs = await self._store.query(COLLECTION, filters)
        templates = [EpisodeTemplate.from_document(d) for d in docs]
        return sorted(templates, key=lambda t: t.name.lower())

    async def create_template(
        self, data: EpisodeTemplateCreate, user_id: str | None = None
    ) -> EpisodeTemplate:
        now = utc_now_iso()
        doc = await self._store.add(
            COLLECTION,
            {
                "name": _require_name(data.name),
                "description": data.description,
                "episodes": episode_dicts(data.episodes),
                "createdBy": user_id,
                "created": now,
                "updated": now,
            },
        )
        logger.info("Created episode template %s with %d episodes", doc.id, len(data.episodes))
        return EpisodeTemplate.from_document(doc)

    async def update_template(
        self, template_id: str, data: EpisodeTemplateUpdate
    ) -> EpisodeTemplate:
        await self.get_template(template_id)
        changes: dict[str, Any] = {}
        if data.name is not None:
            changes["name"] = _require_name(data.name)
        if data.description is not None:
            changes["description"] = data.description
        if data.episodes is not None:
            changes["episodes"] = episode_dicts(data.episodes)
        changes["updated"] = utc_now_iso()
        doc = await self._store.update(COLLECTION, template_id, changes)
        return EpisodeTemplate.from_document(doc)

    async def delete_template(self, template_id: str) -> bool:
        await self.get_template(template_id)
        return await self._store.delete(COLLECTION, template_id)
