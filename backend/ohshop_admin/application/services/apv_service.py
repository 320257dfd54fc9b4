"""Application service (use case) for APV road videos and their pinning.

At most one video per green view category is pinned. The category
document records the pinned video in ``pinned`` and ``latest_apv_id``.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.application.schemas.apv import ApvVideoCreate, ApvVideoUpdate
from ohshop_admin.application.services.episode_template_service import episode_dicts
from ohshop_admin.domain.entities.apv import ApvVideo, validate_apv
from ohshop_admin.domain.entities.document import FieldFilter, utc_now_iso
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError

logger = logging.getLogger(__name__)

COLLECTION = "apv"
CATEGORY_COLLECTION = "green_view_categories"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class ApvService:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def get_video(self, video_id: str) -> ApvVideo:
        doc = await self._store.get(COLLECTION, video_id)
        if doc is None:
            raise EntityNotFoundError("ApvVideo", video_id)
        return ApvVideo.from_document(doc)

    async def list_by_category(self, category_id: str) -> list[ApvVideo]:
        docs = await self._store.query(COLLECTION, [FieldFilter("category_id", "==", category_id)])
        return sorted((ApvVideo.from_document(d) for d in docs), key=lambda v: v.position)

    async def get_pinned_videos(self, category_id: str | None = None) -> list[ApvVideo]:
        filters = [FieldFilter("pinned", "==", True)]
        if category_id:
            filters.append(FieldFilter("category_id", "==", category_id))
        return [ApvVideo.from_document(d) for d in await self._store.query(COLLECTION, filters)]

    async def create_video(self, data: ApvVideoCreate) -> ApvVideo:
        errors = validate_apv(data.road, data.position, data.dh)
        if errors:
            raise ValidationError(errors)

        now = utc_now_iso()
        doc = await self._store.add(
            COLLECTION,
            {
                "road": data.road.strip(),
                "category_id": data.category_id,
                "position": data.position,
                "orientation": data.orientation,
                "version": data.version,
                "dh": data.dh,
                "active": data.active,
                "pinned": False,
                "deleted": False,
                "episodes": episode_dicts(data.episodes),
                "created": now,
                "updated": now,
            },
        )
        logger.info("Created APV video %s in category %s", doc.id, data.category_id)
        if data.pinned:
            return await self.pin_video(doc.id)
        return ApvVideo.from_document(doc)

    async def update_video(self, video_id: str, data: ApvVideoUpdate) -> ApvVideo:
        """Apply the changes; a ``pinned`` value pins or unpins through the category rules."""
        current = await self.get_video(video_id)
        provided = data.model_dump(exclude_unset=True, exclude_none=True)
        errors = validate_apv(
            provided.get("road", current.road),
            provided.get("position", current.position),
            provided.get("dh", current.dh),
        )
        if errors:
            raise ValidationError(errors)

        changes: dict[str, Any] = {
            key: provided[key]
            for key in ("position", "orientation", "version", "dh", "active")
            if key in provided
        }
        if "road" in provided:
            changes["road"] = provided["road"].strip()
        if data.episodes is not None:
            changes["episodes"] = episode_dicts(data.episodes)
        changes["updated"] = utc_now_iso()
        doc = await self._store.update(COLLECTION, video_id, changes)

        if data.pinned is True:
            return await self.pin_video(video_id)
        if data.pinned is False and current.pinned:
            return await self.unpin_video(video_id)
        return ApvVideo.from_document(doc)

    async def delete_video(self, video_id: str) -> bool:
        video = await self.get_video(video_id)
        async with self._store.transaction():
            if video.pinned:
                await self._release_category(video)
            return await self._store.delete(COLLECTION, video_id)

    async def pin_video(self, video_id: str, unpin_others: bool = True) -> ApvVideo:
        """Pin ``video_id`` and point its category at it.

        With ``unpin_others`` every other pinned video of the same category
        is unpinned in the same transaction.
        """
        video = await self.get_video(video_id)
        now = utc_now_iso()
        async with self._store.transaction():
            if unpin_others:
                pinned = await self._store.query(
                    COLLECTION,
                    [
                        FieldFilter("pinned", "==", True),
                        FieldFilter("category_id", "==", video.category_id),
                    ],
                )
                for other in pinned:
                    if other.id != video_id:
                        await self._store.update(
                            COLLECTION, other.id, {"pinned": False, "updated": now}
                        )
            doc = await self._store.update(COLLECTION, video_id, {"pinned": True, "updated": now})
            if video.category_id:
                category = await self._store.get(CATEGORY_COLLECTION, video.category_id)
                if category is None:
                    logger.warning(
                        "Category %s of APV video %s not found; pin not recorded on it",
                        video.category_id,
                        video_id,
                    )
                else:
                    await self._store.update(
                        CATEGORY_COLLECTION,
                        video.category_id,
                        {"pinned": video_id, "latest_apv_id": video_id, "latest_apv_updated": now},
                    )
        logger.info("Pinned APV video %s", video_id)
        return ApvVideo.from_document(doc)

    async def unpin_video(self, video_id: str) -> ApvVideo:
        video = await self.get_video(video_id)
        async with self._store.transaction():
            doc = await self._store.update(
                COLLECTION, video_id, {"pinned": False, "updated": utc_now_iso()}
            )
            await self._release_category(video)
        return ApvVideo.from_document(doc)

    async def _release_category(self, video: ApvVideo) -> None:
        """Clear the category's pin fields when they still point at ``video``."""
        if not video.category_id:
            return
        category = await self._store.get(CATEGORY_COLLECTION, video.category_id)
        if category is None or category.data.get("pinned") != video.id:
            return
        await self._store.update(
            CATEGORY_COLLECTION,
            video.category_id,
            {"pinned": "", "latest_apv_id": "", "latest_apv_updated": utc_now_iso()},
        )

    async def pin_latest_video(self, category_id: str | None = None) -> str | None:
        """Pin the most recently created active video; ``None`` when there is none."""
        filters = [FieldFilter("active", "==", True), FieldFilter("deleted", "==", False)]
        if category_id:
            filters.append(FieldFilter("category_id", "==", category_id))
        videos = [ApvVideo.from_document(d) for d in await self._store.query(COLLECTION, filters)]
        if not videos:
            return None
        latest = max(videos, key=lambda v: v.created or _EPOCH)
        await self.pin_video(latest.id)
        return latest.id
