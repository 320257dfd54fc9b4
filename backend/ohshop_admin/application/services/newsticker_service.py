"""Application service (use case) for news ticker entries."""

import logging
from typing import Any

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.application.schemas.newsticker import NewstickerCreate, NewstickerUpdate
from ohshop_admin.domain.entities.document import FieldFilter, to_iso, utc_now, utc_now_iso
from ohshop_admin.domain.entities.newsticker import (
    Newsticker,
    NewstickerStatus,
    validate_newsticker,
)
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError

logger = logging.getLogger(__name__)

COLLECTION = "news_ticker"


class NewstickerService:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def get_newsticker(self, newsticker_id: str) -> Newsticker:
        doc = await self._store.get(COLLECTION, newsticker_id)
        if doc is None:
            raise EntityNotFoundError("Newsticker", newsticker_id)
        return Newsticker.from_document(doc)

    async def list_newstickers(
        self,
        *,
        status: NewstickerStatus | None = None,
        show_deleted: bool = False,
        search_query: str | None = None,
    ) -> list[Newsticker]:
        """Tickers ordered by position. Deleted ones are included only on request."""
        filters = []
        if status is not None:
            filters.append(FieldFilter("status", "==", status.value))
        if not show_deleted:
            filters.append(FieldFilter("deleted", "==", False))

        tickers = [Newsticker.from_document(d) for d in await self._store.query(COLLECTION, filters)]
        if search_query:
            needle = search_query.lower()
            tickers = [
                t for t in tickers
                if needle in t.title.lower() or needle in t.content.lower()
            ]
        return sorted(tickers, key=lambda t: t.position)

    async def create_newsticker(
        self, data: NewstickerCreate, user_id: str | None = None
    ) -> Newsticker:
        errors = validate_newsticker(
            data.title, data.content, data.start_time, data.end_time, data.position
        )
        if errors:
            raise ValidationError(errors)

        now = utc_now_iso()
        doc = await self._store.add(
            COLLECTION,
            {
                "uid": user_id,
                "title": data.title,
                "content": data.content,
                "start_time": to_iso(data.start_time),
                "end_time": to_iso(data.end_time),
                "position": data.position,
                "status": data.status.value,
                "created": now,
                "timestamp": now,
                "updated": now,
                "deleted": False,
            },
        )
        logger.info("Created newsticker %s", doc.id)
        return Newsticker.from_document(doc)

    async def update_newsticker(
        self, newsticker_id: str, data: NewstickerUpdate
    ) -> Newsticker:
        current = await self.get_newsticker(newsticker_id)
        provided = data.model_dump(exclude_unset=True, exclude_none=True)

        merged = {
            "title": provided.get("title", current.title),
            "content": provided.get("content", current.content),
            "start_time": provided.get("start_time", current.start_time),
            "end_time": provided.get("end_time", current.end_time),
            "position": provided.get("position", current.position),
        }
        errors = validate_newsticker(**merged)
        if errors:
            raise ValidationError(errors)

        changes: dict[str, Any] = dict(provided)
        for key in ("start_time", "end_time"):
            if key in changes:
                changes[key] = to_iso(changes[key])
        if "status" in changes:
            changes["status"] = NewstickerStatus(changes["status"]).value
        changes["updated"] = utc_now_iso()

        doc = await self._store.update(COLLECTION, newsticker_id, changes)
        return Newsticker.from_document(doc)

    async def soft_delete_newsticker(self, newsticker_id: str) -> Newsticker:
        await self.get_newsticker(newsticker_id)
        doc = await self._store.update(
            COLLECTION, newsticker_id, {"deleted": True, "updated": utc_now_iso()}
        )
        return Newsticker.from_document(doc)

    async def restore_newsticker(self, newsticker_id: str) -> Newsticker:
        await self.get_newsticker(newsticker_id)
        doc = await self._store.update(
            COLLECTION, newsticker_id, {"deleted": False, "updated": utc_now_iso()}
        )
        return Newsticker.from_document(doc)

    async def hard_delete_newsticker(self, newsticker_id: str) -> bool:
        await self.get_newsticker(newsticker_id)
        return await self._store.delete(COLLECTION, newsticker_id)

    async def get_active_newstickers(self) -> list[Newsticker]:
        now = utc_now()
        tickers = [Newsticker.from_document(d) for d in await self._store.query(COLLECTION)]
        return sorted((t for t in tickers if t.is_live(now)), key=lambda t: t.position)
