"""Application service (use case) for content media, including pin/feature toggling."""

import logging
from datetime import datetime
from typing import Any

from ohshop_admin.application.interfaces import DocumentStore, FileStorage, StoredFile
from ohshop_admin.application.schemas.content_media import (
    ContentMediaCreate,
    ContentMediaUpdate,
    MediaItemSchema,
    UrlReferenceSchema,
)
from ohshop_admin.application.services.episode_template_service import episode_dicts
from ohshop_admin.application.services.image_upload import (
    millis_stamp,
    random_suffix,
    sanitise_filename,
    validate_image,
)
from ohshop_admin.domain.entities.content_media import ContentMedia, MediaType
from ohshop_admin.domain.entities.document import (
    ArrayRemove,
    ArrayUnion,
    FieldFilter,
    OrderBy,
    to_iso,
    utc_now_iso,
)
from ohshop_admin.domain.exceptions import EntityNotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

COLLECTION = "content_media"
CATEGORY_COLLECTION = "content_category"


def _media_items(items: list[MediaItemSchema]) -> list[dict[str, Any]]:
    """Drop items without a URL and fill in missing ids and timestamps."""
    now = utc_now_iso()
    return [
        {
            "url": item.url,
            "description": item.description or "",
            "id": item.id or f"media-{millis_stamp()}-{random_suffix()}",
            "created": to_iso(item.created) or now,
        }
        for item in items
        if item.url and item.url.strip()
    ]


def _url_references(refs: list[UrlReferenceSchema]) -> list[dict[str, str]]:
    return [{"url": r.url, "label": r.label} for r in refs if r.url and r.url.strip()]


def _date_fields(start: datetime | None, end: datetime | None) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if start is not None:
        fields["start_date"] = to_iso(start)
    if end is not None:
        fields["end_date"] = to_iso(end)
    if start is not None or end is not None:
        fields["dateTimeRange"] = {"start": to_iso(start), "end": to_iso(end)}
    return fields


class ContentMediaService:
    """Orchestrates content media CRUD and keeps categories' pinned lists consistent."""

    def __init__(
        self,
        store: DocumentStore,
        file_storage: FileStorage | None = None,
        max_image_size_mb: int = 5,
    ):
        self._store = store
        self._files = file_storage
        self._max_image_size_mb = max_image_size_mb

    async def get_media(self, media_id: str) -> ContentMedia:
        doc = await self._store.get(COLLECTION, media_id)
        if doc is None:
            raise EntityNotFoundError("ContentMedia", media_id)
        return ContentMedia.from_document(doc)

    async def list_media(
        self,
        *,
        category_id: str | None = None,
        type: str | None = None,
        show_deleted: bool = False,
        featured: bool | None = None,
        active: bool | None = None,
        pinned: bool | None = None,
        search_query: str | None = None,
    ) -> list[ContentMedia]:
        filters = [FieldFilter("deleted", "==", show_deleted)]
        if category_id:
            filters.append(FieldFilter("category_id", "==", category_id))
        if type:
            filters.append(FieldFilter("type", "==", type))
        if featured is not None:
            filters.append(FieldFilter("featured", "==", featured))
        if active is not None:
            filters.append(FieldFilter("active", "==", active))
        if pinned is not None:
            filters.append(FieldFilter("pinned", "==", pinned))

        docs = await self._store.query(
            COLLECTION, filters, [OrderBy("updated", descending=True)]
        )
        media = [ContentMedia.from_document(d) for d in docs]

        if search_query:
            needle = search_query.lower()
            media = [
                m for m in media
                if any(
                    needle in text.lower()
                    for text in (m.title, m.description, m.synopsis, m.author, m.type)
                )
            ]
        return media

    async def create_media(self, data: ContentMediaCreate) -> ContentMedia:
        title = data.title.strip()
        if not title:
            raise ValidationError({"title": "Title is required"})
        if not data.type and not data.category_id:
            raise ValidationError({"type": "Type and Category are required"})

        siblings = []
        if data.category_id:
            siblings = await self._store.query(
                COLLECTION, [FieldFilter("category_id", "==", data.category_id)]
            )
        max_position = max((d.data.get("position") or 0 for d in siblings), default=-1)

        now = utc_now_iso()
        payload: dict[str, Any] = {
            "title": title,
            "type": MediaType.coerce(data.type).value,
            "category_id": data.category_id,
            "author": data.author,
            "author_id": data.author_id,
            "description": data.description,
            "body": data.description,
            "synopsis": data.synopsis,
            "orientation": data.orientation,
            "episode": data.episode,
            "episodes": episode_dicts(data.episodes),
            "thumbnail": data.thumbnail or None,
            "video_url": data.video_url or None,
            "active": data.active,
            "public": data.public,
            "featured": data.featured,
            "pinned": False,
            "position": max_position + 1,
            "views": 0,
            "likes": 0,
            "shares": 0,
            "media": _media_items(data.media),
            "urlReferences": _url_references(data.url_references),
            "link_ref": list(data.link_ref),
            "deleted": False,
            "created": now,
            "updated": now,
            **_date_fields(data.start_date, data.end_date),
        }
        doc = await self._store.add(COLLECTION, payload)
        logger.info("Created content media %s in category %s", doc.id, data.category_id)
        return ContentMedia.from_document(doc)

    async def update_media(self, media_id: str, data: ContentMediaUpdate) -> ContentMedia:
        await self.get_media(media_id)
        provided = data.model_dump(exclude_unset=True, exclude_none=True)

        changes: dict[str, Any] = {}
        for key in (
            "category_id", "author", "synopsis", "orientation", "episode",
            "thumbnail", "video_url", "active", "public", "featured", "position",
            "link_ref",
        ):
            if key in provided:
                changes[key] = provided[key]
        if "title" in provided:
            title = provided["title"].strip()
            if not title:
                raise ValidationError({"title": "Title is required"})
            changes["title"] = title
        if "type" in provided:
            changes["type"] = MediaType.coerce(provided["type"]).value
        if "description" in provided:
            changes["description"] = provided["description"]
            changes["body"] = provided["description"]
        if data.media is not None:
            changes["media"] = _media_items(data.media)
        if data.url_references is not None:
            changes["urlReferences"] = _url_references(data.url_references)
        if data.episodes is not None:
            changes["episodes"] = episode_dicts(data.episodes)
        changes.update(_date_fields(data.start_date, data.end_date))

        changes["updated"] = utc_now_iso()
        doc = await self._store.update(COLLECTION, media_id, changes)
        return ContentMedia.from_document(doc)

    async def soft_delete_media(self, media_id: str) -> ContentMedia:
        await self.get_media(media_id)
        doc = await self._store.update(
            COLLECTION, media_id, {"deleted": True, "updated": utc_now_iso()}
        )
        return ContentMedia.from_document(doc)

    async def restore_media(self, media_id: str) -> ContentMedia:
        await self.get_media(media_id)
        doc = await self._store.update(
            COLLECTION, media_id, {"deleted": False, "updated": utc_now_iso()}
        )
        return ContentMedia.from_document(doc)

    async def hard_delete_media(self, media_id: str) -> bool:
        await self.get_media(media_id)
        return await self._store.delete(COLLECTION, media_id)

    async def get_media_types(self) -> list[str]:
        docs = await self._store.query(COLLECTION)
        return sorted({
            d.data["type"] for d in docs
            if d.data.get("type") and not d.data.get("deleted")
        })

    # ── Pin / feature ────────────────────────────────────────────────

    async def _set_flag(self, media: ContentMedia, flag: str, value: bool) -> ContentMedia:
        """Write ``flag`` on the media and mirror it into the parent category's
        ``pinned_contents`` in one transaction."""
        now = utc_now_iso()
        async with self._store.transaction():
            doc = await self._store.update(COLLECTION, media.id, {flag: value, "updated": now})
            if media.category_id:
                category = await self._store.get(CATEGORY_COLLECTION, media.category_id)
                if category is None:
                    logger.warning(
                        "Category %s of media %s not found; pinned_contents not updated",
                        media.category_id,
                        media.id,
                    )
                else:
                    transform = ArrayUnion(media.id) if value else ArrayRemove(media.id)
                    await self._store.update(
                        CATEGORY_COLLECTION,
                        media.category_id,
                        {"pinned_contents": transform, "updated": now},
                    )
        return ContentMedia.from_document(doc)

    async def toggle_pin(self, media_id: str) -> ContentMedia:
        media = await self.get_media(media_id)
        return await self._set_flag(media, "pinned", not media.pinned)

    async def toggle_feature(self, media_id: str) -> ContentMedia:
        """Flip ``featured`` based on the stored state, not the caller's copy."""
        media = await self.get_media(media_id)
        return await self._set_flag(media, "featured", not media.featured)

    async def unpin(self, media_id: str) -> ContentMedia:
        media = await self.get_media(media_id)
        if not media.pinned:
            return media
        return await self._set_flag(media, "pinned", False)

    async def sync_pinned_contents(self, category_id: str) -> list[str]:
        """Rebuild one category's ``pinned_contents`` from its pinned, live media."""
        if await self._store.get(CATEGORY_COLLECTION, category_id) is None:
            raise EntityNotFoundError("ContentCategory", category_id)
        docs = await self._store.query(
            COLLECTION,
            [
                FieldFilter("category_id", "==", category_id),
                FieldFilter("pinned", "==", True),
            ],
        )
        pinned_ids = [d.id for d in docs if not d.data.get("deleted")]
        await self._store.update(
            CATEGORY_COLLECTION,
            category_id,
            {"pinned_contents": pinned_ids, "updated": utc_now_iso()},
        )
        return pinned_ids

    async def sync_all_pinned_contents(self) -> tuple[int, list[str]]:
        """Reconcile every category's ``pinned_contents`` with the media flags.

        Returns the number of categories rewritten and any per-item errors.
        """
        errors: list[str] = []
        categories = await self._store.query(CATEGORY_COLLECTION)
        expected: dict[str, list[str]] = {c.id: [] for c in categories}

        for doc in await self._store.query(COLLECTION, order_by=[OrderBy("updated")]):
            if doc.data.get("deleted") or not doc.data.get("pinned"):
                continue
            category_id = doc.data.get("category_id")
            if not category_id:
                logger.warning("Pinned media %s has no category", doc.id)
                continue
            if category_id not in expected:
                errors.append(f"Media {doc.id} references missing category {category_id}")
                continue
            expected[category_id].append(doc.id)

        updated = 0
        now = utc_now_iso()
        async with self._store.transaction():
            for category in categories:
                current = set(category.data.get("pinned_contents") or [])
                if current == set(expected[category.id]):
                    continue
                await self._store.update(
                    CATEGORY_COLLECTION,
                    category.id,
                    {"pinned_contents": expected[category.id], "updated": now},
                )
                updated += 1

        logger.info("Pinned content sync rewrote %d categories", updated)
        return updated, errors

    # ── Uploads ──────────────────────────────────────────────────────

    async def upload_thumbnail(
        self,
        user_id: str,
        content: bytes,
        content_type: str | None,
        filename: str | None,
    ) -> StoredFile:
        if self._files is None:
            raise StorageError("File storage is not configured")
        image = validate_image(content, content_type, filename, self._max_image_size_mb)
        file_name = f"{millis_stamp()}_{sanitise_filename(image.filename)}"
        path = f"{COLLECTION}/thumbnails/{sanitise_filename(user_id)}/{file_name}"
        return await self._files.save(path, image.content, image.content_type)
