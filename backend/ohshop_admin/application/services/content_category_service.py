"""Application service (use case) for content category operations."""

import logging

from ohshop_admin.application.interfaces import DocumentStore, FileStorage
from ohshop_admin.application.schemas.common import PositionUpdate
from ohshop_admin.application.schemas.content_category import (
    ContentCategoryCreate,
    ContentCategoryUpdate,
)
from ohshop_admin.application.services.image_upload import validate_image
from ohshop_admin.domain.entities.content_category import (
    ContentCategory,
    validate_content_category,
)
from ohshop_admin.domain.entities.content_media import ContentMedia
from ohshop_admin.domain.entities.document import FieldFilter, OrderBy, utc_now_iso
from ohshop_admin.domain.exceptions import EntityNotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

COLLECTION = "content_category"
MEDIA_COLLECTION = "content_media"


class ContentCategoryService:
    """Orchestrates content category CRUD and logo handling."""

    def __init__(
        self,
        store: DocumentStore,
        file_storage: FileStorage | None = None,
        max_image_size_mb: int = 5,
    ):
        self._store = store
        self._files = file_storage
        self._max_image_size_mb = max_image_size_mb

    async def get_category(self, category_id: str) -> ContentCategory:
        doc = await self._store.get(COLLECTION, category_id)
        if doc is None:
            raise EntityNotFoundError("ContentCategory", category_id)
        return ContentCategory.from_document(doc)

    async def list_categories(
        self,
        *,
        type: str | None = None,
        featured: bool | None = None,
        active: bool | None = None,
        search_query: str | None = None,
        show_deleted: bool = False,
    ) -> list[ContentCategory]:
        filters = [FieldFilter("deleted", "==", show_deleted)]
        if type:
            filters.append(FieldFilter("type", "==", type))
        if featured is not None:
            filters.append(FieldFilter("featured", "==", featured))
        if active is not None:
            filters.append(FieldFilter("active", "==", active))

        docs = await self._store.query(COLLECTION, filters, [OrderBy("position")])
        categories = [ContentCategory.from_document(d) for d in docs]

        if search_query:
            needle = search_query.lower()
            categories = [
                c for c in categories
                if needle in c.name.lower()
                or needle in c.description.lower()
                or needle in c.type.lower()
            ]
        return categories

    async def create_category(self, data: ContentCategoryCreate) -> ContentCategory:
        payload = data.model_dump()
        errors = validate_content_category(payload)
        if errors:
            raise ValidationError(errors)

        now = utc_now_iso()
        doc = await self._store.add(
            COLLECTION,
            {
                **payload,
                "pinned_contents": [],
                "created": now,
                "updated": now,
                "deleted": False,
            },
        )
        logger.info("Created content category %s (%s)", doc.id, payload["name"])
        return ContentCategory.from_document(doc)

    async def update_category(
        self, category_id: str, data: ContentCategoryUpdate
    ) -> ContentCategory:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        errors = validate_content_category(changes, partial=True)
        if errors:
            raise ValidationError(errors)

        await self.get_category(category_id)
        changes["updated"] = utc_now_iso()
        doc = await self._store.update(COLLECTION, category_id, changes)
        return ContentCategory.from_document(doc)

    async def soft_delete_category(self, category_id: str) -> ContentCategory:
        await self.get_category(category_id)
        doc = await self._store.update(
            COLLECTION, category_id, {"deleted": True, "updated": utc_now_iso()}
        )
        return ContentCategory.from_document(doc)

    async def restore_category(self, category_id: str) -> ContentCategory:
        await self.get_category(category_id)
        doc = await self._store.update(
            COLLECTION, category_id, {"deleted": False, "updated": utc_now_iso()}
        )
        return ContentCategory.from_document(doc)

    async def hard_delete_category(self, category_id: str) -> bool:
        category = await self.get_category(category_id)
        await self._delete_logo(category)
        return await self._store.delete(COLLECTION, category_id)

    async def upload_logo(
        self,
        category_id: str,
        content: bytes,
        content_type: str | None,
        filename: str | None,
    ) -> ContentCategory:
        """Replace the category logo with the uploaded image."""
        if self._files is None:
            raise StorageError("File storage is not configured")
        category = await self.get_category(category_id)
        image = validate_image(content, content_type, filename, self._max_image_size_mb)
        path = f"content_categories/{category_id}/logo.{image.extension}"

        if category.logo and not category.logo.endswith(path):
            await self._delete_logo(category)
        stored = await self._files.save(path, image.content, image.content_type)

        doc = await self._store.update(
            COLLECTION, category_id, {"logo": stored.url, "updated": utc_now_iso()}
        )
        return ContentCategory.from_document(doc)

    async def _delete_logo(self, category: ContentCategory) -> None:
        if not category.logo or self._files is None:
            return
        try:
            await self._files.delete(category.logo)
        except StorageError:
            logger.warning(
                "Could not delete logo of content category %s", category.id, exc_info=True
            )

    async def get_content_types(self) -> list[str]:
        docs = await self._store.query(COLLECTION)
        return sorted({d.data["type"] for d in docs if d.data.get("type")})

    async def update_positions(self, updates: list[PositionUpdate]) -> None:
        now = utc_now_iso()
        async with self._store.transaction():
            for update in updates:
                await self._store.update(
                    COLLECTION, update.id, {"position": update.position, "updated": now}
                )

    async def get_pinned_media(self, category_id: str) -> list[ContentMedia]:
        """Media listed in the category's ``pinned_contents``, in pin order."""
        category = await self.get_category(category_id)
        media: list[ContentMedia] = []
        for media_id in category.pinned_contents:
            doc = await self._store.get(MEDIA_COLLECTION, media_id)
            if doc is None:
                logger.warning(
                    "Pinned media %s of category %s no longer exists", media_id, category_id
                )
                continue
            media.append(ContentMedia.from_document(doc))
        return media
