"""Application service (use case) for main category operations."""

import logging

from ohshop_admin.application.interfaces import DocumentStore, FileStorage
from ohshop_admin.application.schemas.common import PositionUpdate
from ohshop_admin.application.schemas.main_category import (
    MainCategoryCreate,
    MainCategoryUpdate,
)
from ohshop_admin.application.services.image_upload import (
    millis_stamp,
    random_suffix,
    validate_image,
)
from ohshop_admin.domain.entities.document import (
    FieldFilter,
    Increment,
    OrderBy,
    new_document_id,
    utc_now_iso,
)
from ohshop_admin.domain.entities.main_category import MainCategory, validate_main_category
from ohshop_admin.domain.exceptions import EntityNotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

COLLECTION = "main_categories"
SORTABLE_FIELDS = frozenset({"position", "name", "created", "updated", "clicks"})


class MainCategoryService:
    """Orchestrates main category CRUD. Depends on the document store and file storage ports."""

    def __init__(
        self,
        store: DocumentStore,
        file_storage: FileStorage | None = None,
        max_image_size_mb: int = 5,
    ):
        self._store = store
        self._files = file_storage
        self._max_image_size_mb = max_image_size_mb

    async def get_category(self, category_id: str) -> MainCategory:
        doc = await self._store.get(COLLECTION, category_id)
        if doc is None:
            raise EntityNotFoundError("MainCategory", category_id)
        return MainCategory.from_document(doc)

    async def list_categories(
        self,
        *,
        search_term: str | None = None,
        featured: bool | None = None,
        active: bool | None = None,
        sort_by: str = "position",
        sort_direction: str = "asc",
        page: int = 1,
        limit: int = 10,
        show_deleted: bool = False,
    ) -> tuple[list[MainCategory], int]:
        """Return one page of categories and the total matching count.

        The search term is matched case-insensitively against name and
        description.
        """
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError({"sort_by": f"Cannot sort by '{sort_by}'"})

        filters = [FieldFilter("deleted", "==", show_deleted)]
        if featured is not None:
            filters.append(FieldFilter("featured", "==", featured))
        if active is not None:
            filters.append(FieldFilter("active", "==", active))

        docs = await self._store.query(
            COLLECTION, filters, [OrderBy(sort_by, descending=sort_direction == "desc")]
        )
        categories = [MainCategory.from_document(d) for d in docs]

        if search_term:
            needle = search_term.lower()
            categories = [
                c for c in categories
                if needle in c.name.lower() or needle in c.description.lower()
            ]

        start = (page - 1) * limit
        return categories[start:start + limit], len(categories)

    async def create_category(self, data: MainCategoryCreate) -> MainCategory:
        payload = data.model_dump()
        errors = validate_main_category(payload)
        if errors:
            raise ValidationError(errors)

        now = utc_now_iso()
        doc_id = new_document_id()
        doc = await self._store.add(
            COLLECTION,
            {
                **payload,
                "name": payload["name"].strip(),
                "id": doc_id,
                "clicks": 0,
                "deleted": False,
                "date_deleted": None,
                "created": now,
                "updated": now,
            },
            doc_id=doc_id,
        )
        logger.info("Created main category %s (%s)", doc.id, payload["name"])
        return MainCategory.from_document(doc)

    async def update_category(self, category_id: str, data: MainCategoryUpdate) -> MainCategory:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        errors = validate_main_category(changes)
        if errors:
            raise ValidationError(errors)

        await self.get_category(category_id)
        changes["updated"] = utc_now_iso()
        doc = await self._store.update(COLLECTION, category_id, changes)
        return MainCategory.from_document(doc)

    async def soft_delete_category(self, category_id: str) -> MainCategory:
        await self.get_category(category_id)
        now = utc_now_iso()
        doc = await self._store.update(
            COLLECTION, category_id, {"deleted": True, "date_deleted": now, "updated": now}
        )
        return MainCategory.from_document(doc)

    async def restore_category(self, category_id: str) -> MainCategory:
        await self.get_category(category_id)
        doc = await self._store.update(
            COLLECTION,
            category_id,
            {"deleted": False, "date_deleted": None, "updated": utc_now_iso()},
        )
        return MainCategory.from_document(doc)

    async def hard_delete_category(self, category_id: str) -> bool:
        """Remove the document and, best effort, its stored photo."""
        category = await self.get_category(category_id)
        if category.photo_url and self._files is not None:
            try:
                await self._files.delete(category.photo_url)
            except StorageError:
                logger.warning(
                    "Could not delete photo %s of main category %s",
                    category.photo_url,
                    category_id,
                    exc_info=True,
                )
        return await self._store.delete(COLLECTION, category_id)

    async def upload_photo(
        self, content: bytes, content_type: str | None, filename: str | None
    ) -> str:
        """Store a category photo and return its public URL."""
        if self._files is None:
            raise StorageError("File storage is not configured")
        image = validate_image(content, content_type, filename, self._max_image_size_mb)
        path = f"{COLLECTION}/{millis_stamp()}_{random_suffix(13)}.{image.extension}"
        stored = await self._files.save(path, image.content, image.content_type)
        return stored.url

    async def update_positions(self, updates: list[PositionUpdate]) -> None:
        """Apply every position change, or none if one category is missing."""
        now = utc_now_iso()
        async with self._store.transaction():
            for update in updates:
                await self._store.update(
                    COLLECTION, update.id, {"position": update.position, "updated": now}
                )

    async def toggle_featured(self, category_id: str) -> MainCategory:
        category = await self.get_category(category_id)
        doc = await self._store.update(
            COLLECTION,
            category_id,
            {"featured": not category.featured, "updated": utc_now_iso()},
        )
        return MainCategory.from_document(doc)

    async def toggle_active(self, category_id: str) -> MainCategory:
        category = await self.get_category(category_id)
        doc = await self._store.update(
            COLLECTION,
            category_id,
            {"active": not category.active, "updated": utc_now_iso()},
        )
        return MainCategory.from_document(doc)

    async def next_position(self) -> int:
        docs = await self._store.query(
            COLLECTION, order_by=[OrderBy("position", descending=True)], limit=1
        )
        if not docs:
            return 0
        return MainCategory.from_document(docs[0]).position + 1

    async def increment_clicks(self, category_id: str) -> MainCategory:
        await self.get_category(category_id)
        doc = await self._store.update(
            COLLECTION, category_id, {"clicks": Increment(1), "updated": utc_now_iso()}
        )
        return MainCategory.from_document(doc)
