"""Application service (use case) for marketplace products."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.application.schemas.product import ProductUpdate
from ohshop_admin.domain.entities.document import FieldFilter, OrderBy, utc_now_iso
from ohshop_admin.domain.entities.pagination import PageRequest, Pagination
from ohshop_admin.domain.entities.product import Product
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError

logger = logging.getLogger(__name__)

COLLECTION = "products"
ALL = "ALL"


@dataclass(frozen=True)
class ProductFilters:
    status: str | None = None
    type: str | None = None
    active: bool | None = None
    seller_id: str | None = None
    category: str | None = None
    search: str | None = None
    price_min: float | None = None
    price_max: float | None = None


@dataclass
class ProductStats:
    total: int = 0
    active: int = 0
    deleted: int = 0
    pending: int = 0
    approved: int = 0
    total_value: float = 0.0
    by_status: dict[str, int] = field(default_factory=dict)
    by_type: dict[str, int] = field(default_factory=dict)


@dataclass
class DeletedFieldBackfill:
    processed: int = 0
    updated: int = 0
    already_had_field: int = 0
    errors: int = 0


class ProductService:
    """Product listing, edits and the product-wide maintenance tasks."""

    def __init__(self, store: DocumentStore):
        self._store = store

    async def list_products(
        self, filters: ProductFilters, request: PageRequest
    ) -> tuple[list[Product], Pagination]:
        """One page of products, most recently updated first.

        ``"ALL"`` for status or type means no filter. Category, search and
        price range are applied after the store query.
        """
        store_filters: list[FieldFilter] = []
        if filters.status and filters.status != ALL:
            store_filters.append(FieldFilter("status", "==", filters.status))
        if filters.type and filters.type != ALL:
            store_filters.append(FieldFilter("type", "==", filters.type))
        if filters.active is not None:
            store_filters.append(FieldFilter("active", "==", filters.active))
        if filters.seller_id:
            store_filters.append(FieldFilter("seller_id", "==", filters.seller_id))

        docs = await self._store.query(
            COLLECTION, store_filters, [OrderBy("updated", descending=True)]
        )
        products = [Product.from_document(d) for d in docs]

        if filters.category:
            products = [p for p in products if filters.category in p.categories]
        if filters.search:
            products = [p for p in products if p.matches_search(filters.search)]
        if filters.price_min is not None:
            products = [p for p in products if p.price >= filters.price_min]
        if filters.price_max is not None:
            products = [p for p in products if p.price <= filters.price_max]

        page = products[request.offset:request.offset + request.page_size]
        return page, Pagination.build(request, len(products))

    async def get_product(self, product_id: str) -> Product:
        doc = await self._store.get(COLLECTION, product_id)
        if doc is None:
            raise EntityNotFoundError("Product", product_id)
        return Product.from_document(doc)

    async def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        await self.get_product(product_id)
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        changes.pop("id", None)
        changes["updated"] = utc_now_iso()
        doc = await self._store.update(COLLECTION, product_id, changes)
        return Product.from_document(doc)

    async def soft_delete_product(self, product_id: str) -> Product:
        doc = await self._store.get(COLLECTION, product_id)
        if doc is None:
            raise EntityNotFoundError("Product", product_id)
        if doc.data.get("deleted") is True:
            raise ValidationError({"product": "Product is already deleted"})
        doc = await self._store.update(
            COLLECTION, product_id, {"deleted": True, "updated": utc_now_iso()}
        )
        logger.info("Soft deleted product %s", product_id)
        return Product.from_document(doc)

    async def get_stats(self) -> ProductStats:
        products = [Product.from_document(d) for d in await self._store.query(COLLECTION)]
        return ProductStats(
            total=len(products),
            active=sum(1 for p in products if p.active),
            deleted=sum(1 for p in products if p.deleted),
            pending=sum(1 for p in products if p.status == "PENDING"),
            approved=sum(1 for p in products if p.status == "APPROVED"),
            total_value=sum(p.price for p in products),
            by_status=dict(Counter(p.status or "UNKNOWN" for p in products)),
            by_type=dict(Counter(p.type or "UNKNOWN" for p in products)),
        )

    async def add_deleted_field(self) -> DeletedFieldBackfill:
        """Write ``deleted: false`` on every product that lacks the field."""
        result = DeletedFieldBackfill()
        for doc in await self._store.query(COLLECTION):
            result.processed += 1
            if "deleted" in doc.data:
                result.already_had_field += 1
                continue
            try:
                await self._store.update(
                    COLLECTION, doc.id, {"deleted": False, "updated": utc_now_iso()}
                )
            except EntityNotFoundError:
                logger.warning("Product %s disappeared during deleted-field backfill", doc.id)
                result.errors += 1
                continue
            result.updated += 1

        logger.info(
            "Deleted-field backfill: processed=%d updated=%d already=%d errors=%d",
            result.processed,
            result.updated,
            result.already_had_field,
            result.errors,
        )
        return result
