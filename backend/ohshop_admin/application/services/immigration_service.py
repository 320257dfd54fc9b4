"""Application service (use case) for immigration statistics."""

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.domain.entities.document import FieldFilter, OrderBy
from ohshop_admin.domain.entities.immigration_statistics import (
    IMMIGRATION_CATEGORIES,
    ImmigrationStatistics,
)

COLLECTION = "immigration_statistics"


class ImmigrationStatisticsService:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def _for_category(
        self, category: str, limit: int | None = None
    ) -> list[ImmigrationStatistics]:
        docs = await self._store.query(
            COLLECTION,
            [FieldFilter("type", "==", category)],
            [OrderBy("created", descending=True)],
            limit=limit,
        )
        return [ImmigrationStatistics.from_document(d) for d in docs]

    async def get_statistics(self) -> dict[str, list[ImmigrationStatistics]]:
        """Every entry per category, newest first."""
        return {category: await self._for_category(category) for category in IMMIGRATION_CATEGORIES}

    async def get_latest_statistics(self) -> dict[str, ImmigrationStatistics | None]:
        latest: dict[str, ImmigrationStatistics | None] = {}
        for category in IMMIGRATION_CATEGORIES:
            entries = await self._for_category(category, limit=1)
            latest[category] = entries[0] if entries else None
        return latest
