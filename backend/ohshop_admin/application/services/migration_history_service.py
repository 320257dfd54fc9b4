"""Application service (use case) for the audit trail of backfill runs.

Entries keep the camelCase keys of the ``migration_history`` collection so
older runs recorded by the dashboard stay readable.
"""

import logging
from collections import Counter
from datetime import timedelta
from typing import Any

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.domain.entities.document import (
    FieldFilter,
    OrderBy,
    to_iso,
    utc_now,
)
from ohshop_admin.domain.entities.migration import (
    MigrationHistoryEntry,
    MigrationStatus,
    MigrationSummary,
    MigrationTrend,
)
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError

logger = logging.getLogger(__name__)

COLLECTION = "migration_history"
TREND_WINDOW_DAYS = 30

_PROGRESS_KEYS = {
    "total_items": "totalItems",
    "successful_items": "successfulItems",
    "error_items": "errorItems",
    "skipped_items": "skippedItems",
    "processing_rate": "processingRate",
}


class MigrationHistoryService:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def get_entry(self, migration_id: str) -> MigrationHistoryEntry:
        doc = await self._store.get(COLLECTION, migration_id)
        if doc is None:
            raise EntityNotFoundError("Migration", migration_id)
        return MigrationHistoryEntry.from_document(doc)

    async def start_migration(
        self,
        migration_type: str,
        migration_name: str,
        total_items: int = 0,
        batch_size: int = 0,
        metadata: dict[str, Any] | None = None,
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> MigrationHistoryEntry:
        doc = await self._store.add(
            COLLECTION,
            {
                "migrationType": migration_type,
                "migrationName": migration_name,
                "startTime": to_iso(utc_now()),
                "status": MigrationStatus.RUNNING.value,
                "totalItems": total_items,
                "successfulItems": 0,
                "errorItems": 0,
                "skippedItems": 0,
                "batchSize": batch_size,
                "metadata": metadata or {},
                "userId": user_id,
                "userEmail": user_email,
            },
        )
        logger.info("Migration %s started (%s)", doc.id, migration_type)
        return MigrationHistoryEntry.from_document(doc)

    async def update_progress(self, migration_id: str, **counters: Any) -> MigrationHistoryEntry:
        """Write any of ``total_items``, ``successful_items``, ``error_items``,
        ``skipped_items`` and ``processing_rate``."""
        changes = {
            _PROGRESS_KEYS[key]: value
            for key, value in counters.items()
            if key in _PROGRESS_KEYS and value is not None
        }
        entry = await self.get_entry(migration_id)
        if not changes:
            return entry
        doc = await self._store.update(COLLECTION, migration_id, changes)
        return MigrationHistoryEntry.from_document(doc)

    async def complete_migration(
        self,
        migration_id: str,
        status: MigrationStatus,
        error_details: list[str] | None = None,
    ) -> MigrationHistoryEntry:
        if status is MigrationStatus.RUNNING:
            raise ValidationError({"status": "A migration cannot be completed as running"})

        entry = await self.get_entry(migration_id)
        end_time = utc_now()
        duration_ms = int((end_time - entry.start_time).total_seconds() * 1000)
        changes: dict[str, Any] = {
            "endTime": to_iso(end_time),
            "status": status.value,
            "duration": max(duration_ms, 0),
        }
        if error_details:
            changes["errorDetails"] = list(error_details)

        doc = await self._store.update(COLLECTION, migration_id, changes)
        logger.info("Migration %s finished: %s in %d ms", migration_id, status.value, duration_ms)
        return MigrationHistoryEntry.from_document(doc)

    async def get_history(
        self, limit: int = 50, migration_type: str | None = None
    ) -> list[MigrationHistoryEntry]:
        filters = []
        if migration_type:
            filters.append(FieldFilter("migrationType", "==", migration_type))
        docs = await self._store.query(
            COLLECTION, filters, [OrderBy("startTime", descending=True)], limit=limit
        )
        return [MigrationHistoryEntry.from_document(d) for d in docs]

    async def get_summary(self) -> MigrationSummary:
        entries = [
            MigrationHistoryEntry.from_document(d)
            for d in await self._store.query(
                COLLECTION, order_by=[OrderBy("startTime", descending=True)]
            )
        ]
        completed = [
            e for e in entries
            if e.status is MigrationStatus.COMPLETED and e.duration_ms is not None
        ]
        average_rate = (
            sum(e.processing_rate or 0 for e in completed) / len(completed) if completed else 0.0
        )
        return MigrationSummary(
            total_migrations=len(entries),
            successful_migrations=sum(1 for e in entries if e.status is MigrationStatus.COMPLETED),
            failed_migrations=sum(1 for e in entries if e.status is MigrationStatus.FAILED),
            total_items_processed=sum(e.total_items for e in entries),
            average_processing_rate=average_rate,
            most_recent_migration=entries[0] if entries else None,
            migrations_by_type=dict(Counter(e.migration_type for e in entries)),
            migrations_by_status=dict(Counter(e.status.value for e in entries)),
        )

    async def get_trends(self, days: int = TREND_WINDOW_DAYS) -> list[MigrationTrend]:
        """Per-day totals over the last ``days`` days, oldest day first."""
        since = to_iso(utc_now() - timedelta(days=days))
        docs = await self._store.query(
            COLLECTION,
            [FieldFilter("startTime", ">=", since)],
            [OrderBy("startTime")],
        )

        buckets: dict[str, dict[str, float]] = {}
        for doc in docs:
            entry = MigrationHistoryEntry.from_document(doc)
            bucket = buckets.setdefault(
                entry.start_time.date().isoformat(),
                {"migrations": 0, "items": 0, "successful": 0, "rate_total": 0.0, "rate_count": 0},
            )
            bucket["migrations"] += 1
            bucket["items"] += entry.total_items
            if entry.status is MigrationStatus.COMPLETED:
                bucket["successful"] += 1
            if entry.processing_rate:
                bucket["rate_total"] += entry.processing_rate
                bucket["rate_count"] += 1

        return [
            MigrationTrend(
                date=date,
                migrations=int(b["migrations"]),
                items_processed=int(b["items"]),
                success_rate=b["successful"] / b["migrations"] * 100,
                average_rate=b["rate_total"] / b["rate_count"] if b["rate_count"] else 0.0,
            )
            for date, b in buckets.items()
        ]

    async def cleanup(self, days_to_keep: int = 90) -> int:
        cutoff = to_iso(utc_now() - timedelta(days=days_to_keep))
        docs = await self._store.query(COLLECTION, [FieldFilter("startTime", "<", cutoff)])
        deleted = 0
        for doc in docs:
            if await self._store.delete(COLLECTION, doc.id):
                deleted += 1
        logger.info("Removed %d migration history entries older than %d days", deleted, days_to_keep)
        return deleted
