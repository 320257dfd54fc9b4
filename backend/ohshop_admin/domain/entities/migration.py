"""Domain entities for data backfills and their audit history."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ohshop_admin.domain.entities.document import Document, parse_timestamp


class MigrationStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class MigrationHistoryEntry:
    """One run of a backfill, appended when it starts and closed when it ends."""

    id: str
    migration_type: str
    migration_name: str
    start_time: datetime
    status: MigrationStatus = MigrationStatus.RUNNING
    total_items: int = 0
    successful_items: int = 0
    error_items: int = 0
    skipped_items: int = 0
    batch_size: int = 0
    end_time: datetime | None = None
    processing_rate: float | None = None
    duration_ms: int | None = None
    error_details: list[str] = field(default_factory=list)
    user_id: str | None = None
    user_email: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, doc: Document) -> "MigrationHistoryEntry":
        data = doc.data
        return cls(
            id=doc.id,
            migration_type=data.get("migrationType", ""),
            migration_name=data.get("migrationName", ""),
            start_time=parse_timestamp(data.get("startTime")) or doc.created_at,
            status=MigrationStatus(data.get("status", "running")),
            total_items=data.get("totalItems", 0),
            successful_items=data.get("successfulItems", 0),
            error_items=data.get("errorItems", 0),
            skipped_items=data.get("skippedItems", 0),
            batch_size=data.get("batchSize", 0),
            end_time=parse_timestamp(data.get("endTime")),
            processing_rate=data.get("processingRate"),
            duration_ms=data.get("duration"),
            error_details=list(data.get("errorDetails") or []),
            user_id=data.get("userId"),
            user_email=data.get("userEmail"),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass
class MigrationSummary:
    total_migrations: int
    successful_migrations: int
    failed_migrations: int
    total_items_processed: int
    average_processing_rate: float
    most_recent_migration: MigrationHistoryEntry | None
    migrations_by_type: dict[str, int]
    migrations_by_status: dict[str, int]


@dataclass
class MigrationTrend:
    date: str
    migrations: int
    items_processed: int
    success_rate: float
    average_rate: float


@dataclass
class BackfillResult:
    """Outcome counters of a company backfill run."""

    target: str
    total: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0
    dry_run: bool = False
    history_id: str | None = None
    skip_reasons: dict[str, int] = field(default_factory=dict)
    error_details: list[str] = field(default_factory=list)
    companies_created: int = 0
    status: MigrationStatus = MigrationStatus.RUNNING
    error: str | None = None

    def skip(self, reason: str) -> None:
        self.skipped += 1
        self.skip_reasons[reason] = self.skip_reasons.get(reason, 0) + 1


@dataclass
class MigrationStats:
    """How far a collection is through the company backfill."""

    collection: str
    total: int
    successful: int

    @property
    def skipped(self) -> int:
        return self.total - self.successful

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 0.0
        return round(self.successful / self.total * 100, 2)


@dataclass
class ProgressStep:
    label: str
    progress: int
    status: str
    message: str
