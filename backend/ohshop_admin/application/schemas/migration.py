"""Pydantic DTOs for data backfills and their history."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from ohshop_admin.domain.entities.migration import MigrationStatus

BackfillTarget = Literal["products", "quotation_request", "followers", "booking", "chats"]


class MigrationHistoryResponse(BaseModel):
    id: str
    migration_type: str
    migration_name: str
    start_time: datetime
    status: MigrationStatus
    total_items: int
    successful_items: int
    error_items: int
    skipped_items: int
    batch_size: int
    end_time: datetime | None
    processing_rate: float | None
    duration_ms: int | None
    error_details: list[str]
    user_id: str | None
    user_email: str | None
    metadata: dict[str, Any]

    model_config = {"from_attributes": True}


class MigrationStartRequest(BaseModel):
    migration_type: str = Field(..., min_length=1)
    migration_name: str = Field(..., min_length=1)
    total_items: int = Field(0, ge=0)
    batch_size: int = Field(0, ge=0)
    metadata: dict[str, Any] = Field(default_factory=dict)


class MigrationProgressUpdate(BaseModel):
    """Counters reported while a run progresses; all fields optional."""

    total_items: int | None = Field(None, ge=0)
    successful_items: int | None = Field(None, ge=0)
    error_items: int | None = Field(None, ge=0)
    skipped_items: int | None = Field(None, ge=0)
    processing_rate: float | None = None


class MigrationCompleteRequest(BaseModel):
    status: MigrationStatus = MigrationStatus.COMPLETED
    error_details: list[str] = Field(default_factory=list)


class MigrationSummaryResponse(BaseModel):
    total_migrations: int
    successful_migrations: int
    failed_migrations: int
    total_items_processed: int
    average_processing_rate: float
    most_recent_migration: MigrationHistoryResponse | None
    migrations_by_type: dict[str, int]
    migrations_by_status: dict[str, int]

    model_config = {"from_attributes": True}


class MigrationTrendResponse(BaseModel):
    date: str
    migrations: int
    items_processed: int
    success_rate: float
    average_rate: float

    model_config = {"from_attributes": True}


class CleanupResponse(BaseModel):
    deleted: int


class BackfillRequest(BaseModel):
    dry_run: bool = False
    batch_size: int | None = Field(None, ge=1, le=500)


class BackfillResultResponse(BaseModel):
    target: str
    total: int
    updated: int
    skipped: int
    errors: int
    dry_run: bool
    history_id: str | None
    skip_reasons: dict[str, int]
    error_details: list[str]
    companies_created: int
    status: MigrationStatus
    error: str | None

    model_config = {"from_attributes": True}


class MigrationStatsResponse(BaseModel):
    collection: str
    total: int
    successful: int
    skipped: int
    progress: float

    model_config = {"from_attributes": True}
