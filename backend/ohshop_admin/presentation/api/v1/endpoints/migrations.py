"""Data migration endpoints: run history, company backfills and site-code progress."""

import logging
from collections.abc import AsyncGenerator
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import StreamingResponse

from ohshop_admin.application.schemas.migration import (
    BackfillRequest,
    BackfillResultResponse,
    BackfillTarget,
    CleanupResponse,
    MigrationCompleteRequest,
    MigrationHistoryResponse,
    MigrationProgressUpdate,
    MigrationStartRequest,
    MigrationStatsResponse,
    MigrationSummaryResponse,
    MigrationTrendResponse,
)
from ohshop_admin.application.services import (
    CompanyBackfillService,
    MigrationHistoryService,
    ProgressSimulator,
)
from ohshop_admin.application.services.sse_manager import format_sse
from ohshop_admin.config import get_settings
from ohshop_admin.domain.exceptions import (
    EntityNotFoundError,
    MigrationAbortedError,
    ValidationError,
)
from ohshop_admin.infrastructure.dependencies import (
    get_company_backfill_service,
    get_current_user,
    get_migration_history_service,
    get_progress_simulator,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/migrations", tags=["Migrations"])

_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


# ── History ──────────────────────────────────────────────────────────


@router.get("/history", response_model=list[MigrationHistoryResponse])
async def migration_history(
    limit: int = Query(50, ge=1, le=500),
    migration_type: str | None = Query(None),
    service: MigrationHistoryService = Depends(get_migration_history_service),
    _: str = Depends(get_current_user),
) -> list[MigrationHistoryResponse]:
    entries = await service.get_history(limit=limit, migration_type=migration_type)
    return [MigrationHistoryResponse.model_validate(e, from_attributes=True) for e in entries]


@router.get("/history/summary", response_model=MigrationSummaryResponse)
async def migration_summary(
    service: MigrationHistoryService = Depends(get_migration_history_service),
    _: str = Depends(get_current_user),
) -> MigrationSummaryResponse:
    summary = await service.get_summary()
    return MigrationSummaryResponse.model_validate(summary, from_attributes=True)


@router.get("/history/trends", response_model=list[MigrationTrendResponse])
async def migration_trends(
    days: int = Query(30, ge=1, le=365),
    service: MigrationHistoryService = Depends(get_migration_history_service),
    _: str = Depends(get_current_user),
) -> list[MigrationTrendResponse]:
    trends = await service.get_trends(days)
    return [MigrationTrendResponse.model_validate(t, from_attributes=True) for t in trends]


@router.post("/history/cleanup", response_model=CleanupResponse)
async def cleanup_history(
    days_to_keep: int | None = Query(None, ge=1),
    service: MigrationHistoryService = Depends(get_migration_history_service),
    _: str = Depends(get_current_user),
) -> CleanupResponse:
    days = days_to_keep or get_settings().migration_history_retention_days
    return CleanupResponse(deleted=await service.cleanup(days))


@router.get("/history/{migration_id}", response_model=MigrationHistoryResponse)
async def get_migration(
    migration_id: str,
    service: MigrationHistoryService = Depends(get_migration_history_service),
    _: str = Depends(get_current_user),
) -> MigrationHistoryResponse:
    try:
        entry = await service.get_entry(migration_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MigrationHistoryResponse.model_validate(entry, from_attributes=True)


@router.post(
    "/history",
    response_model=MigrationHistoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_migration(
    data: MigrationStartRequest,
    service: MigrationHistoryService = Depends(get_migration_history_service),
    user_id: str = Depends(get_current_user),
) -> MigrationHistoryResponse:
    """Record a run performed outside this API."""
    entry = await service.start_migration(
        data.migration_type,
        data.migration_name,
        total_items=data.total_items,
        batch_size=data.batch_size,
        metadata=data.metadata,
        user_id=user_id,
    )
    return MigrationHistoryResponse.model_validate(entry, from_attributes=True)


@router.patch("/history/{migration_id}", response_model=MigrationHistoryResponse)
async def update_progress(
    migration_id: str,
    data: MigrationProgressUpdate,
    service: MigrationHistoryService = Depends(get_migration_history_service),
    _: str = Depends(get_current_user),
) -> MigrationHistoryResponse:
    try:
        entry = await service.update_progress(migration_id, **data.model_dump(exclude_none=True))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MigrationHistoryResponse.model_validate(entry, from_attributes=True)


@router.post("/history/{migration_id}/complete", response_model=MigrationHistoryResponse)
async def complete_migration(
    migration_id: str,
    data: MigrationCompleteRequest,
    service: MigrationHistoryService = Depends(get_migration_history_service),
    _: str = Depends(get_current_user),
) -> MigrationHistoryResponse:
    try:
        entry = await service.complete_migration(
            migration_id, data.status, data.error_details or None
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return MigrationHistoryResponse.model_validate(entry, from_attributes=True)


# ── Company backfill ─────────────────────────────────────────────────


def _failed_run(error: MigrationAbortedError, response: Response):
    """Partial result of an aborted run, answered with status 500.

    Returned rather than raised: the request session commits only on a
    normal return, and the failed history entry must be kept.
    """
    logger.warning("%s", error)
    response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return error.result


@router.post("/company-id/user-companies", response_model=BackfillResultResponse)
async def backfill_user_companies(
    data: BackfillRequest,
    response: Response,
    service: CompanyBackfillService = Depends(get_company_backfill_service),
    user_id: str = Depends(get_current_user),
) -> BackfillResultResponse:
    """Assign a company to every user without one, grouped by license key."""
    try:
        result = await service.backfill_user_companies(dry_run=data.dry_run, user_id=user_id)
    except MigrationAbortedError as e:
        result = _failed_run(e, response)
    return BackfillResultResponse.model_validate(result, from_attributes=True)


@router.post("/company-id/{target}", response_model=BackfillResultResponse)
async def backfill_company_id(
    target: BackfillTarget,
    data: BackfillRequest,
    response: Response,
    service: CompanyBackfillService = Depends(get_company_backfill_service),
    user_id: str = Depends(get_current_user),
) -> BackfillResultResponse:
    """Copy the owner's ``company_id`` onto documents of ``target``.

    A run that aborts answers 500 with the counters reached so far.
    """
    try:
        result = await service.backfill(
            target, dry_run=data.dry_run, batch_size=data.batch_size, user_id=user_id
        )
    except MigrationAbortedError as e:
        result = _failed_run(e, response)
    return BackfillResultResponse.model_validate(result, from_attributes=True)


@router.get("/company-id/{collection}/stats", response_model=MigrationStatsResponse)
async def backfill_stats(
    collection: str,
    service: CompanyBackfillService = Depends(get_company_backfill_service),
    _: str = Depends(get_current_user),
) -> MigrationStatsResponse:
    stats = await service.get_stats(collection)
    return MigrationStatsResponse.model_validate(stats, from_attributes=True)


# ── Site codes ───────────────────────────────────────────────────────


@router.post("/site-codes")
async def migrate_site_codes(
    simulator: ProgressSimulator = Depends(get_progress_simulator),
    _: str = Depends(get_current_user),
) -> StreamingResponse:
    """Stream ``progress`` events from 0 to 100% followed by a completed event."""

    async def events() -> AsyncGenerator[str, None]:
        async for step in simulator.run("Site code migration"):
            yield format_sse("progress", asdict(step))

    return StreamingResponse(events(), media_type="text/event-stream", headers=_SSE_HEADERS)
