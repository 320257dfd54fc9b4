"""Application service (use case) for backfilling ``company_id`` onto legacy documents.

Older products, quotations, followers, bookings and chats were written
before documents carried the owning company. The backfill looks up the
owning user in ``iboard_users`` and copies that user's ``company_id``.
Every run is recorded in the migration history and its progress is
broadcast as ``migration`` events.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, NoReturn

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.application.services.migration_history_service import MigrationHistoryService
from ohshop_admin.application.services.sse_manager import SSEManager
from ohshop_admin.domain.entities.document import Document, FieldFilter, utc_now_iso
from ohshop_admin.domain.entities.migration import BackfillResult, MigrationStats, MigrationStatus
from ohshop_admin.domain.exceptions import MigrationAbortedError
from ohshop_admin.infrastructure.logging.colored_logger import MigrationLogger, MigrationStage

logger = logging.getLogger(__name__)

USERS = "iboard_users"
COMPANIES = "companies"

SKIP_NO_OWNER_FIELD = "missing owner field"
SKIP_OWNER_NOT_FOUND = "owner not found"
SKIP_OWNER_WITHOUT_COMPANY = "owner has no valid company_id"


def is_valid_company_id(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != "" and len(value) >= 3


def _single(field: str) -> Callable[[dict[str, Any]], list[str]]:
    def owners(data: dict[str, Any]) -> list[str]:
        value = data.get(field)
        return [value] if isinstance(value, str) and value else []

    return owners


def _booking_owners(data: dict[str, Any]) -> list[str]:
    return [v for v in (data.get("seller_id"), data.get("buyer_id")) if isinstance(v, str) and v]


def _chat_owners(data: dict[str, Any]) -> list[str]:
    participants = data.get("participants") or []
    return [p for p in participants if isinstance(p, str) and p]


# Target collection → owner ids to try, in priority order.
OWNER_RESOLVERS: dict[str, Callable[[dict[str, Any]], list[str]]] = {
    "products": _single("seller_id"),
    "quotation_request": _single("seller_id"),
    "followers": _single("seller_id"),
    "booking": _booking_owners,
    "chats": _chat_owners,
}


class CompanyBackfillService:
    """Runs the ``company_id`` backfills and reports how far each collection is."""

    def __init__(
        self,
        store: DocumentStore,
        history: MigrationHistoryService,
        sse: SSEManager | None = None,
        batch_size: int = 50,
    ):
        self._store = store
        self._history = history
        self._sse = sse
        self._batch_size = batch_size
        self._log = MigrationLogger("ohshop_admin.migrations.company_backfill")

    async def _emit(self, data: dict[str, Any]) -> None:
        if self._sse is not None:
            await self._sse.broadcast("migration", data)

    async def _abort(self, history_id: str, result: BackfillResult, error: Exception) -> NoReturn:
        """Close the run as failed and raise ``MigrationAbortedError`` with the partial result."""
        result.status = MigrationStatus.FAILED
        result.error = str(error)
        self._log.step_error(MigrationStage.ERROR, f"{result.target} backfill aborted", error=error)
        await self._history.complete_migration(
            history_id, MigrationStatus.FAILED, result.error_details + [str(error)]
        )
        await self._emit(
            {"id": history_id, "target": result.target, "status": "failed", "error": str(error)}
        )
        raise MigrationAbortedError(result, error) from error

    async def _owner_company(
        self, owner_id: str, cache: dict[str, Document | None]
    ) -> tuple[Document | None, str | None]:
        if owner_id not in cache:
            cache[owner_id] = await self._store.get(USERS, owner_id)
        owner = cache[owner_id]
        if owner is None:
            return None, None
        company_id = owner.data.get("company_id")
        return owner, company_id if is_valid_company_id(company_id) else None

    async def backfill(
        self,
        target: str,
        *,
        dry_run: bool = False,
        batch_size: int | None = None,
        user_id: str | None = None,
    ) -> BackfillResult:
        """Write ``company_id`` onto every document of ``target`` that lacks a valid one."""
        if target not in OWNER_RESOLVERS:
            raise ValueError(f"Unknown backfill target: {target}")
        resolve_owners = OWNER_RESOLVERS[target]
        batch_size = batch_size or self._batch_size
        result = BackfillResult(target=target, dry_run=dry_run)
        started = time.monotonic()

        self._log.separator(f"{target} company backfill")
        with self._log.timed_step(MigrationStage.SCAN, f"Scanning {target}"):
            pending = [
                doc for doc in await self._store.query(target)
                if not is_valid_company_id(doc.data.get("company_id"))
            ]
        result.total = len(pending)

        entry = await self._history.start_migration(
            f"{target}_company_id",
            f"Backfill company_id on {target}",
            total_items=result.total,
            batch_size=batch_size,
            metadata={"dry_run": dry_run},
            user_id=user_id,
        )
        result.history_id = entry.id
        await self._emit({"id": entry.id, "target": target, "status": "running", "total": result.total})

        stage = MigrationStage.DRY_RUN if dry_run else MigrationStage.UPDATE
        owners: dict[str, Document | None] = {}
        try:
            for start in range(0, len(pending), batch_size):
                batch = pending[start:start + batch_size]
                self._log.step_start(stage, f"Batch {start // batch_size + 1}", size=len(batch))
                async with self._store.transaction():
                    for doc in batch:
                        await self._backfill_one(target, doc, resolve_owners, owners, dry_run, result)

                processed = min(start + batch_size, len(pending))
                self._log.progress(processed, len(pending))
                elapsed = max(time.monotonic() - started, 1e-6)
                await self._history.update_progress(
                    entry.id,
                    successful_items=result.updated,
                    error_items=result.errors,
                    skipped_items=result.skipped,
                    processing_rate=round(processed / elapsed, 2),
                )
                await self._emit({
                    "id": entry.id,
                    "target": target,
                    "status": "running",
                    "processed": processed,
                    "total": result.total,
                    "updated": result.updated,
                    "skipped": result.skipped,
                    "errors": result.errors,
                })
        except Exception as e:
            await self._abort(entry.id, result, e)

        await self._history.complete_migration(
            entry.id, MigrationStatus.COMPLETED, result.error_details or None
        )
        result.status = MigrationStatus.COMPLETED
        self._log.step_complete(
            MigrationStage.COMPLETE,
            f"{target} backfill finished",
            updated=result.updated,
            skipped=result.skipped,
            errors=result.errors,
            dry_run=dry_run,
        )
        self._log.stats(**result.skip_reasons)
        await self._emit({
            "id": entry.id,
            "target": target,
            "status": "completed",
            "total": result.total,
            "updated": result.updated,
            "skipped": result.skipped,
            "errors": result.errors,
        })
        return result

    async def _backfill_one(
        self,
        target: str,
        doc: Document,
        resolve_owners: Callable[[dict[str, Any]], list[str]],
        owners: dict[str, Document | None],
        dry_run: bool,
        result: BackfillResult,
    ) -> None:
        owner_ids = resolve_owners(doc.data)
        if not owner_ids:
            result.skip(SKIP_NO_OWNER_FIELD)
            return

        try:
            company_id = None
            found_owner = False
            for owner_id in owner_ids:
                owner, company_id = await self._owner_company(owner_id, owners)
                found_owner = found_owner or owner is not None
                if company_id:
                    break

            if not company_id:
                result.skip(SKIP_OWNER_WITHOUT_COMPANY if found_owner else SKIP_OWNER_NOT_FOUND)
                return

            if not dry_run:
                await self._store.update(
                    target, doc.id, {"company_id": company_id, "updated_at": utc_now_iso()}
                )
            result.updated += 1
        except Exception as e:
            logger.exception("Backfill of %s/%s failed", target, doc.id)
            result.errors += 1
            result.error_details.append(f"{doc.id}: {e}")

    async def backfill_user_companies(
        self, *, dry_run: bool = False, user_id: str | None = None
    ) -> BackfillResult:
        """Give every ``iboard_users`` account without a company one.

        Accounts sharing a ``license_key`` share a company: an id already
        held by one of them is reused, otherwise an empty company is
        created. Accounts without a license key are skipped.
        """
        result = BackfillResult(target=USERS, dry_run=dry_run)
        users = await self._store.query(USERS)
        pending = [u for u in users if not is_valid_company_id(u.data.get("company_id"))]
        result.total = len(pending)

        entry = await self._history.start_migration(
            "user_company_id",
            "Assign companies to users by license key",
            total_items=result.total,
            metadata={"dry_run": dry_run},
            user_id=user_id,
        )
        result.history_id = entry.id

        groups: dict[str, list[Document]] = {}
        for user in pending:
            license_key = user.data.get("license_key")
            if isinstance(license_key, str) and license_key.strip():
                groups.setdefault(license_key, []).append(user)
            else:
                result.skip("no license key")

        self._log.step_start(
            MigrationStage.RESOLVE, "Grouping users by license key", groups=len(groups)
        )
        try:
            for license_key, members in groups.items():
                async with self._store.transaction():
                    company_id = await self._company_for_license(license_key, users, dry_run, result)
                    for member in members:
                        if not dry_run:
                            await self._store.update(
                                USERS,
                                member.id,
                                {"company_id": company_id, "updated": utc_now_iso()},
                            )
                        result.updated += 1
            await self._history.update_progress(
                entry.id, successful_items=result.updated, skipped_items=result.skipped
            )
        except Exception as e:
            await self._abort(entry.id, result, e)

        await self._history.complete_migration(entry.id, MigrationStatus.COMPLETED)
        result.status = MigrationStatus.COMPLETED
        self._log.step_complete(
            MigrationStage.COMPLETE,
            "User company backfill finished",
            updated=result.updated,
            companies_created=result.companies_created,
            skipped=result.skipped,
        )
        return result

    async def _company_for_license(
        self,
        license_key: str,
        users: list[Document],
        dry_run: bool,
        result: BackfillResult,
    ) -> str | None:
        for user in users:
            if user.data.get("license_key") == license_key and is_valid_company_id(
                user.data.get("company_id")
            ):
                return user.data["company_id"]

        result.companies_created += 1
        if dry_run:
            return None
        now = utc_now_iso()
        company = await self._store.add(
            COMPANIES,
            {
                "name": "",
                "description": "",
                "active": True,
                "created_at": now,
                "updated_at": now,
                "migration_source": "user_company_migration",
                "migration_timestamp": now,
            },
        )
        self._log.detail("Created company for license key", license_key=license_key, company=company.id)
        return company.id

    async def get_stats(self, collection: str) -> MigrationStats:
        total = await self._store.count(collection)
        successful = await self._store.count(collection, [FieldFilter("company_id", "!=", None)])
        return MigrationStats(collection=collection, total=total, successful=successful)
