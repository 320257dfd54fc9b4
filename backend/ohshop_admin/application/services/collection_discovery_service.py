"""Collection discovery: which collections exist, how big they are and what
they hold.

One instance lives for the whole process. Results are cached for
``cache_seconds`` and only one discovery may run at a time. Listeners can
subscribe to discovery events. The API wires them to the SSE broadcaster.
"""

import asyncio
import fnmatch
import inspect
import logging
import time
from collections import Counter
from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, NoReturn

import yaml

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.domain.entities.collection_metadata import (
    CollectionMetadata,
    CollectionPermissions,
    CollectionPriority,
    CollectionSchema,
    DiscoveryError,
    DiscoveryEvent,
    DiscoveryEventType,
    DiscoveryResult,
    DiscoveryStatistics,
)
from ohshop_admin.domain.entities.document import utc_now
from ohshop_admin.domain.exceptions import (
    DiscoveryFailedError,
    DiscoveryInProgressError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)

SCHEMA_SAMPLE_SIZE = 5
BYTES_PER_DOCUMENT = 1024

StoreFactory = Callable[[], AbstractAsyncContextManager[DocumentStore]]
DiscoveryListener = Callable[[DiscoveryEvent], Awaitable[None] | None]


@dataclass
class CollectionCatalog:
    """Known collection names plus the naming rules used to classify them."""

    known_collections: list[str] = field(default_factory=list)
    categories: dict[str, list[str]] = field(default_factory=dict)
    high_priority: list[str] = field(default_factory=list)
    medium_priority: list[str] = field(default_factory=list)

    def categorize(self, name: str) -> str:
        lowered = name.lower()
        for category, keywords in self.categories.items():
            if any(keyword in lowered for keyword in keywords):
                return category
        return "Other"

    def priority(self, name: str) -> CollectionPriority:
        if name in self.high_priority:
            return CollectionPriority.HIGH
        if name in self.medium_priority:
            return CollectionPriority.MEDIUM
        if name.startswith("test_"):
            return CollectionPriority.LOW
        return CollectionPriority.MEDIUM


def load_catalog(path: str | Path) -> CollectionCatalog:
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    priority = raw.get("priority") or {}
    return CollectionCatalog(
        known_collections=list(raw.get("known_collections") or []),
        categories={k: list(v or []) for k, v in (raw.get("categories") or {}).items()},
        high_priority=list(priority.get("high") or []),
        medium_priority=list(priority.get("medium") or []),
    )


def estimate_size(document_count: int) -> str:
    size = document_count * BYTES_PER_DOCUMENT
    if size < 1024:
        return f"{size} B"
    if size < 1024 ** 2:
        return f"{size / 1024:.1f} KB"
    if size < 1024 ** 3:
        return f"{size / 1024 ** 2:.1f} MB"
    return f"{size / 1024 ** 3:.1f} GB"


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def detect_schema(samples: list[dict[str, Any]]) -> CollectionSchema:
    fields: list[str] = []
    types: dict[str, str] = {}
    for data in samples:
        for key, value in data.items():
            if key not in types:
                fields.append(key)
                types[key] = json_type_name(value)
    return CollectionSchema(fields=fields, types=types)


class CollectionDiscoveryService:
    def __init__(
        self,
        store_factory: StoreFactory,
        catalog: CollectionCatalog,
        *,
        cache_seconds: float = 300,
        max_concurrency: int = 5,
        exclude_patterns: list[str] | None = None,
        include_test_collections: bool = False,
        schema_detection: bool = True,
        permission_check: bool = True,
    ):
        self._store_factory = store_factory
        self._catalog = catalog
        self._cache_seconds = cache_seconds
        self._max_concurrency = max(1, max_concurrency)
        self._exclude_patterns = list(exclude_patterns or [])
        self._include_test_collections = include_test_collections
        self._schema_detection = schema_detection
        self._permission_check = permission_check

        self._cache: dict[str, CollectionMetadata] = {}
        self._last_discovery: datetime | None = None
        self._last_discovery_at: float | None = None
        self._last_error: str | None = None
        self._in_progress = False
        self._listeners: dict[DiscoveryEventType, list[DiscoveryListener]] = {}

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    @property
    def last_error(self) -> str | None:
        """Message of the most recent failed run, cleared by the next success."""
        return self._last_error

    # ── Events ───────────────────────────────────────────────────────

    def add_listener(self, event_type: DiscoveryEventType, listener: DiscoveryListener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def remove_listener(self, event_type: DiscoveryEventType, listener: DiscoveryListener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    async def _emit(self, event: DiscoveryEvent) -> None:
        for listener in list(self._listeners.get(event.type, [])):
            try:
                outcome = listener(event)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception:
                logger.exception("Discovery listener failed for %s", event.type.value)

    # ── Discovery ────────────────────────────────────────────────────

    def _cache_valid(self) -> bool:
        if self._last_discovery_at is None:
            return False
        return time.monotonic() - self._last_discovery_at < self._cache_seconds

    def _cached_result(self) -> DiscoveryResult:
        collections = list(self._cache.values())
        return DiscoveryResult(
            collections=collections,
            total_count=len(collections),
            accessible_count=sum(1 for c in collections if c.is_accessible),
            last_updated=self._last_discovery,
            discovery_time_ms=0,
            warnings=["Using cached data"],
            cache_hit=True,
        )

    def _is_candidate(self, name: str) -> bool:
        if not self._include_test_collections and name.startswith("test_"):
            return False
        return not any(fnmatch.fnmatchcase(name, p) for p in self._exclude_patterns)

    async def discover_collections(self, force_refresh: bool = False) -> DiscoveryResult:
        if not force_refresh and self._cache_valid():
            return self._cached_result()
        if self._in_progress:
            raise DiscoveryInProgressError()

        self._in_progress = True
        started = time.monotonic()
        try:
            result = await self._perform_discovery()
        except Exception as e:
            logger.exception("Collection discovery failed")
            await self._fail(f"Collection discovery failed: {e}", e)
        finally:
            self._in_progress = False

        self._last_error = None
        result.discovery_time_ms = int((time.monotonic() - started) * 1000)
        await self._emit(DiscoveryEvent(type=DiscoveryEventType.DISCOVERY_COMPLETE, timestamp=utc_now()))
        logger.info(
            "Discovered %d collections (%d accessible, %d errors) in %d ms",
            result.total_count,
            result.accessible_count,
            len(result.errors),
            result.discovery_time_ms,
        )
        return result

    async def _fail(self, message: str, error: Exception, collection: str | None = None) -> NoReturn:
        self._last_error = message
        await self._emit(
            DiscoveryEvent(
                type=DiscoveryEventType.DISCOVERY_ERROR,
                timestamp=utc_now(),
                error=DiscoveryError(
                    code=type(error).__name__,
                    message=message,
                    severity="high",
                    timestamp=utc_now(),
                    collection=collection,
                ),
            )
        )
        raise DiscoveryFailedError(message) from error

    async def _perform_discovery(self) -> DiscoveryResult:
        async with self._store_factory() as store:
            stored = await store.list_collections()
        names = [
            n for n in dict.fromkeys([*self._catalog.known_collections, *stored])
            if self._is_candidate(n)
        ]

        collections: list[CollectionMetadata] = []
        errors: list[DiscoveryError] = []
        for start in range(0, len(names), self._max_concurrency):
            batch = names[start:start + self._max_concurrency]
            outcomes = await asyncio.gather(
                *(self._analyze(name) for name in batch), return_exceptions=True
            )
            for name, outcome in zip(batch, outcomes):
                if isinstance(outcome, Exception):
                    logger.warning("Could not analyse collection %s: %s", name, outcome)
                    errors.append(
                        DiscoveryError(
                            code=type(outcome).__name__,
                            message=str(outcome),
                            severity="medium",
                            timestamp=utc_now(),
                            collection=name,
                        )
                    )
                elif isinstance(outcome, CollectionMetadata):
                    collections.append(outcome)
                else:
                    raise outcome

        await self._replace_cache(collections)
        now = utc_now()
        self._last_discovery = now
        self._last_discovery_at = time.monotonic()
        return DiscoveryResult(
            collections=collections,
            total_count=len(collections),
            accessible_count=sum(1 for c in collections if c.is_accessible),
            last_updated=now,
            discovery_time_ms=0,
            errors=errors,
        )

    async def _replace_cache(self, collections: list[CollectionMetadata]) -> None:
        previous = self._cache
        self._cache = {c.name: c for c in collections}
        # The first run only fills the cache.
        if self._last_discovery is None:
            return
        for name, meta in self._cache.items():
            if name not in previous:
                await self._emit(DiscoveryEvent(DiscoveryEventType.COLLECTION_ADDED, utc_now(), meta))
        for name, meta in previous.items():
            if name not in self._cache:
                await self._emit(DiscoveryEvent(DiscoveryEventType.COLLECTION_REMOVED, utc_now(), meta))

    async def _analyze(self, name: str) -> CollectionMetadata:
        async with self._store_factory() as store:
            count = await store.count(name)
            samples = []
            if self._schema_detection and count:
                samples = [d.data for d in await store.query(name, limit=SCHEMA_SAMPLE_SIZE)]

        permitted = self._permission_check
        return CollectionMetadata(
            name=name,
            path=name,
            document_count=count,
            last_accessed=utc_now(),
            is_accessible=True,
            has_subcollections=False,
            estimated_size=estimate_size(count),
            category=self._catalog.categorize(name),
            priority=self._catalog.priority(name),
            permissions=CollectionPermissions(read=True, write=permitted, delete=permitted),
            schema=detect_schema(samples) if samples else None,
        )

    # ── Cache access ─────────────────────────────────────────────────

    def get_collection(self, name: str) -> CollectionMetadata:
        if name not in self._cache:
            raise EntityNotFoundError("Collection", name)
        return self._cache[name]

    def get_collections_by_category(self, category: str) -> list[CollectionMetadata]:
        return [c for c in self._cache.values() if c.category == category]

    def get_collections_by_priority(self, priority: CollectionPriority) -> list[CollectionMetadata]:
        return [c for c in self._cache.values() if c.priority is priority]

    async def refresh_collection(self, name: str) -> CollectionMetadata:
        try:
            meta = await self._analyze(name)
        except Exception as e:
            logger.exception("Refreshing collection %s failed", name)
            await self._fail(f"Could not refresh collection {name}: {e}", e, collection=name)
        self._cache[name] = meta
        await self._emit(DiscoveryEvent(DiscoveryEventType.COLLECTION_UPDATED, utc_now(), meta))
        return meta

    def get_statistics(self) -> DiscoveryStatistics:
        collections = list(self._cache.values())
        return DiscoveryStatistics(
            total_collections=len(collections),
            accessible_collections=sum(1 for c in collections if c.is_accessible),
            category_counts=dict(Counter(c.category for c in collections)),
            priority_counts=dict(Counter(c.priority.value for c in collections)),
            last_discovery=self._last_discovery,
            cache_size=len(self._cache),
            last_error=self._last_error,
        )

    def clear_cache(self) -> None:
        self._cache.clear()
        self._last_discovery = None
        self._last_discovery_at = None
        logger.info("Collection discovery cache cleared")
