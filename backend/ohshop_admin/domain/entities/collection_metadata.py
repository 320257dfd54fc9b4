"""Entities describing discovered document-store collections."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class CollectionPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DiscoveryEventType(str, Enum):
    COLLECTION_ADDED = "collection-added"
    COLLECTION_REMOVED = "collection-removed"
    COLLECTION_UPDATED = "collection-updated"
    DISCOVERY_COMPLETE = "discovery-complete"
    DISCOVERY_ERROR = "discovery-error"


@dataclass
class CollectionPermissions:
    read: bool = False
    write: bool = False
    delete: bool = False


@dataclass
class CollectionSchema:
    fields: list[str]
    types: dict[str, str]


@dataclass
class CollectionMetadata:
    name: str
    path: str
    document_count: int
    last_accessed: datetime
    is_accessible: bool
    has_subcollections: bool
    estimated_size: str
    category: str
    priority: CollectionPriority
    permissions: CollectionPermissions = field(default_factory=CollectionPermissions)
    schema: CollectionSchema | None = None


@dataclass
class DiscoveryError:
    code: str
    message: str
    severity: str
    timestamp: datetime
    collection: str | None = None


@dataclass
class DiscoveryResult:
    collections: list[CollectionMetadata]
    total_count: int
    accessible_count: int
    last_updated: datetime
    discovery_time_ms: int
    errors: list[DiscoveryError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    cache_hit: bool = False


@dataclass
class DiscoveryEvent:
    type: DiscoveryEventType
    timestamp: datetime
    collection: CollectionMetadata | None = None
    error: DiscoveryError | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready form used when the event is pushed to SSE clients."""
        payload: dict[str, Any] = {
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.collection is not None:
            payload["collection"] = {
                "name": self.collection.name,
                "document_count": self.collection.document_count,
                "category": self.collection.category,
                "priority": self.collection.priority.value,
            }
        if self.error is not None:
            payload["error"] = {
                "code": self.error.code,
                "message": self.error.message,
                "severity": self.error.severity,
            }
        return payload


@dataclass
class DiscoveryStatistics:
    total_collections: int
    accessible_collections: int
    category_counts: dict[str, int]
    priority_counts: dict[str, int]
    last_discovery: datetime | None
    cache_size: int
    last_error: str | None = None
