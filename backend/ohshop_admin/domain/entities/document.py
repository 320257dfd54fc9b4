"""Document-store primitives shared by every collection-backed entity.

Records live as JSON documents grouped into named collections. Queries are
expressed with ``FieldFilter`` and ``OrderBy`` so that services stay
independent of the storage engine. Field transforms (``ArrayUnion``,
``ArrayRemove``, ``Increment``, ``DeleteField``) can be passed as values to a
partial update and are resolved against the stored document.
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Timestamp format used inside documents; sorts lexicographically."""
    return utc_now().isoformat()


def to_iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_timestamp(value: Any) -> datetime | None:
    """Read a timestamp stored as ISO string, epoch seconds or datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, dict) and "seconds" in value:
        return datetime.fromtimestamp(value["seconds"], tz=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def new_document_id() -> str:
    return uuid4().hex


@dataclass
class Document:
    """A JSON document addressed by (collection, id)."""

    collection: str
    id: str
    data: dict[str, Any]
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


# ── Queries ─────────────────────────────────────────────────────────

FILTER_OPERATORS = ("==", "!=", "<", "<=", ">", ">=", "in")


def _same_kind(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool)
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return True
    return type(left) is type(right)


@dataclass(frozen=True)
class FieldFilter:
    """A single ``field op value`` predicate over document data.

    Documents that lack the field never match, except for ``== None`` which
    matches a missing or null field.
    """

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in FILTER_OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op!r}")

    def matches(self, data: dict[str, Any]) -> bool:
        current = data.get(self.field)
        if self.value is None:
            if self.op == "==":
                return current is None
            if self.op == "!=":
                return current is not None
            return False
        if current is None:
            return False
        if self.op == "in":
            return any(_same_kind(current, v) and current == v for v in self.value)
        if self.op == "==":
            return _same_kind(current, self.value) and current == self.value
        if self.op == "!=":
            return not (_same_kind(current, self.value) and current == self.value)
        if not _same_kind(current, self.value):
            return False
        if self.op == "<":
            return current < self.value
        if self.op == "<=":
            return current <= self.value
        if self.op == ">":
            return current > self.value
        return current >= self.value


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


def matches_all(data: dict[str, Any], filters: Sequence[FieldFilter]) -> bool:
    return all(f.matches(data) for f in filters)


def _sort_key(value: Any) -> tuple[int, Any]:
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    return (3, json.dumps(value, sort_keys=True, default=str))


def sort_documents(docs: list[Document], order_by: Sequence[OrderBy]) -> list[Document]:
    """Sort by each key in turn; documents missing a key go last."""
    ordered = list(docs)
    for order in reversed(order_by):
        present = [d for d in ordered if d.data.get(order.field) is not None]
        missing = [d for d in ordered if d.data.get(order.field) is None]
        present.sort(key=lambda d: _sort_key(d.data[order.field]), reverse=order.descending)
        ordered = present + missing
    return ordered


# ── Field transforms ────────────────────────────────────────────────

@dataclass(frozen=True)
class ArrayUnion:
    """Append values to an array field, skipping ones already present."""

    values: tuple[Any, ...]

    def __init__(self, *values: Any):
        object.__setattr__(self, "values", values)


@dataclass(frozen=True)
class ArrayRemove:
    """Remove every occurrence of the given values from an array field."""

    values: tuple[Any, ...]

    def __init__(self, *values: Any):
        object.__setattr__(self, "values", values)


@dataclass(frozen=True)
class Increment:
    amount: int | float = 1


class DeleteField:
    """Marker that removes a field from the document."""


def apply_changes(current: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    """Return a new data dict with ``changes`` merged into ``current``."""
    merged = dict(current)
    for key, value in changes.items():
        if isinstance(value, DeleteField) or value is DeleteField:
            merged.pop(key, None)
        elif isinstance(value, ArrayUnion):
            existing = list(merged.get(key) or [])
            for item in value.values:
                if item not in existing:
                    existing.append(item)
            merged[key] = existing
        elif isinstance(value, ArrayRemove):
            merged[key] = [
                item for item in (merged.get(key) or []) if item not in value.values
            ]
        elif isinstance(value, Increment):
            base = merged.get(key) or 0
            merged[key] = base + value.amount
        else:
            merged[key] = value
    return merged
