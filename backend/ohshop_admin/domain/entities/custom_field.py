"""Custom product fields: user-defined schema extensions stored as data."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ohshop_admin.domain.entities.document import Document, parse_timestamp


class FieldDataType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ARRAY = "array"
    OBJECT = "object"


class FieldStatus(str, Enum):
    ACTIVE = "active"
    DEPRECATED = "deprecated"
    ARCHIVED = "archived"


class FieldErrorType(str, Enum):
    TYPE_MISMATCH = "type_mismatch"
    VALIDATION_FAILED = "validation_failed"
    REQUIRED_MISSING = "required_missing"
    CONSTRAINT_VIOLATION = "constraint_violation"


@dataclass
class FieldValidationRules:
    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    options: list[str] | None = None


@dataclass
class CustomFieldDefinition:
    id: str
    key: str
    name: str
    data_type: FieldDataType
    default_value: Any = None
    required: bool = False
    description: str = ""
    validation: FieldValidationRules = field(default_factory=FieldValidationRules)
    status: FieldStatus = FieldStatus.ACTIVE
    version: int = 1
    usage_count: int = 0
    last_used: datetime | None = None
    created_by: str | None = None
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "CustomFieldDefinition":
        data = doc.data
        rules = data.get("validation") or {}
        return cls(
            id=doc.id,
            key=data.get("key", ""),
            name=data.get("name", ""),
            data_type=FieldDataType(data.get("dataType", "string")),
            default_value=data.get("defaultValue"),
            required=data.get("required", False),
            description=data.get("description") or "",
            validation=FieldValidationRules(
                min=rules.get("min"),
                max=rules.get("max"),
                pattern=rules.get("pattern"),
                options=rules.get("options"),
            ),
            status=FieldStatus(data.get("status", "active")),
            version=data.get("version", 1),
            usage_count=data.get("usage_count", 0),
            last_used=parse_timestamp(data.get("last_used")),
            created_by=data.get("created_by"),
            created=parse_timestamp(data.get("created")) or doc.created_at,
            updated=parse_timestamp(data.get("updated")) or doc.updated_at,
        )


@dataclass
class FieldValidationError:
    field_key: str
    error_type: FieldErrorType
    error_message: str
    current_value: Any
    expected_type: str
    product_id: str = ""


@dataclass
class BulkOperationResult:
    total_selected: int
    processed: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[dict[str, str]] = field(default_factory=list)
    warnings: list[dict[str, str]] = field(default_factory=list)


@dataclass
class FieldMigration:
    id: str
    field_definition_id: str
    field_key: str
    operation_type: str
    to_version: int
    result: dict[str, Any]
    created_by: str | None
    execution_time_ms: int
    created: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> "FieldMigration":
        data = doc.data
        return cls(
            id=doc.id,
            field_definition_id=data.get("field_definition_id", ""),
            field_key=data.get("field_key", ""),
            operation_type=data.get("operation_type", "add"),
            to_version=data.get("to_version", 1),
            result=dict(data.get("result") or {}),
            created_by=data.get("created_by"),
            execution_time_ms=data.get("execution_time_ms", 0),
            created=parse_timestamp(data.get("created")) or doc.created_at,
        )
