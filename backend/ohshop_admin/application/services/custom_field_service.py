"""Application service (use case) for custom product fields.

A custom field is a definition stored in ``custom_field_definitions``. Adding
it to products writes the converted default value under the field key on
each product document, and every non-dry run is recorded in
``field_migrations`` for audit.
"""

import logging
import math
import re
import time
from typing import Any

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.application.schemas.product import FieldDefinitionCreate
from ohshop_admin.domain.entities.custom_field import (
    BulkOperationResult,
    CustomFieldDefinition,
    FieldDataType,
    FieldErrorType,
    FieldMigration,
    FieldStatus,
    FieldValidationError,
)
from ohshop_admin.domain.entities.document import (
    FieldFilter,
    Increment,
    OrderBy,
    parse_timestamp,
    to_iso,
    utc_now_iso,
)
from ohshop_admin.domain.exceptions import DuplicateEntityError, EntityNotFoundError

logger = logging.getLogger(__name__)

DEFINITIONS = "custom_field_definitions"
MIGRATIONS = "field_migrations"
PRODUCTS = "products"
BULK_BATCH_SIZE = 500


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def validate_field_value(
    value: Any, definition: CustomFieldDefinition, product_id: str = ""
) -> list[FieldValidationError]:
    """Check ``value`` against the definition's type and validation rules."""

    def error(error_type: FieldErrorType, message: str) -> FieldValidationError:
        return FieldValidationError(
            field_key=definition.key,
            error_type=error_type,
            error_message=message,
            current_value=value,
            expected_type=definition.data_type.value,
            product_id=product_id,
        )

    if _is_empty(value):
        if definition.required:
            return [error(FieldErrorType.REQUIRED_MISSING, f"Field '{definition.name}' is required")]
        return []

    rules = definition.validation
    errors: list[FieldValidationError] = []

    if definition.data_type is FieldDataType.STRING:
        text = str(value)
        if rules.min is not None and len(text) < rules.min:
            errors.append(error(FieldErrorType.CONSTRAINT_VIOLATION, f"String too short (min: {rules.min:g})"))
        if rules.max is not None and len(text) > rules.max:
            errors.append(error(FieldErrorType.CONSTRAINT_VIOLATION, f"String too long (max: {rules.max:g})"))
        if rules.pattern:
            try:
                matched = re.search(rules.pattern, text) is not None
            except re.error as e:
                errors.append(error(FieldErrorType.VALIDATION_FAILED, f"Validation error: {e}"))
            else:
                if not matched:
                    errors.append(error(
                        FieldErrorType.VALIDATION_FAILED,
                        f"String doesn't match pattern: {rules.pattern}",
                    ))
        if rules.options and text not in rules.options:
            errors.append(error(
                FieldErrorType.VALIDATION_FAILED,
                f"Invalid option. Must be one of: {', '.join(rules.options)}",
            ))

    elif definition.data_type is FieldDataType.NUMBER:
        number = _to_number(value)
        if number is None:
            errors.append(error(FieldErrorType.TYPE_MISMATCH, "Invalid number"))
        else:
            if rules.min is not None and number < rules.min:
                errors.append(error(FieldErrorType.CONSTRAINT_VIOLATION, f"Number too small (min: {rules.min:g})"))
            if rules.max is not None and number > rules.max:
                errors.append(error(FieldErrorType.CONSTRAINT_VIOLATION, f"Number too large (max: {rules.max:g})"))

    elif definition.data_type is FieldDataType.DATE:
        if parse_timestamp(value) is None:
            errors.append(error(FieldErrorType.TYPE_MISMATCH, "Invalid date"))

    elif definition.data_type is FieldDataType.ARRAY:
        if not isinstance(value, list):
            errors.append(error(FieldErrorType.TYPE_MISMATCH, "Value must be an array"))

    elif definition.data_type is FieldDataType.OBJECT:
        if not isinstance(value, dict):
            errors.append(error(FieldErrorType.TYPE_MISMATCH, "Value must be an object"))

    return errors


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def convert_field_value(value: Any, data_type: FieldDataType) -> Any:
    """Coerce ``value`` into the representation stored on product documents."""
    if data_type is FieldDataType.DATE:
        parsed = parse_timestamp(value)
        return to_iso(parsed) if parsed else value
    if data_type is FieldDataType.NUMBER:
        number = _to_number(value)
        if number is None:
            return None
        return int(number) if number.is_integer() else number
    if data_type is FieldDataType.BOOLEAN:
        return bool(value)
    if data_type is FieldDataType.ARRAY:
        return value if isinstance(value, list) else []
    if data_type is FieldDataType.OBJECT:
        return value if isinstance(value, dict) else {}
    return "" if value is None else str(value)


class CustomFieldService:
    """Manages custom field definitions and their roll-out onto products."""

    def __init__(self, store: DocumentStore):
        self._store = store

    async def save_definition(
        self, data: FieldDefinitionCreate, user_id: str | None = None
    ) -> CustomFieldDefinition:
        existing = await self._store.query(
            DEFINITIONS,
            [
                FieldFilter("key", "==", data.key),
                FieldFilter("status", "in", [FieldStatus.ACTIVE.value, FieldStatus.DEPRECATED.value]),
            ],
            limit=1,
        )
        if existing:
            raise DuplicateEntityError("Field", "key", data.key)

        now = utc_now_iso()
        doc = await self._store.add(
            DEFINITIONS,
            {
                "key": data.key,
                "name": data.name,
                "dataType": data.data_type.value,
                "defaultValue": data.default_value,
                "required": data.required,
                "description": data.description,
                "validation": data.validation.model_dump(exclude_none=True),
                "version": 1,
                "status": FieldStatus.ACTIVE.value,
                "usage_count": 0,
                "last_used": None,
                "created_by": user_id,
                "created": now,
                "updated": now,
            },
        )
        logger.info("Saved custom field definition %s (%s)", data.key, data.data_type.value)
        return CustomFieldDefinition.from_document(doc)

    async def list_definitions(self, include_archived: bool = False) -> list[CustomFieldDefinition]:
        filters = []
        if not include_archived:
            filters.append(
                FieldFilter("status", "in", [FieldStatus.ACTIVE.value, FieldStatus.DEPRECATED.value])
            )
        docs = await self._store.query(
            DEFINITIONS, filters, [OrderBy("created", descending=True)]
        )
        return [CustomFieldDefinition.from_document(d) for d in docs]

    async def get_definition_by_key(self, key: str) -> CustomFieldDefinition:
        """The active definition for ``key``."""
        docs = await self._store.query(
            DEFINITIONS,
            [FieldFilter("key", "==", key), FieldFilter("status", "==", FieldStatus.ACTIVE.value)],
            limit=1,
        )
        if not docs:
            raise EntityNotFoundError("Field", key)
        return CustomFieldDefinition.from_document(docs[0])

    async def archive_definition(self, field_id: str) -> CustomFieldDefinition:
        if await self._store.get(DEFINITIONS, field_id) is None:
            raise EntityNotFoundError("Field", field_id)
        doc = await self._store.update(
            DEFINITIONS,
            field_id,
            {"status": FieldStatus.ARCHIVED.value, "updated": utc_now_iso()},
        )
        logger.info("Archived custom field definition %s", field_id)
        return CustomFieldDefinition.from_document(doc)

    async def add_field_to_products(
        self,
        definition: CustomFieldDefinition,
        product_ids: list[str],
        value: Any = None,
        user_id: str | None = None,
        dry_run: bool = False,
    ) -> BulkOperationResult:
        """Write the field onto each product that does not have it yet.

        Products already carrying the key are skipped with a warning. A
        missing product or an invalid value counts as a failure. Dry runs
        only validate.
        """
        started = time.monotonic()
        value = definition.default_value if value is None else value
        result = BulkOperationResult(total_selected=len(product_ids))
        value_errors = validate_field_value(value, definition)
        stored_value = convert_field_value(value, definition.data_type)

        for start in range(0, len(product_ids), BULK_BATCH_SIZE):
            batch = product_ids[start:start + BULK_BATCH_SIZE]
            async with self._store.transaction():
                for product_id in batch:
                    result.processed += 1
                    doc = await self._store.get(PRODUCTS, product_id)
                    if doc is None:
                        result.failed += 1
                        result.errors.append({
                            "product_id": product_id,
                            "product_name": "Unknown",
                            "error": "Product not found",
                        })
                        continue

                    product_name = doc.data.get("name") or "Unknown"
                    if definition.key in doc.data:
                        result.skipped += 1
                        result.warnings.append({
                            "product_id": product_id,
                            "product_name": product_name,
                            "warning": f"Already has field '{definition.key}'",
                        })
                        continue

                    if value_errors:
                        result.failed += 1
                        result.errors.append({
                            "product_id": product_id,
                            "product_name": product_name,
                            "error": ", ".join(e.error_message for e in value_errors),
                        })
                        continue

                    if not dry_run:
                        await self._store.update(
                            PRODUCTS,
                            product_id,
                            {definition.key: stored_value, "updated": utc_now_iso()},
                        )
                    result.successful += 1

        if not dry_run:
            await self.record_migration(
                definition,
                "add",
                result,
                user_id,
                int((time.monotonic() - started) * 1000),
            )
            await self.update_usage(definition.id)

        logger.info(
            "Custom field %s %s: %d successful, %d skipped, %d failed",
            definition.key,
            "dry run" if dry_run else "added",
            result.successful,
            result.skipped,
            result.failed,
        )
        return result

    async def record_migration(
        self,
        definition: CustomFieldDefinition,
        operation_type: str,
        result: BulkOperationResult,
        user_id: str | None,
        execution_time_ms: int,
    ) -> FieldMigration:
        doc = await self._store.add(
            MIGRATIONS,
            {
                "field_definition_id": definition.id,
                "field_key": definition.key,
                "operation_type": operation_type,
                "to_version": definition.version,
                "result": {
                    "total_selected": result.total_selected,
                    "processed": result.processed,
                    "successful": result.successful,
                    "failed": result.failed,
                    "skipped": result.skipped,
                    "errors": result.errors,
                    "warnings": result.warnings,
                },
                "created_by": user_id,
                "execution_time_ms": execution_time_ms,
                "created": utc_now_iso(),
            },
        )
        return FieldMigration.from_document(doc)

    async def update_usage(self, field_id: str) -> None:
        now = utc_now_iso()
        try:
            await self._store.update(
                DEFINITIONS,
                field_id,
                {"usage_count": Increment(1), "last_used": now, "updated": now},
            )
        except EntityNotFoundError:
            logger.warning("Cannot record usage of missing field definition %s", field_id)

    async def get_migration_history(self, field_key: str) -> list[FieldMigration]:
        docs = await self._store.query(
            MIGRATIONS,
            [FieldFilter("field_key", "==", field_key)],
            [OrderBy("created", descending=True)],
        )
        return [FieldMigration.from_document(d) for d in docs]

    async def get_usage_stats(self) -> dict[str, Any]:
        definitions = await self.list_definitions(include_archived=True)
        active = [d for d in definitions if d.status is FieldStatus.ACTIVE]
        return {
            "total_fields": len(definitions),
            "active_fields": len(active),
            "most_used": sorted(active, key=lambda d: d.usage_count, reverse=True)[:5],
            "recently_added": sorted(
                active, key=lambda d: d.created.timestamp() if d.created else 0, reverse=True
            )[:5],
        }
