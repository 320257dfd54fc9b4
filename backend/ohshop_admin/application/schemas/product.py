"""Pydantic DTOs for products and their custom fields."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ohshop_admin.application.schemas.common import PaginationResponse
from ohshop_admin.domain.entities.custom_field import (
    FieldDataType,
    FieldErrorType,
    FieldStatus,
)


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    status: str
    type: str
    active: bool
    deleted: bool
    position: int
    seller_id: str | None
    seller_name: str
    company_id: str | None
    site_code: str
    content_type: str
    categories: list[str]
    category_names: list[str]
    media: list[dict[str, Any]]
    ai_text_tags: list[str]
    ai_logo_tags: list[str]
    specs_rental: dict[str, Any] | None
    custom_fields: dict[str, Any]
    created: datetime | None
    updated: datetime | None

    model_config = {"from_attributes": True}


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    pagination: PaginationResponse


class ProductUpdate(BaseModel):
    """Partial product update. Keys other than the listed ones are written as
    custom fields."""

    name: str | None = None
    description: str | None = None
    price: float | None = None
    status: str | None = None
    type: str | None = None
    active: bool | None = None
    position: int | None = None
    categories: list[str] | None = None
    site_code: str | None = None

    model_config = {"extra": "allow"}


class ProductStatsResponse(BaseModel):
    total: int
    active: int
    deleted: int
    pending: int
    approved: int
    total_value: float
    by_status: dict[str, int]
    by_type: dict[str, int]


class DeletedFieldBackfillResponse(BaseModel):
    processed: int
    updated: int
    already_had_field: int
    errors: int


# ── Custom fields ───────────────────────────────────────────────────

class FieldValidationRulesSchema(BaseModel):
    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    options: list[str] | None = None

    model_config = {"from_attributes": True}


class FieldDefinitionCreate(BaseModel):
    key: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
    name: str = Field(..., min_length=1, max_length=200)
    data_type: FieldDataType
    default_value: Any = None
    required: bool = False
    description: str = ""
    validation: FieldValidationRulesSchema = Field(default_factory=FieldValidationRulesSchema)


class FieldDefinitionResponse(BaseModel):
    id: str
    key: str
    name: str
    data_type: FieldDataType
    default_value: Any
    required: bool
    description: str
    validation: FieldValidationRulesSchema
    status: FieldStatus
    version: int
    usage_count: int
    last_used: datetime | None
    created_by: str | None
    created: datetime | None

    model_config = {"from_attributes": True}


class FieldValueRequest(BaseModel):
    value: Any = None


class FieldValidationErrorSchema(BaseModel):
    field_key: str
    error_type: FieldErrorType
    error_message: str
    current_value: Any
    expected_type: str
    product_id: str

    model_config = {"from_attributes": True}


class FieldValidationResponse(BaseModel):
    valid: bool
    errors: list[FieldValidationErrorSchema]
    converted_value: Any = None


class BulkAddFieldRequest(BaseModel):
    """Add a custom field to products. ``value`` defaults to the definition's default."""

    product_ids: list[str] = Field(..., min_length=1)
    value: Any = None
    dry_run: bool = False


class BulkOperationResultSchema(BaseModel):
    total_selected: int
    processed: int
    successful: int
    failed: int
    skipped: int
    errors: list[dict[str, str]]
    warnings: list[dict[str, str]]

    model_config = {"from_attributes": True}


class FieldMigrationResponse(BaseModel):
    id: str
    field_definition_id: str
    field_key: str
    operation_type: str
    to_version: int
    result: dict[str, Any]
    created_by: str | None
    execution_time_ms: int
    created: datetime | None

    model_config = {"from_attributes": True}


class FieldUsageStatsResponse(BaseModel):
    total_fields: int
    active_fields: int
    most_used: list[FieldDefinitionResponse]
    recently_added: list[FieldDefinitionResponse]
