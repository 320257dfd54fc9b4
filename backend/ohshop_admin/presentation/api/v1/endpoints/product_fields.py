"""Custom product field endpoints: definitions, validation and bulk roll-out."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ohshop_admin.application.schemas.product import (
    BulkAddFieldRequest,
    BulkOperationResultSchema,
    FieldDefinitionCreate,
    FieldDefinitionResponse,
    FieldMigrationResponse,
    FieldUsageStatsResponse,
    FieldValidationErrorSchema,
    FieldValidationResponse,
    FieldValueRequest,
)
from ohshop_admin.application.services import CustomFieldService
from ohshop_admin.application.services.custom_field_service import (
    convert_field_value,
    validate_field_value,
)
from ohshop_admin.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from ohshop_admin.infrastructure.dependencies import get_current_user, get_custom_field_service

router = APIRouter(prefix="/product-fields", tags=["Product Fields"])


def _to_response(definition) -> FieldDefinitionResponse:
    return FieldDefinitionResponse.model_validate(definition, from_attributes=True)


@router.get("", response_model=list[FieldDefinitionResponse])
async def list_definitions(
    include_archived: bool = Query(False),
    service: CustomFieldService = Depends(get_custom_field_service),
    _: str = Depends(get_current_user),
) -> list[FieldDefinitionResponse]:
    definitions = await service.list_definitions(include_archived=include_archived)
    return [_to_response(d) for d in definitions]


@router.get("/stats", response_model=FieldUsageStatsResponse)
async def usage_stats(
    service: CustomFieldService = Depends(get_custom_field_service),
    _: str = Depends(get_current_user),
) -> FieldUsageStatsResponse:
    stats = await service.get_usage_stats()
    return FieldUsageStatsResponse(
        total_fields=stats["total_fields"],
        active_fields=stats["active_fields"],
        most_used=[_to_response(d) for d in stats["most_used"]],
        recently_added=[_to_response(d) for d in stats["recently_added"]],
    )


@router.post("", response_model=FieldDefinitionResponse, status_code=status.HTTP_201_CREATED)
async def create_definition(
    data: FieldDefinitionCreate,
    service: CustomFieldService = Depends(get_custom_field_service),
    user_id: str = Depends(get_current_user),
) -> FieldDefinitionResponse:
    try:
        definition = await service.save_definition(data, user_id)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _to_response(definition)


@router.get("/{key}", response_model=FieldDefinitionResponse)
async def get_definition(
    key: str,
    service: CustomFieldService = Depends(get_custom_field_service),
    _: str = Depends(get_current_user),
) -> FieldDefinitionResponse:
    try:
        definition = await service.get_definition_by_key(key)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(definition)


@router.post("/{field_id}/archive", response_model=FieldDefinitionResponse)
async def archive_definition(
    field_id: str,
    service: CustomFieldService = Depends(get_custom_field_service),
    _: str = Depends(get_current_user),
) -> FieldDefinitionResponse:
    try:
        definition = await service.archive_definition(field_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(definition)


@router.post("/{key}/validate", response_model=FieldValidationResponse)
async def validate_value(
    key: str,
    data: FieldValueRequest,
    service: CustomFieldService = Depends(get_custom_field_service),
    _: str = Depends(get_current_user),
) -> FieldValidationResponse:
    """Check a value against the field's rules and show how it would be stored."""
    try:
        definition = await service.get_definition_by_key(key)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    errors = validate_field_value(data.value, definition)
    return FieldValidationResponse(
        valid=not errors,
        errors=[FieldValidationErrorSchema.model_validate(e, from_attributes=True) for e in errors],
        converted_value=None if errors else convert_field_value(data.value, definition.data_type),
    )


@router.post("/{key}/products", response_model=BulkOperationResultSchema)
async def add_field_to_products(
    key: str,
    data: BulkAddFieldRequest,
    service: CustomFieldService = Depends(get_custom_field_service),
    user_id: str = Depends(get_current_user),
) -> BulkOperationResultSchema:
    try:
        definition = await service.get_definition_by_key(key)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    result = await service.add_field_to_products(
        definition, data.product_ids, value=data.value, user_id=user_id, dry_run=data.dry_run
    )
    return BulkOperationResultSchema.model_validate(result, from_attributes=True)


@router.get("/{key}/migrations", response_model=list[FieldMigrationResponse])
async def migration_history(
    key: str,
    service: CustomFieldService = Depends(get_custom_field_service),
    _: str = Depends(get_current_user),
) -> list[FieldMigrationResponse]:
    migrations = await service.get_migration_history(key)
    return [FieldMigrationResponse.model_validate(m, from_attributes=True) for m in migrations]
