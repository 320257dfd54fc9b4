"""Unit tests for custom product fields."""

import pytest

from fakes import FakeDocumentStore
from ohshop_admin.application.schemas.product import (
    FieldDefinitionCreate,
    FieldValidationRulesSchema,
)
from ohshop_admin.application.services import CustomFieldService
from ohshop_admin.application.services.custom_field_service import (
    convert_field_value,
    validate_field_value,
)
from ohshop_admin.domain.entities.custom_field import (
    CustomFieldDefinition,
    FieldDataType,
    FieldErrorType,
    FieldStatus,
    FieldValidationRules,
)
from ohshop_admin.domain.exceptions import DuplicateEntityError, EntityNotFoundError


def _definition(data_type: FieldDataType, **kwargs) -> CustomFieldDefinition:
    return CustomFieldDefinition(id="f1", key="size", name="Size", data_type=data_type, **kwargs)


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore(
        {
            "products": {
                "p1": {"name": "Billboard"},
                "p2": {"name": "Mug", "screen": "small"},
            }
        }
    )


@pytest.fixture
def service(store) -> CustomFieldService:
    return CustomFieldService(store)


def test_required_field_missing():
    errors = validate_field_value("", _definition(FieldDataType.STRING, required=True))
    assert [e.error_type for e in errors] == [FieldErrorType.REQUIRED_MISSING]
    assert errors[0].error_message == "Field 'Size' is required"


def test_optional_empty_value_is_fine():
    assert validate_field_value(None, _definition(FieldDataType.NUMBER)) == []


def test_string_rules():
    definition = _definition(
        FieldDataType.STRING,
        validation=FieldValidationRules(min=3, max=5, options=["large", "small"]),
    )
    messages = [e.error_message for e in validate_field_value("xl", definition)]
    assert messages == [
        "String too short (min: 3)",
        "Invalid option. Must be one of: large, small",
    ]
    assert validate_field_value("small", definition) == []


def test_string_pattern():
    definition = _definition(FieldDataType.STRING, validation=FieldValidationRules(pattern=r"^\d+$"))
    errors = validate_field_value("abc", definition)
    assert errors[0].error_message == r"String doesn't match pattern: ^\d+$"


def test_number_rules():
    definition = _definition(FieldDataType.NUMBER, validation=FieldValidationRules(min=1, max=10))
    assert validate_field_value("abc", definition)[0].error_message == "Invalid number"
    assert validate_field_value(11, definition)[0].error_message == "Number too large (max: 10)"
    assert validate_field_value("5", definition) == []


def test_array_object_and_date_types():
    assert validate_field_value("x", _definition(FieldDataType.ARRAY))[0].error_message == (
        "Value must be an array"
    )
    assert validate_field_value([], _definition(FieldDataType.OBJECT))[0].error_message == (
        "Value must be an object"
    )
    assert validate_field_value("someday", _definition(FieldDataType.DATE))[0].error_type is (
        FieldErrorType.TYPE_MISMATCH
    )


def test_convert_field_value():
    assert convert_field_value("42", FieldDataType.NUMBER) == 42
    assert convert_field_value("4.5", FieldDataType.NUMBER) == 4.5
    assert convert_field_value(None, FieldDataType.STRING) == ""
    assert convert_field_value("x", FieldDataType.ARRAY) == []
    assert convert_field_value("2024-05-01T00:00:00Z", FieldDataType.DATE) == (
        "2024-05-01T00:00:00+00:00"
    )


@pytest.mark.asyncio
async def test_duplicate_key_is_rejected(service: CustomFieldService):
    create = FieldDefinitionCreate(key="screen", name="Screen", data_type=FieldDataType.STRING)
    await service.save_definition(create)
    with pytest.raises(DuplicateEntityError):
        await service.save_definition(create)


@pytest.mark.asyncio
async def test_archived_key_can_be_reused(service: CustomFieldService):
    create = FieldDefinitionCreate(key="screen", name="Screen", data_type=FieldDataType.STRING)
    first = await service.save_definition(create)
    archived = await service.archive_definition(first.id)
    assert archived.status is FieldStatus.ARCHIVED

    second = await service.save_definition(create)
    assert (await service.get_definition_by_key("screen")).id == second.id
    assert len(await service.list_definitions()) == 1
    assert len(await service.list_definitions(include_archived=True)) == 2


@pytest.mark.asyncio
async def test_missing_definition(service: CustomFieldService):
    with pytest.raises(EntityNotFoundError):
        await service.get_definition_by_key("nope")


@pytest.mark.asyncio
async def test_add_field_to_products(service: CustomFieldService, store):
    definition = await service.save_definition(
        FieldDefinitionCreate(
            key="screen",
            name="Screen",
            data_type=FieldDataType.STRING,
            default_value="medium",
            validation=FieldValidationRulesSchema(max=10),
        )
    )
    result = await service.add_field_to_products(definition, ["p1", "p2", "ghost"], user_id="u1")

    assert (result.successful, result.skipped, result.failed) == (1, 1, 1)
    assert result.errors[0]["error"] == "Product not found"
    assert store.data("products", "p1")["screen"] == "medium"
    assert store.data("products", "p2")["screen"] == "small"

    history = await service.get_migration_history("screen")
    assert len(history) == 1
    assert history[0].result["successful"] == 1
    assert (await service.get_definition_by_key("screen")).usage_count == 1


@pytest.mark.asyncio
async def test_dry_run_writes_nothing(service: CustomFieldService, store):
    definition = _definition(FieldDataType.NUMBER, default_value=3)
    result = await service.add_field_to_products(definition, ["p1"], dry_run=True)
    assert result.successful == 1
    assert "size" not in store.data("products", "p1")
    assert await service.get_migration_history("size") == []


@pytest.mark.asyncio
async def test_invalid_value_fails_every_product(service: CustomFieldService, store):
    definition = _definition(FieldDataType.NUMBER)
    result = await service.add_field_to_products(definition, ["p1"], value="lots", dry_run=True)
    assert result.failed == 1
    assert result.errors[0]["error"] == "Invalid number"
