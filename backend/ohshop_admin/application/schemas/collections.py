"""Pydantic DTOs for collection discovery."""

from datetime import datetime

from pydantic import BaseModel, Field

from ohshop_admin.domain.entities.collection_metadata import CollectionPriority


class CollectionPermissionsSchema(BaseModel):
    read: bool
    write: bool
    delete: bool

    model_config = {"from_attributes": True}


class CollectionSchemaSchema(BaseModel):
    fields: list[str]
    types: dict[str, str]

    model_config = {"from_attributes": True}


class CollectionMetadataResponse(BaseModel):
    name: str
    path: str
    document_count: int
    last_accessed: datetime
    is_accessible: bool
    has_subcollections: bool
    estimated_size: str
    category: str
    priority: CollectionPriority
    permissions: CollectionPermissionsSchema
    schema_: CollectionSchemaSchema | None = Field(
        None, validation_alias="schema", serialization_alias="schema"
    )

    model_config = {"from_attributes": True}


class DiscoveryErrorSchema(BaseModel):
    code: str
    message: str
    severity: str
    timestamp: datetime
    collection: str | None

    model_config = {"from_attributes": True}


class DiscoveryResultResponse(BaseModel):
    collections: list[CollectionMetadataResponse]
    total_count: int
    accessible_count: int
    last_updated: datetime
    discovery_time_ms: int
    errors: list[DiscoveryErrorSchema]
    warnings: list[str]
    cache_hit: bool

    model_config = {"from_attributes": True}


class DiscoveryStatisticsResponse(BaseModel):
    total_collections: int
    accessible_collections: int
    category_counts: dict[str, int]
    priority_counts: dict[str, int]
    last_discovery: datetime | None
    cache_size: int
    last_error: str | None

    model_config = {"from_attributes": True}
