"""Collection discovery endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ohshop_admin.application.schemas.collections import (
    CollectionMetadataResponse,
    DiscoveryResultResponse,
    DiscoveryStatisticsResponse,
)
from ohshop_admin.application.schemas.common import MessageResponse
from ohshop_admin.application.services import CollectionDiscoveryService
from ohshop_admin.domain.entities.collection_metadata import CollectionPriority
from ohshop_admin.domain.exceptions import (
    DiscoveryFailedError,
    DiscoveryInProgressError,
    EntityNotFoundError,
)
from ohshop_admin.infrastructure.dependencies import get_current_user, get_discovery_service

router = APIRouter(
    prefix="/collections",
    tags=["Collections"],
    dependencies=[Depends(get_current_user)],
)


def _to_response(meta) -> CollectionMetadataResponse:
    return CollectionMetadataResponse.model_validate(meta, from_attributes=True)


@router.get("", response_model=DiscoveryResultResponse)
async def discover_collections(
    force_refresh: bool = Query(False),
    service: CollectionDiscoveryService = Depends(get_discovery_service),
) -> DiscoveryResultResponse:
    """Cached discovery result, or a fresh run when the cache is stale."""
    try:
        result = await service.discover_collections(force_refresh=force_refresh)
    except DiscoveryInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except DiscoveryFailedError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return DiscoveryResultResponse.model_validate(result, from_attributes=True)


@router.get("/statistics", response_model=DiscoveryStatisticsResponse)
async def discovery_statistics(
    service: CollectionDiscoveryService = Depends(get_discovery_service),
) -> DiscoveryStatisticsResponse:
    return DiscoveryStatisticsResponse.model_validate(service.get_statistics(), from_attributes=True)


@router.get("/category/{category}", response_model=list[CollectionMetadataResponse])
async def collections_by_category(
    category: str,
    service: CollectionDiscoveryService = Depends(get_discovery_service),
) -> list[CollectionMetadataResponse]:
    return [_to_response(c) for c in service.get_collections_by_category(category)]


@router.get("/priority/{priority}", response_model=list[CollectionMetadataResponse])
async def collections_by_priority(
    priority: CollectionPriority,
    service: CollectionDiscoveryService = Depends(get_discovery_service),
) -> list[CollectionMetadataResponse]:
    return [_to_response(c) for c in service.get_collections_by_priority(priority)]


@router.delete("/cache", response_model=MessageResponse)
async def clear_cache(
    service: CollectionDiscoveryService = Depends(get_discovery_service),
) -> MessageResponse:
    service.clear_cache()
    return MessageResponse(message="Discovery cache cleared")


@router.get("/{name}", response_model=CollectionMetadataResponse)
async def get_collection(
    name: str,
    service: CollectionDiscoveryService = Depends(get_discovery_service),
) -> CollectionMetadataResponse:
    try:
        return _to_response(service.get_collection(name))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{name}/refresh", response_model=CollectionMetadataResponse)
async def refresh_collection(
    name: str,
    service: CollectionDiscoveryService = Depends(get_discovery_service),
) -> CollectionMetadataResponse:
    try:
        meta = await service.refresh_collection(name)
    except DiscoveryFailedError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return _to_response(meta)
