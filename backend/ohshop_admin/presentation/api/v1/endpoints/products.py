"""Product endpoints: filtered listing, edits, soft delete and statistics."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ohshop_admin.application.schemas.common import PaginationResponse
from ohshop_admin.application.schemas.product import (
    DeletedFieldBackfillResponse,
    ProductListResponse,
    ProductResponse,
    ProductStatsResponse,
    ProductUpdate,
)
from ohshop_admin.application.services import ProductService
from ohshop_admin.application.services.product_service import ProductFilters
from ohshop_admin.domain.entities.pagination import PageRequest
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError
from ohshop_admin.infrastructure.dependencies import get_current_user, get_product_service

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=ProductListResponse)
async def list_products(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    status_filter: str | None = Query(None, alias="status", description='"ALL" disables the filter'),
    type: str | None = Query(None),
    active: bool | None = Query(None),
    seller_id: str | None = Query(None),
    category: str | None = Query(None),
    search: str | None = Query(None),
    price_min: float | None = Query(None, ge=0),
    price_max: float | None = Query(None, ge=0),
    service: ProductService = Depends(get_product_service),
) -> ProductListResponse:
    filters = ProductFilters(
        status=status_filter,
        type=type,
        active=active,
        seller_id=seller_id,
        category=category,
        search=search,
        price_min=price_min,
        price_max=price_max,
    )
    products, pagination = await service.list_products(
        filters, PageRequest(page=page, page_size=page_size)
    )
    return ProductListResponse(
        products=[ProductResponse.model_validate(p, from_attributes=True) for p in products],
        pagination=PaginationResponse.model_validate(pagination, from_attributes=True),
    )


@router.get("/stats", response_model=ProductStatsResponse)
async def product_stats(
    service: ProductService = Depends(get_product_service),
) -> ProductStatsResponse:
    return ProductStatsResponse(**asdict(await service.get_stats()))


@router.post("/maintenance/deleted-field", response_model=DeletedFieldBackfillResponse)
async def add_deleted_field(
    service: ProductService = Depends(get_product_service),
) -> DeletedFieldBackfillResponse:
    """Give every product without a ``deleted`` flag ``deleted: false``."""
    return DeletedFieldBackfillResponse(**asdict(await service.add_deleted_field()))


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    try:
        product = await service.get_product(product_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ProductResponse.model_validate(product, from_attributes=True)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    try:
        product = await service.update_product(product_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ProductResponse.model_validate(product, from_attributes=True)


@router.delete("/{product_id}", response_model=ProductResponse)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Soft delete; the flagged product is returned."""
    try:
        product = await service.soft_delete_product(product_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return ProductResponse.model_validate(product, from_attributes=True)
