"""News ticker endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ohshop_admin.application.schemas.newsticker import (
    NewstickerCreate,
    NewstickerResponse,
    NewstickerUpdate,
)
from ohshop_admin.application.services import NewstickerService
from ohshop_admin.domain.entities.newsticker import NewstickerStatus
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError
from ohshop_admin.infrastructure.dependencies import get_current_user, get_newsticker_service

router = APIRouter(prefix="/newstickers", tags=["News Tickers"])


@router.get("", response_model=list[NewstickerResponse])
async def list_newstickers(
    status_filter: NewstickerStatus | None = Query(None, alias="status"),
    show_deleted: bool = Query(False),
    search: str | None = Query(None),
    service: NewstickerService = Depends(get_newsticker_service),
    _: str = Depends(get_current_user),
) -> list[NewstickerResponse]:
    tickers = await service.list_newstickers(
        status=status_filter, show_deleted=show_deleted, search_query=search
    )
    return [NewstickerResponse.model_validate(t, from_attributes=True) for t in tickers]


@router.get("/active", response_model=list[NewstickerResponse])
async def active_newstickers(
    service: NewstickerService = Depends(get_newsticker_service),
) -> list[NewstickerResponse]:
    """Published tickers whose display window includes now."""
    tickers = await service.get_active_newstickers()
    return [NewstickerResponse.model_validate(t, from_attributes=True) for t in tickers]


@router.get("/{newsticker_id}", response_model=NewstickerResponse)
async def get_newsticker(
    newsticker_id: str,
    service: NewstickerService = Depends(get_newsticker_service),
    _: str = Depends(get_current_user),
) -> NewstickerResponse:
    try:
        ticker = await service.get_newsticker(newsticker_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return NewstickerResponse.model_validate(ticker, from_attributes=True)


@router.post("", response_model=NewstickerResponse, status_code=status.HTTP_201_CREATED)
async def create_newsticker(
    data: NewstickerCreate,
    service: NewstickerService = Depends(get_newsticker_service),
    user_id: str = Depends(get_current_user),
) -> NewstickerResponse:
    try:
        ticker = await service.create_newsticker(data, user_id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return NewstickerResponse.model_validate(ticker, from_attributes=True)


@router.put("/{newsticker_id}", response_model=NewstickerResponse)
async def update_newsticker(
    newsticker_id: str,
    data: NewstickerUpdate,
    service: NewstickerService = Depends(get_newsticker_service),
    _: str = Depends(get_current_user),
) -> NewstickerResponse:
    try:
        ticker = await service.update_newsticker(newsticker_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return NewstickerResponse.model_validate(ticker, from_attributes=True)


@router.post("/{newsticker_id}/restore", response_model=NewstickerResponse)
async def restore_newsticker(
    newsticker_id: str,
    service: NewstickerService = Depends(get_newsticker_service),
    _: str = Depends(get_current_user),
) -> NewstickerResponse:
    try:
        ticker = await service.restore_newsticker(newsticker_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return NewstickerResponse.model_validate(ticker, from_attributes=True)


@router.delete("/{newsticker_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_newsticker(
    newsticker_id: str,
    permanent: bool = Query(False),
    service: NewstickerService = Depends(get_newsticker_service),
    _: str = Depends(get_current_user),
) -> None:
    try:
        if permanent:
            await service.hard_delete_newsticker(newsticker_id)
        else:
            await service.soft_delete_newsticker(newsticker_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
