"""APV video endpoints: CRUD and per-category pinning."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ohshop_admin.application.schemas.apv import (
    ApvVideoCreate,
    ApvVideoResponse,
    ApvVideoUpdate,
    PinLatestResponse,
)
from ohshop_admin.application.services import ApvService
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError
from ohshop_admin.infrastructure.dependencies import get_apv_service, get_current_user

router = APIRouter(
    prefix="/apv",
    tags=["APV Videos"],
    dependencies=[Depends(get_current_user)],
)


def _to_response(video) -> ApvVideoResponse:
    return ApvVideoResponse.model_validate(video, from_attributes=True)


@router.get("", response_model=list[ApvVideoResponse])
async def list_videos(
    category_id: str = Query(...),
    service: ApvService = Depends(get_apv_service),
) -> list[ApvVideoResponse]:
    return [_to_response(v) for v in await service.list_by_category(category_id)]


@router.get("/pinned", response_model=list[ApvVideoResponse])
async def pinned_videos(
    category_id: str | None = Query(None),
    service: ApvService = Depends(get_apv_service),
) -> list[ApvVideoResponse]:
    return [_to_response(v) for v in await service.get_pinned_videos(category_id)]


@router.post("/pin-latest", response_model=PinLatestResponse)
async def pin_latest(
    category_id: str | None = Query(None),
    service: ApvService = Depends(get_apv_service),
) -> PinLatestResponse:
    """Pin the newest active video, optionally within one category."""
    return PinLatestResponse(pinned_id=await service.pin_latest_video(category_id))


@router.get("/{video_id}", response_model=ApvVideoResponse)
async def get_video(
    video_id: str,
    service: ApvService = Depends(get_apv_service),
) -> ApvVideoResponse:
    try:
        video = await service.get_video(video_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(video)


@router.post("", response_model=ApvVideoResponse, status_code=status.HTTP_201_CREATED)
async def create_video(
    data: ApvVideoCreate,
    service: ApvService = Depends(get_apv_service),
) -> ApvVideoResponse:
    try:
        video = await service.create_video(data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return _to_response(video)


@router.put("/{video_id}", response_model=ApvVideoResponse)
async def update_video(
    video_id: str,
    data: ApvVideoUpdate,
    service: ApvService = Depends(get_apv_service),
) -> ApvVideoResponse:
    try:
        video = await service.update_video(video_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return _to_response(video)


@router.delete("/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_video(
    video_id: str,
    service: ApvService = Depends(get_apv_service),
) -> None:
    try:
        await service.delete_video(video_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{video_id}/pin", response_model=ApvVideoResponse)
async def pin_video(
    video_id: str,
    unpin_others: bool = Query(True),
    service: ApvService = Depends(get_apv_service),
) -> ApvVideoResponse:
    try:
        video = await service.pin_video(video_id, unpin_others=unpin_others)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(video)


@router.post("/{video_id}/unpin", response_model=ApvVideoResponse)
async def unpin_video(
    video_id: str,
    service: ApvService = Depends(get_apv_service),
) -> ApvVideoResponse:
    try:
        video = await service.unpin_video(video_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(video)
