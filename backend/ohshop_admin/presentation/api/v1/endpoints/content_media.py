"""Content media endpoints, including pinning and featuring."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from ohshop_admin.application.schemas.content_media import (
    ContentMediaCreate,
    ContentMediaResponse,
    ContentMediaUpdate,
    PinnedSyncResponse,
    ThumbnailUploadResponse,
)
from ohshop_admin.application.services import (
    FEATURE_MESSAGES,
    PIN_MESSAGES,
    ContentMediaService,
    FlagToggle,
)
from ohshop_admin.domain.exceptions import (
    EntityNotFoundError,
    InvalidFileError,
    StorageError,
    ValidationError,
)
from ohshop_admin.infrastructure.dependencies import (
    get_content_media_service,
    get_current_user,
    get_flag_toggle,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/content-media",
    tags=["Content Media"],
    dependencies=[Depends(get_current_user)],
)


def _to_response(media) -> ContentMediaResponse:
    return ContentMediaResponse.model_validate(media, from_attributes=True)


@router.get("", response_model=list[ContentMediaResponse])
async def list_media(
    category_id: str | None = Query(None),
    type: str | None = Query(None),
    featured: bool | None = Query(None),
    active: bool | None = Query(None),
    pinned: bool | None = Query(None),
    search: str | None = Query(None),
    show_deleted: bool = Query(False),
    service: ContentMediaService = Depends(get_content_media_service),
) -> list[ContentMediaResponse]:
    media = await service.list_media(
        category_id=category_id,
        type=type,
        show_deleted=show_deleted,
        featured=featured,
        active=active,
        pinned=pinned,
        search_query=search,
    )
    return [_to_response(m) for m in media]


@router.get("/types", response_model=list[str])
async def media_types(
    service: ContentMediaService = Depends(get_content_media_service),
) -> list[str]:
    return await service.get_media_types()


@router.post("/sync-pinned", response_model=PinnedSyncResponse)
async def sync_all_pinned(
    service: ContentMediaService = Depends(get_content_media_service),
) -> PinnedSyncResponse:
    """Rewrite every category's ``pinned_contents`` from the media flags."""
    updated, errors = await service.sync_all_pinned_contents()
    return PinnedSyncResponse(categories_updated=updated, errors=errors)


@router.post("/sync-pinned/{category_id}", response_model=list[str])
async def sync_category_pinned(
    category_id: str,
    service: ContentMediaService = Depends(get_content_media_service),
) -> list[str]:
    try:
        return await service.sync_pinned_contents(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/thumbnails",
    response_model=ThumbnailUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_thumbnail(
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user),
    service: ContentMediaService = Depends(get_content_media_service),
) -> ThumbnailUploadResponse:
    content = await file.read()
    try:
        stored = await service.upload_thumbnail(user_id, content, file.content_type, file.filename)
    except (InvalidFileError, StorageError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ThumbnailUploadResponse(url=stored.url, path=stored.path)


@router.get("/{media_id}", response_model=ContentMediaResponse)
async def get_media(
    media_id: str,
    service: ContentMediaService = Depends(get_content_media_service),
) -> ContentMediaResponse:
    try:
        media = await service.get_media(media_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(media)


@router.post("", response_model=ContentMediaResponse, status_code=status.HTTP_201_CREATED)
async def create_media(
    data: ContentMediaCreate,
    service: ContentMediaService = Depends(get_content_media_service),
) -> ContentMediaResponse:
    try:
        media = await service.create_media(data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return _to_response(media)


@router.put("/{media_id}", response_model=ContentMediaResponse)
async def update_media(
    media_id: str,
    data: ContentMediaUpdate,
    service: ContentMediaService = Depends(get_content_media_service),
) -> ContentMediaResponse:
    try:
        media = await service.update_media(media_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return _to_response(media)


# ── Pin / feature ────────────────────────────────────────────────────


@router.post("/{media_id}/pin", response_model=ContentMediaResponse)
async def toggle_pin(
    media_id: str,
    service: ContentMediaService = Depends(get_content_media_service),
    toggle: FlagToggle = Depends(get_flag_toggle),
) -> ContentMediaResponse:
    """Flip ``pinned`` and keep the category's pinned list in step."""
    try:
        media = await service.get_media(media_id)
        updated = await toggle.toggle(
            media, "pinned", lambda item: service.toggle_pin(item.id), PIN_MESSAGES
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(updated)


@router.post("/{media_id}/feature", response_model=ContentMediaResponse)
async def toggle_feature(
    media_id: str,
    service: ContentMediaService = Depends(get_content_media_service),
    toggle: FlagToggle = Depends(get_flag_toggle),
) -> ContentMediaResponse:
    try:
        media = await service.get_media(media_id)
        updated = await toggle.toggle(
            media, "featured", lambda item: service.toggle_feature(item.id), FEATURE_MESSAGES
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(updated)


@router.post("/{media_id}/unpin", response_model=ContentMediaResponse)
async def unpin(
    media_id: str,
    service: ContentMediaService = Depends(get_content_media_service),
) -> ContentMediaResponse:
    try:
        media = await service.unpin(media_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(media)


@router.post("/{media_id}/restore", response_model=ContentMediaResponse)
async def restore_media(
    media_id: str,
    service: ContentMediaService = Depends(get_content_media_service),
) -> ContentMediaResponse:
    try:
        media = await service.restore_media(media_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(media)


@router.delete("/{media_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_media(
    media_id: str,
    permanent: bool = Query(False),
    service: ContentMediaService = Depends(get_content_media_service),
) -> None:
    try:
        if permanent:
            await service.hard_delete_media(media_id)
        else:
            await service.soft_delete_media(media_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
