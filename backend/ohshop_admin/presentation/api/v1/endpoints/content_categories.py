"""Content category endpoints."""

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from ohshop_admin.application.schemas.common import MessageResponse, PositionUpdateRequest
from ohshop_admin.application.schemas.content_category import (
    ContentCategoryCreate,
    ContentCategoryResponse,
    ContentCategoryUpdate,
)
from ohshop_admin.application.schemas.content_media import ContentMediaResponse
from ohshop_admin.application.services import ContentCategoryService
from ohshop_admin.domain.exceptions import (
    EntityNotFoundError,
    InvalidFileError,
    StorageError,
    ValidationError,
)
from ohshop_admin.infrastructure.dependencies import (
    get_content_category_service,
    get_current_user,
)

router = APIRouter(
    prefix="/content-categories",
    tags=["Content Categories"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[ContentCategoryResponse])
async def list_categories(
    type: str | None = Query(None),
    featured: bool | None = Query(None),
    active: bool | None = Query(None),
    search: str | None = Query(None, description="Match against name, description and type"),
    show_deleted: bool = Query(False),
    service: ContentCategoryService = Depends(get_content_category_service),
) -> list[ContentCategoryResponse]:
    categories = await service.list_categories(
        type=type,
        featured=featured,
        active=active,
        search_query=search,
        show_deleted=show_deleted,
    )
    return [ContentCategoryResponse.model_validate(c, from_attributes=True) for c in categories]


@router.get("/types", response_model=list[str])
async def content_types(
    service: ContentCategoryService = Depends(get_content_category_service),
) -> list[str]:
    return await service.get_content_types()


@router.put("/positions", response_model=MessageResponse)
async def update_positions(
    data: PositionUpdateRequest,
    service: ContentCategoryService = Depends(get_content_category_service),
) -> MessageResponse:
    try:
        await service.update_positions(data.updates)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message=f"Updated {len(data.updates)} positions")


@router.get("/{category_id}", response_model=ContentCategoryResponse)
async def get_category(
    category_id: str,
    service: ContentCategoryService = Depends(get_content_category_service),
) -> ContentCategoryResponse:
    try:
        category = await service.get_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ContentCategoryResponse.model_validate(category, from_attributes=True)


@router.get("/{category_id}/pinned", response_model=list[ContentMediaResponse])
async def pinned_media(
    category_id: str,
    service: ContentCategoryService = Depends(get_content_category_service),
) -> list[ContentMediaResponse]:
    """Media pinned to the category, in pin order."""
    try:
        media = await service.get_pinned_media(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [ContentMediaResponse.model_validate(m, from_attributes=True) for m in media]


@router.post("", response_model=ContentCategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: ContentCategoryCreate,
    service: ContentCategoryService = Depends(get_content_category_service),
) -> ContentCategoryResponse:
    try:
        category = await service.create_category(data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return ContentCategoryResponse.model_validate(category, from_attributes=True)


@router.put("/{category_id}", response_model=ContentCategoryResponse)
async def update_category(
    category_id: str,
    data: ContentCategoryUpdate,
    service: ContentCategoryService = Depends(get_content_category_service),
) -> ContentCategoryResponse:
    try:
        category = await service.update_category(category_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return ContentCategoryResponse.model_validate(category, from_attributes=True)


@router.post("/{category_id}/logo", response_model=ContentCategoryResponse)
async def upload_logo(
    category_id: str,
    file: UploadFile = File(...),
    service: ContentCategoryService = Depends(get_content_category_service),
) -> ContentCategoryResponse:
    content = await file.read()
    try:
        category = await service.upload_logo(category_id, content, file.content_type, file.filename)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (InvalidFileError, StorageError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ContentCategoryResponse.model_validate(category, from_attributes=True)


@router.post("/{category_id}/restore", response_model=ContentCategoryResponse)
async def restore_category(
    category_id: str,
    service: ContentCategoryService = Depends(get_content_category_service),
) -> ContentCategoryResponse:
    try:
        category = await service.restore_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ContentCategoryResponse.model_validate(category, from_attributes=True)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    permanent: bool = Query(False),
    service: ContentCategoryService = Depends(get_content_category_service),
) -> None:
    try:
        if permanent:
            await service.hard_delete_category(category_id)
        else:
            await service.soft_delete_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
