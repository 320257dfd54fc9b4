"""Main category endpoints: CRUD, reordering, toggles and photo upload."""

from typing import Literal

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from ohshop_admin.application.schemas.common import (
    ImageUploadResponse,
    MessageResponse,
    NextPositionResponse,
    PositionUpdateRequest,
)
from ohshop_admin.application.schemas.main_category import (
    MainCategoryCreate,
    MainCategoryListResponse,
    MainCategoryResponse,
    MainCategoryUpdate,
)
from ohshop_admin.application.services import (
    CATEGORY_ACTIVE_MESSAGES,
    CATEGORY_FEATURE_MESSAGES,
    FlagToggle,
    MainCategoryService,
)
from ohshop_admin.domain.exceptions import (
    EntityNotFoundError,
    InvalidFileError,
    StorageError,
    ValidationError,
)
from ohshop_admin.infrastructure.dependencies import (
    get_current_user,
    get_flag_toggle,
    get_main_category_service,
)

router = APIRouter(
    prefix="/main-categories",
    tags=["Main Categories"],
    dependencies=[Depends(get_current_user)],
)


def _to_response(category) -> MainCategoryResponse:
    return MainCategoryResponse.model_validate(category, from_attributes=True)


@router.get("", response_model=MainCategoryListResponse)
async def list_categories(
    search: str | None = Query(None, description="Match against name and description"),
    featured: bool | None = Query(None),
    active: bool | None = Query(None),
    sort_by: str = Query("position"),
    sort_direction: Literal["asc", "desc"] = Query("asc"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    show_deleted: bool = Query(False),
    service: MainCategoryService = Depends(get_main_category_service),
) -> MainCategoryListResponse:
    try:
        categories, total = await service.list_categories(
            search_term=search,
            featured=featured,
            active=active,
            sort_by=sort_by,
            sort_direction=sort_direction,
            page=page,
            limit=limit,
            show_deleted=show_deleted,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return MainCategoryListResponse(categories=[_to_response(c) for c in categories], total=total)


@router.get("/next-position", response_model=NextPositionResponse)
async def next_position(
    service: MainCategoryService = Depends(get_main_category_service),
) -> NextPositionResponse:
    return NextPositionResponse(position=await service.next_position())


@router.post("/photo", response_model=ImageUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_photo(
    file: UploadFile = File(...),
    service: MainCategoryService = Depends(get_main_category_service),
) -> ImageUploadResponse:
    """Store a category photo; the returned URL goes into ``photo_url``."""
    content = await file.read()
    try:
        url = await service.upload_photo(content, file.content_type, file.filename)
    except (InvalidFileError, StorageError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ImageUploadResponse(url=url)


@router.put("/positions", response_model=MessageResponse)
async def update_positions(
    data: PositionUpdateRequest,
    service: MainCategoryService = Depends(get_main_category_service),
) -> MessageResponse:
    try:
        await service.update_positions(data.updates)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message=f"Updated {len(data.updates)} positions")


@router.get("/{category_id}", response_model=MainCategoryResponse)
async def get_category(
    category_id: str,
    service: MainCategoryService = Depends(get_main_category_service),
) -> MainCategoryResponse:
    try:
        category = await service.get_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(category)


@router.post("", response_model=MainCategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: MainCategoryCreate,
    service: MainCategoryService = Depends(get_main_category_service),
) -> MainCategoryResponse:
    try:
        category = await service.create_category(data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return _to_response(category)


@router.put("/{category_id}", response_model=MainCategoryResponse)
async def update_category(
    category_id: str,
    data: MainCategoryUpdate,
    service: MainCategoryService = Depends(get_main_category_service),
) -> MainCategoryResponse:
    try:
        category = await service.update_category(category_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return _to_response(category)


@router.post("/{category_id}/toggle-featured", response_model=MainCategoryResponse)
async def toggle_featured(
    category_id: str,
    service: MainCategoryService = Depends(get_main_category_service),
    toggle: FlagToggle = Depends(get_flag_toggle),
) -> MainCategoryResponse:
    try:
        category = await service.get_category(category_id)
        category = await toggle.toggle(
            category,
            "featured",
            lambda item: service.toggle_featured(item.id),
            CATEGORY_FEATURE_MESSAGES,
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(category)


@router.post("/{category_id}/toggle-active", response_model=MainCategoryResponse)
async def toggle_active(
    category_id: str,
    service: MainCategoryService = Depends(get_main_category_service),
    toggle: FlagToggle = Depends(get_flag_toggle),
) -> MainCategoryResponse:
    try:
        category = await service.get_category(category_id)
        category = await toggle.toggle(
            category,
            "active",
            lambda item: service.toggle_active(item.id),
            CATEGORY_ACTIVE_MESSAGES,
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(category)


@router.post("/{category_id}/clicks", response_model=MainCategoryResponse)
async def increment_clicks(
    category_id: str,
    service: MainCategoryService = Depends(get_main_category_service),
) -> MainCategoryResponse:
    try:
        category = await service.increment_clicks(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(category)


@router.post("/{category_id}/restore", response_model=MainCategoryResponse)
async def restore_category(
    category_id: str,
    service: MainCategoryService = Depends(get_main_category_service),
) -> MainCategoryResponse:
    try:
        category = await service.restore_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    permanent: bool = Query(False, description="Remove the document instead of flagging it"),
    service: MainCategoryService = Depends(get_main_category_service),
) -> None:
    try:
        if permanent:
            await service.hard_delete_category(category_id)
        else:
            await service.soft_delete_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
