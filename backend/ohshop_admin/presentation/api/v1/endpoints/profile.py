"""The signed-in admin's own profile."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from ohshop_admin.application.schemas.auth import (
    PasswordChangeRequest,
    ProfileImageResponse,
    ProfileResponse,
    ProfileUpdate,
)
from ohshop_admin.application.schemas.common import MessageResponse
from ohshop_admin.application.services import ProfileService
from ohshop_admin.domain.exceptions import (
    EntityNotFoundError,
    InvalidFileError,
    StorageError,
    ValidationError,
)
from ohshop_admin.infrastructure.dependencies import get_current_user, get_profile_service

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(
    user_id: str = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    try:
        profile = await service.get_profile(user_id)
    except EntityNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User profile not found")
    return ProfileResponse.model_validate(profile, from_attributes=True)


@router.put("", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdate,
    user_id: str = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    try:
        profile = await service.update_profile(user_id, data)
    except EntityNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User profile not found")
    return ProfileResponse.model_validate(profile, from_attributes=True)


@router.post("/password", response_model=MessageResponse)
async def change_password(
    data: PasswordChangeRequest,
    user_id: str = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    try:
        await service.change_password(user_id, data.current_password, data.new_password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return MessageResponse(message="Password updated successfully")


@router.post("/image", response_model=ProfileImageResponse)
async def upload_profile_image(
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileImageResponse:
    content = await file.read()
    try:
        url = await service.upload_profile_image(user_id, content, file.content_type, file.filename)
    except EntityNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User profile not found")
    except (InvalidFileError, StorageError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ProfileImageResponse(photo_url=url)
