"""Authentication endpoints: sign-up, token login and password reset."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from ohshop_admin.application.schemas.auth import (
    PasswordCheckRequest,
    PasswordCheckResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    ProfileResponse,
    RegisterRequest,
    TokenResponse,
)
from ohshop_admin.application.schemas.common import MessageResponse
from ohshop_admin.application.services import AuthService
from ohshop_admin.domain.entities.user import check_password
from ohshop_admin.domain.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    ValidationError,
)
from ohshop_admin.infrastructure.dependencies import get_auth_service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> ProfileResponse:
    try:
        profile = await service.register(data)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return ProfileResponse.model_validate(profile, from_attributes=True)


@router.post("/token", response_model=TokenResponse)
async def login(
    form: OAuth2PasswordRequestForm = Depends(),
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """OAuth2 password flow; ``username`` carries the email."""
    try:
        token = await service.login(form.username, form.password)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(access_token=token.token, expires_in=token.expires_in)


@router.post("/password-check", response_model=PasswordCheckResponse)
async def password_check(data: PasswordCheckRequest) -> PasswordCheckResponse:
    """Which password requirements are met, for the sign-up strength meter."""
    return PasswordCheckResponse.model_validate(check_password(data.password), from_attributes=True)


@router.post("/password-reset", response_model=MessageResponse)
async def request_password_reset(
    data: PasswordResetRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    return MessageResponse(message=await service.request_password_reset(data.email))


@router.post("/password-reset/confirm", response_model=MessageResponse)
async def confirm_password_reset(
    data: PasswordResetConfirm,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    try:
        await service.confirm_password_reset(data.token, data.new_password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return MessageResponse(message="Password has been reset")
