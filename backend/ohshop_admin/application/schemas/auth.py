"""Pydantic DTOs for registration, login, password reset and profiles."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320, examples=["admin@ohshop.ph"])
    password: str = Field(..., min_length=1)
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    display_name: str | None = None
    gender: str = ""
    country_code: str | None = None
    contact_number: str | None = None
    location: Any = ""


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class PasswordCheckRequest(BaseModel):
    password: str


class PasswordCheckResponse(BaseModel):
    met: dict[str, bool]
    strength: float
    is_valid: bool
    missing: list[str]

    model_config = {"from_attributes": True}


class PasswordResetRequest(BaseModel):
    email: str = Field(..., min_length=3)


class PasswordResetConfirm(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class PasswordChangeRequest(BaseModel):
    current_password: str
    new_password: str


class ProfileUpdate(BaseModel):
    """Editable profile fields; all optional."""

    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    phone_number: str | None = None
    country_code: str | None = None
    gender: str | None = None
    location: Any = None


class ProfileResponse(BaseModel):
    uid: str
    email: str
    display_name: str
    first_name: str
    middle_name: str
    last_name: str
    gender: str
    phone_number: str
    country_code: str
    photo_url: str
    banner: str
    location: Any
    active: bool
    onboarding: bool
    type: str
    role: list[str]
    company_id: str | None
    license_key: str | None
    created: datetime | None
    updated: datetime | None

    model_config = {"from_attributes": True}


class ProfileImageResponse(BaseModel):
    photo_url: str
