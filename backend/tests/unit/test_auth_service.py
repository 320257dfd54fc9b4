"""Unit tests for sign-up, login, password reset and the admin profile."""

import io
from datetime import timedelta

import pytest
from PIL import Image

from fakes import FakeDocumentStore, FakeFileStorage
from ohshop_admin.application.schemas.auth import ProfileUpdate, RegisterRequest
from ohshop_admin.application.services import AuthService, ProfileService
from ohshop_admin.application.services.auth_service import RESET_REQUESTED_MESSAGE
from ohshop_admin.domain.entities.document import to_iso, utc_now
from ohshop_admin.domain.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)
from ohshop_admin.infrastructure.security import JWTTokenIssuer, PasslibPasswordHasher

PASSWORD = "Str0ng!pass"


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def auth(store) -> AuthService:
    return AuthService(store, PasslibPasswordHasher(), JWTTokenIssuer("test-secret"))


@pytest.fixture
def profiles(store, auth) -> ProfileService:
    return ProfileService(store, auth, FakeFileStorage())


async def _register(auth: AuthService, **overrides):
    data = {"email": " Admin@OhShop.ph ", "password": PASSWORD, "first_name": "Ana",
            "last_name": "Cruz", **overrides}
    return await auth.register(RegisterRequest(**data))


@pytest.mark.asyncio
async def test_register_creates_credentials_and_profile(auth: AuthService, store):
    profile = await _register(auth, contact_number="9171234567")

    assert profile.email == "admin@ohshop.ph"
    assert profile.display_name == "Ana Cruz"
    assert profile.middle_name == "-"
    assert profile.phone_number == "+63 9171234567"
    assert profile.type == "OHADMIN"
    credentials = store.data("auth_credentials", profile.uid)
    assert credentials["email"] == "admin@ohshop.ph"
    assert credentials["password_hash"] != PASSWORD


@pytest.mark.asyncio
async def test_register_rejects_duplicates_and_weak_passwords(auth: AuthService):
    await _register(auth)
    with pytest.raises(DuplicateEntityError):
        await _register(auth, email="admin@ohshop.ph")
    with pytest.raises(ValidationError) as excinfo:
        await _register(auth, email="other@ohshop.ph", password="weak")
    assert excinfo.value.errors["password"].startswith("Password must contain: ")
    with pytest.raises(ValidationError):
        await _register(auth, email="no-at-sign")


@pytest.mark.asyncio
async def test_login_issues_token_for_registered_user(auth: AuthService):
    profile = await _register(auth)
    token = await auth.login("ADMIN@ohshop.ph", PASSWORD)
    assert auth.current_user_id(token.token) == profile.uid

    with pytest.raises(AuthenticationError, match="Incorrect email or password"):
        await auth.login("admin@ohshop.ph", "Wr0ng!pass")
    with pytest.raises(AuthenticationError):
        await auth.login("nobody@ohshop.ph", PASSWORD)


@pytest.mark.asyncio
async def test_password_reset_flow(auth: AuthService, store):
    profile = await _register(auth)
    assert await auth.request_password_reset("nobody@ohshop.ph") == RESET_REQUESTED_MESSAGE
    assert await store.count("password_resets") == 0

    assert await auth.request_password_reset("admin@ohshop.ph") == RESET_REQUESTED_MESSAGE
    [reset] = await store.query("password_resets")
    assert reset.data["uid"] == profile.uid

    with pytest.raises(ValidationError):
        await auth.confirm_password_reset(reset.id, "weak")
    await auth.confirm_password_reset(reset.id, "N3w!password")
    assert await auth.verify_password(profile.uid, "N3w!password")

    with pytest.raises(ValidationError) as excinfo:
        await auth.confirm_password_reset(reset.id, "An0ther!pass")
    assert excinfo.value.errors == {"token": "Invalid or already used reset token"}


@pytest.mark.asyncio
async def test_expired_reset_token(auth: AuthService, store):
    profile = await _register(auth)
    await store.set(
        "password_resets",
        "tok",
        {"uid": profile.uid, "used": False, "expires_at": to_iso(utc_now() - timedelta(minutes=1))},
    )
    with pytest.raises(ValidationError) as excinfo:
        await auth.confirm_password_reset("tok", "N3w!password")
    assert excinfo.value.errors == {"token": "Reset token has expired"}


@pytest.mark.asyncio
async def test_profile_update_and_password_change(auth: AuthService, profiles: ProfileService):
    profile = await _register(auth)

    updated = await profiles.update_profile(profile.uid, ProfileUpdate(display_name="Boss"))
    assert updated.display_name == "Boss"
    assert updated.first_name == "Ana"

    with pytest.raises(ValidationError) as excinfo:
        await profiles.change_password(profile.uid, "Wr0ng!pass", "N3w!password")
    assert excinfo.value.errors == {"current_password": "Current password is incorrect"}
    with pytest.raises(ValidationError) as excinfo:
        await profiles.change_password(profile.uid, PASSWORD, "weak")
    assert excinfo.value.errors == {"new_password": "New password is too weak"}

    await profiles.change_password(profile.uid, PASSWORD, "N3w!password")
    assert await auth.verify_password(profile.uid, "N3w!password")


@pytest.mark.asyncio
async def test_profile_image_upload(auth: AuthService, profiles: ProfileService):
    profile = await _register(auth)
    buffer = io.BytesIO()
    Image.new("RGB", (2, 2)).save(buffer, format="WEBP")

    url = await profiles.upload_profile_image(profile.uid, buffer.getvalue(), "image/webp", "me.webp")
    assert url.startswith(f"/uploads/profile_images/{profile.uid}/")
    assert (await profiles.get_profile(profile.uid)).photo_url == url


@pytest.mark.asyncio
async def test_missing_profile(profiles: ProfileService):
    with pytest.raises(EntityNotFoundError):
        await profiles.get_profile("ghost")
