"""Application service (use case) for the signed-in admin's own profile."""

import logging

from ohshop_admin.application.interfaces import DocumentStore, FileStorage
from ohshop_admin.application.schemas.auth import ProfileUpdate
from ohshop_admin.application.services.auth_service import AuthService, require_strong_password
from ohshop_admin.application.services.image_upload import (
    millis_stamp,
    sanitise_filename,
    validate_image,
)
from ohshop_admin.domain.entities.document import utc_now_iso
from ohshop_admin.domain.entities.user import UserProfile
from ohshop_admin.domain.exceptions import EntityNotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

PROFILES = "iboard_users"


class ProfileService:
    def __init__(
        self,
        store: DocumentStore,
        auth: AuthService,
        file_storage: FileStorage | None = None,
        max_image_size_mb: int = 5,
    ):
        self._store = store
        self._auth = auth
        self._files = file_storage
        self._max_image_size_mb = max_image_size_mb

    async def get_profile(self, uid: str) -> UserProfile:
        doc = await self._store.get(PROFILES, uid)
        if doc is None:
            raise EntityNotFoundError("User profile", uid)
        return UserProfile.from_document(doc)

    async def update_profile(self, uid: str, data: ProfileUpdate) -> UserProfile:
        await self.get_profile(uid)
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return await self.get_profile(uid)
        changes["updated"] = utc_now_iso()
        doc = await self._store.update(PROFILES, uid, changes)
        logger.info("Profile %s updated: %s", uid, sorted(changes))
        return UserProfile.from_document(doc)

    async def change_password(self, uid: str, current_password: str, new_password: str) -> None:
        if not await self._auth.verify_password(uid, current_password):
            raise ValidationError({"current_password": "Current password is incorrect"})
        try:
            require_strong_password(new_password, "new_password")
        except ValidationError as e:
            raise ValidationError({"new_password": "New password is too weak"}) from e
        await self._auth.set_password(uid, new_password)
        logger.info("Password changed for %s", uid)

    async def upload_profile_image(
        self, uid: str, content: bytes, content_type: str | None, filename: str | None
    ) -> str:
        if self._files is None:
            raise StorageError("File storage is not configured")
        await self.get_profile(uid)
        image = validate_image(content, content_type, filename, self._max_image_size_mb)
        path = f"profile_images/{uid}/{millis_stamp()}_{sanitise_filename(image.filename)}"
        stored = await self._files.save(path, image.content, image.content_type)
        await self._store.update(PROFILES, uid, {"photo_url": stored.url, "updated": utc_now_iso()})
        logger.info("Profile image for %s stored at %s", uid, stored.path)
        return stored.url
