"""Application service (use case) for admin sign-up, login and password reset.

Credentials are kept apart from profiles: ``auth_credentials/{uid}`` holds
the email and password hash, ``iboard_users/{uid}`` holds the profile the
dashboard reads.
"""

import logging
import secrets
from datetime import timedelta

from ohshop_admin.application.interfaces import (
    AccessToken,
    DocumentStore,
    PasswordHasher,
    TokenIssuer,
)
from ohshop_admin.application.schemas.auth import RegisterRequest
from ohshop_admin.domain.entities.document import (
    FieldFilter,
    new_document_id,
    parse_timestamp,
    to_iso,
    utc_now,
)
from ohshop_admin.domain.entities.user import (
    DEFAULT_COUNTRY_CODE,
    DEFAULT_USER_TYPE,
    UserProfile,
    check_password,
)
from ohshop_admin.domain.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    ValidationError,
)

logger = logging.getLogger(__name__)

CREDENTIALS = "auth_credentials"
PROFILES = "iboard_users"
PASSWORD_RESETS = "password_resets"

RESET_REQUESTED_MESSAGE = "If this email is registered, you will receive a password reset link."
INVALID_LOGIN_MESSAGE = "Incorrect email or password"


def normalise_email(email: str) -> str:
    return email.strip().lower()


def require_strong_password(password: str, field: str = "password") -> None:
    check = check_password(password)
    if not check.is_valid:
        raise ValidationError({field: "Password must contain: " + ", ".join(check.missing)})


class AuthService:
    def __init__(
        self,
        store: DocumentStore,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
        reset_ttl_minutes: int = 60,
    ):
        self._store = store
        self._hasher = hasher
        self._tokens = tokens
        self._reset_ttl = timedelta(minutes=reset_ttl_minutes)

    async def _credentials_for(self, email: str):
        docs = await self._store.query(
            CREDENTIALS, [FieldFilter("email", "==", normalise_email(email))], limit=1
        )
        return docs[0] if docs else None

    # ── Registration ─────────────────────────────────────────────────

    async def register(self, data: RegisterRequest) -> UserProfile:
        email = normalise_email(data.email)
        if "@" not in email:
            raise ValidationError({"email": "Please enter a valid email address"})
        require_strong_password(data.password)
        if await self._credentials_for(email) is not None:
            raise DuplicateEntityError("User", "email", email)

        uid = new_document_id()
        now = to_iso(utc_now())
        first = data.first_name.strip()
        last = data.last_name.strip()
        display_name = (data.display_name or "").strip() or f"{first} {last}".strip()
        country_code = data.country_code or DEFAULT_COUNTRY_CODE
        phone_number = f"{country_code} {data.contact_number}" if data.contact_number else "-"

        async with self._store.transaction():
            await self._store.set(
                CREDENTIALS,
                uid,
                {
                    "email": email,
                    "password_hash": self._hasher.hash(data.password),
                    "created": now,
                },
            )
            doc = await self._store.set(
                PROFILES,
                uid,
                {
                    "uid": uid,
                    "id": uid,
                    "email": email,
                    "display_name": display_name,
                    "first_name": first,
                    "middle_name": data.middle_name.strip() or "-",
                    "last_name": last,
                    "gender": data.gender,
                    "phone_number": phone_number,
                    "country_code": country_code,
                    "location": data.location,
                    "photo_url": "",
                    "banner": "",
                    "active": True,
                    "onboarding": False,
                    "type": DEFAULT_USER_TYPE,
                    "role": ["user"],
                    "followers": 0,
                    "rating": 0.0,
                    "created": now,
                    "created_time": now,
                    "updated": now,
                    "active_date": now,
                },
            )
        logger.info("Registered admin user %s", uid)
        return UserProfile.from_document(doc)

    # ── Login ────────────────────────────────────────────────────────

    async def authenticate(self, email: str, password: str) -> str:
        """Return the uid owning these credentials."""
        credentials = await self._credentials_for(email)
        if credentials is None or not self._hasher.verify(
            password, credentials.data.get("password_hash", "")
        ):
            logger.info("Failed login for %s", normalise_email(email))
            raise AuthenticationError(INVALID_LOGIN_MESSAGE)
        return credentials.id

    async def login(self, email: str, password: str) -> AccessToken:
        uid = await self.authenticate(email, password)
        return self._tokens.issue(uid)

    def current_user_id(self, token: str) -> str:
        return self._tokens.read_subject(token)

    async def verify_password(self, uid: str, password: str) -> bool:
        credentials = await self._store.get(CREDENTIALS, uid)
        if credentials is None:
            return False
        return self._hasher.verify(password, credentials.data.get("password_hash", ""))

    async def set_password(self, uid: str, password: str) -> None:
        await self._store.update(
            CREDENTIALS,
            uid,
            {"password_hash": self._hasher.hash(password), "updated": to_iso(utc_now())},
        )

    # ── Password reset ───────────────────────────────────────────────

    async def request_password_reset(self, email: str) -> str:
        """Create a single-use reset token. The response never reveals it."""
        credentials = await self._credentials_for(email)
        if credentials is None:
            logger.info("Password reset requested for unknown email")
            return RESET_REQUESTED_MESSAGE

        token = secrets.token_urlsafe(32)
        await self._store.set(
            PASSWORD_RESETS,
            token,
            {
                "uid": credentials.id,
                "expires_at": to_iso(utc_now() + self._reset_ttl),
                "used": False,
                "created": to_iso(utc_now()),
            },
        )
        # No mail transport: the link is only logged.
        logger.info("Password reset token for %s: %s", credentials.id, token)
        return RESET_REQUESTED_MESSAGE

    async def confirm_password_reset(self, token: str, new_password: str) -> None:
        reset = await self._store.get(PASSWORD_RESETS, token)
        if reset is None or reset.data.get("used"):
            raise ValidationError({"token": "Invalid or already used reset token"})
        expires_at = parse_timestamp(reset.data.get("expires_at"))
        if expires_at is None or expires_at <= utc_now():
            raise ValidationError({"token": "Reset token has expired"})
        require_strong_password(new_password, "new_password")

        async with self._store.transaction():
            await self.set_password(reset.data["uid"], new_password)
            await self._store.update(
                PASSWORD_RESETS, token, {"used": True, "used_at": to_iso(utc_now())}
            )
        logger.info("Password reset completed for %s", reset.data["uid"])
