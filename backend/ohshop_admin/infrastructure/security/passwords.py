"""Password hashing backed by passlib."""

from passlib.context import CryptContext

from ohshop_admin.application.interfaces import PasswordHasher


class PasslibPasswordHasher(PasswordHasher):
    """PBKDF2-SHA256 hashes; needs no native extension."""

    def __init__(self, schemes: list[str] | None = None):
        self._context = CryptContext(schemes=schemes or ["pbkdf2_sha256"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return self._context.verify(password, hashed)
        except ValueError:
            # Unrecognised hash format
            return False
