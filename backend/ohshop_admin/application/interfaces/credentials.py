"""Abstract password hashing and access token interfaces (ports)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AccessToken:
    token: str
    expires_in: int


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        ...


class TokenIssuer(ABC):
    """Issues and reads signed bearer tokens identifying a user."""

    @abstractmethod
    def issue(self, subject: str) -> AccessToken:
        ...

    @abstractmethod
    def read_subject(self, token: str) -> str:
        """Return the token's subject. Raises ``AuthenticationError`` when the
        token is expired, tampered with or malformed."""
        ...
