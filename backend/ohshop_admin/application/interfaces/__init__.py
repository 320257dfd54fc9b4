from .credentials import AccessToken, PasswordHasher, TokenIssuer
from .document_store import DocumentStore
from .file_storage import FileStorage, StoredFile

__all__ = [
    "AccessToken",
    "DocumentStore",
    "FileStorage",
    "PasswordHasher",
    "StoredFile",
    "TokenIssuer",
]
