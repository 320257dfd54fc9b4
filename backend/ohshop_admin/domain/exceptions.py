"""Domain-specific exceptions, framework-independent."""

from typing import Any


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ValidationError(Exception):
    """Raised when submitted data breaks a business rule.

    ``errors`` maps field names to human readable messages so the dashboard
    can show them next to the offending input.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(errors.values()))


class AuthenticationError(Exception):
    """Raised when credentials or tokens are rejected."""


class InvalidFileError(Exception):
    """Raised when an uploaded file is not an acceptable image."""


class DiscoveryInProgressError(Exception):
    """Raised when a collection discovery run is already executing."""

    def __init__(self) -> None:
        super().__init__("Collection discovery already in progress")


class StorageError(Exception):
    """Raised when a stored file cannot be written or removed."""


class MigrationAbortedError(Exception):
    """Raised when a backfill run stops part way.

    ``result`` holds the counters reached before the failure; the run's
    history entry has already been closed as failed.
    """

    def __init__(self, result: Any, cause: Exception):
        self.result = result
        super().__init__(f"{result.target} backfill aborted: {cause}")


class DiscoveryFailedError(Exception):
    """Raised when a whole collection discovery run fails."""
