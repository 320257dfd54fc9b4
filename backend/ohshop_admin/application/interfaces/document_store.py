"""Abstract document store interface (port): the contract, not the implementation."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from typing import Any

from ohshop_admin.domain.entities.document import Document, FieldFilter, OrderBy


class DocumentStore(ABC):
    """Port for JSON documents grouped into named collections.

    Implemented in the infrastructure layer. Services address documents by
    ``(collection, id)`` and never see the storage engine.
    """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Document | None:
        """Retrieve a single document, or None if it does not exist."""
        ...

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        """Return the documents matching every filter, in the given order."""
        ...

    @abstractmethod
    async def count(self, collection: str, filters: Sequence[FieldFilter] = ()) -> int:
        """Count the documents matching every filter."""
        ...

    @abstractmethod
    async def add(
        self, collection: str, data: dict[str, Any], doc_id: str | None = None
    ) -> Document:
        """Create a document, generating its id when none is given."""
        ...

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        """Create the document or replace its data entirely."""
        ...

    @abstractmethod
    async def update(
        self, collection: str, doc_id: str, changes: dict[str, Any]
    ) -> Document:
        """Shallow-merge ``changes`` into an existing document.

        Values may be field transforms (``ArrayUnion``, ``Increment``...).
        Raises EntityNotFoundError when the document does not exist.
        """
        ...

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def list_collections(self) -> list[str]:
        """Names of every collection that holds at least one document."""
        ...

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Group writes so that none persist if the block raises."""
        ...
