"""In-memory fakes of the application ports, shared by the unit tests."""

import copy
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

from ohshop_admin.application.interfaces import DocumentStore, FileStorage, StoredFile
from ohshop_admin.domain.entities.document import (
    Document,
    FieldFilter,
    OrderBy,
    apply_changes,
    matches_all,
    new_document_id,
    sort_documents,
    utc_now,
)
from ohshop_admin.domain.exceptions import DuplicateEntityError, EntityNotFoundError


class FakeDocumentStore(DocumentStore):
    """Dict-backed store. ``transaction()`` snapshots every collection and
    restores the snapshot when the block raises."""

    def __init__(self, seed: dict[str, dict[str, dict[str, Any]]] | None = None):
        self._collections: dict[str, dict[str, Document]] = {}
        self.fail_on_update: set[tuple[str, str]] = set()
        for collection, docs in (seed or {}).items():
            for doc_id, data in docs.items():
                self._put(collection, doc_id, data)

    def _put(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        doc = Document(collection=collection, id=doc_id, data=copy.deepcopy(data))
        self._collections.setdefault(collection, {})[doc_id] = doc
        return self._copy(doc)

    @staticmethod
    def _copy(doc: Document) -> Document:
        return Document(doc.collection, doc.id, copy.deepcopy(doc.data), doc.created_at, doc.updated_at)

    def data(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(doc.data) if doc else None

    async def get(self, collection: str, doc_id: str) -> Document | None:
        doc = self._collections.get(collection, {}).get(doc_id)
        return self._copy(doc) if doc else None

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        docs = [
            self._copy(d) for d in self._collections.get(collection, {}).values()
            if matches_all(d.data, filters)
        ]
        docs = sort_documents(docs, order_by)
        end = None if limit is None else offset + limit
        return docs[offset:end]

    async def count(self, collection: str, filters: Sequence[FieldFilter] = ()) -> int:
        return len(await self.query(collection, filters))

    async def add(
        self, collection: str, data: dict[str, Any], doc_id: str | None = None
    ) -> Document:
        doc_id = doc_id or new_document_id()
        if doc_id in self._collections.get(collection, {}):
            raise DuplicateEntityError("Document", "id", doc_id)
        return self._put(collection, doc_id, data)

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        return self._put(collection, doc_id, data)

    async def update(
        self, collection: str, doc_id: str, changes: dict[str, Any]
    ) -> Document:
        if (collection, doc_id) in self.fail_on_update:
            raise RuntimeError(f"write to {collection}/{doc_id} failed")
        doc = self._collections.get(collection, {}).get(doc_id)
        if doc is None:
            raise EntityNotFoundError(collection, doc_id)
        doc.data = apply_changes(copy.deepcopy(doc.data), changes)
        doc.updated_at = utc_now()
        return self._copy(doc)

    async def delete(self, collection: str, doc_id: str) -> bool:
        return self._collections.get(collection, {}).pop(doc_id, None) is not None

    async def list_collections(self) -> list[str]:
        return sorted(name for name, docs in self._collections.items() if docs)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        snapshot = copy.deepcopy(self._collections)
        try:
            yield
        except Exception:
            self._collections = snapshot
            raise


class FakeFileStorage(FileStorage):
    def __init__(self, url_prefix: str = "/uploads"):
        self.files: dict[str, bytes] = {}
        self._url_prefix = url_prefix

    async def save(self, path: str, content: bytes, content_type: str) -> StoredFile:
        self.files[path] = content
        return StoredFile(
            path=path, url=f"{self._url_prefix}/{path}", content_type=content_type, size=len(content)
        )

    async def delete(self, path_or_url: str) -> bool:
        path = path_or_url.removeprefix(self._url_prefix + "/")
        return self.files.pop(path, None) is not None


class RecordingSSE:
    """Stands in for SSEManager; keeps every broadcast for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def broadcast(self, event_type: str, data: dict[str, Any]) -> None:
        self.events.append((event_type, data))

    async def toast(self, title: str, description: str, variant: str = "default") -> None:
        self.events.append(("toast", {"title": title, "description": description, "variant": variant}))

    def of_type(self, event_type: str) -> list[dict[str, Any]]:
        return [data for kind, data in self.events if kind == event_type]
