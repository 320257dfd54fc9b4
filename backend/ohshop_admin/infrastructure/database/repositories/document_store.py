"""Concrete DocumentStore implementation backed by SQLAlchemy."""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, func, select, type_coerce
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.domain.entities.document import (
    Document,
    FieldFilter,
    OrderBy,
    apply_changes,
    matches_all,
    new_document_id,
    parse_timestamp,
    sort_documents,
    utc_now,
)
from ohshop_admin.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from ohshop_admin.infrastructure.database.models import DocumentModel

logger = logging.getLogger(__name__)


@dataclass
class _UndoEntry:
    """State of one document before a write made inside ``transaction()``."""

    collection: str
    doc_id: str
    data: dict[str, Any] | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SQLAlchemyDocumentStore(DocumentStore):
    """Implements the DocumentStore port using SQLAlchemy async sessions.

    Equality filters are pushed down to the database (JSONB containment on
    PostgreSQL, ``json_extract`` elsewhere). Every filter is then re-checked
    in Python, which is also where ordering and paging happen, so results
    are identical across dialects.

    ``transaction()`` keeps an undo log of the documents it touches and
    restores them if the block raises. The restore runs inside the request's
    database transaction, so no SAVEPOINT support is needed.
    """

    def __init__(self, session: AsyncSession):
        self._session = session
        self._undo_log: list[_UndoEntry] | None = None

    def _to_entity(self, model: DocumentModel) -> Document:
        """Map ORM model → domain document."""
        return Document(
            collection=model.collection,
            id=model.id,
            data=dict(model.data or {}),
            created_at=parse_timestamp(model.created_at) or utc_now(),
            updated_at=parse_timestamp(model.updated_at) or utc_now(),
        )

    @property
    def _dialect(self) -> str:
        return self._session.bind.dialect.name

    def _pushdown(self, flt: FieldFilter) -> ColumnElement[bool] | None:
        if flt.op != "==" or flt.value is None or isinstance(flt.value, (list, tuple, dict)):
            return None
        if self._dialect == "postgresql":
            return type_coerce(DocumentModel.data, JSONB).contains({flt.field: flt.value})
        return func.json_extract(DocumentModel.data, f'$."{flt.field}"') == flt.value

    async def _load(self, collection: str, filters: Sequence[FieldFilter]) -> list[Document]:
        stmt = select(DocumentModel).where(DocumentModel.collection == collection)
        for flt in filters:
            clause = self._pushdown(flt)
            if clause is not None:
                stmt = stmt.where(clause)
        result = await self._session.execute(stmt)
        docs = [self._to_entity(row) for row in result.scalars().all()]
        return [doc for doc in docs if matches_all(doc.data, filters)]

    async def _get_model(self, collection: str, doc_id: str) -> DocumentModel | None:
        return await self._session.get(DocumentModel, (collection, doc_id))

    def _remember(self, collection: str, doc_id: str, model: DocumentModel | None) -> None:
        if self._undo_log is None:
            return
        if model is None:
            self._undo_log.append(_UndoEntry(collection, doc_id, None))
        else:
            self._undo_log.append(
                _UndoEntry(
                    collection,
                    doc_id,
                    dict(model.data or {}),
                    model.created_at,
                    model.updated_at,
                )
            )

    # ── Reads ────────────────────────────────────────────────────────

    async def get(self, collection: str, doc_id: str) -> Document | None:
        model = await self._get_model(collection, doc_id)
        return self._to_entity(model) if model else None

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Document]:
        docs = sort_documents(await self._load(collection, filters), order_by)
        end = None if limit is None else offset + limit
        return docs[offset:end]

    async def count(self, collection: str, filters: Sequence[FieldFilter] = ()) -> int:
        if not filters:
            result = await self._session.execute(
                select(func.count())
                .select_from(DocumentModel)
                .where(DocumentModel.collection == collection)
            )
            return int(result.scalar_one())
        return len(await self._load(collection, filters))

    async def list_collections(self) -> list[str]:
        result = await self._session.execute(
            select(DocumentModel.collection).distinct().order_by(DocumentModel.collection)
        )
        return list(result.scalars().all())

    # ── Writes ───────────────────────────────────────────────────────

    async def add(
        self, collection: str, data: dict[str, Any], doc_id: str | None = None
    ) -> Document:
        doc_id = doc_id or new_document_id()
        if await self._get_model(collection, doc_id) is not None:
            raise DuplicateEntityError("Document", "id", doc_id)
        now = utc_now()
        model = DocumentModel(
            collection=collection, id=doc_id, data=dict(data), created_at=now, updated_at=now
        )
        self._remember(collection, doc_id, None)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        model = await self._get_model(collection, doc_id)
        self._remember(collection, doc_id, model)
        now = utc_now()
        if model is None:
            model = DocumentModel(
                collection=collection, id=doc_id, data=dict(data), created_at=now, updated_at=now
            )
            self._session.add(model)
        else:
            model.data = dict(data)
            model.updated_at = now
        await self._session.flush()
        return self._to_entity(model)

    async def update(
        self, collection: str, doc_id: str, changes: dict[str, Any]
    ) -> Document:
        model = await self._get_model(collection, doc_id)
        if model is None:
            raise EntityNotFoundError(collection, doc_id)
        self._remember(collection, doc_id, model)
        model.data = apply_changes(model.data or {}, changes)
        model.updated_at = utc_now()
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, collection: str, doc_id: str) -> bool:
        model = await self._get_model(collection, doc_id)
        if model is None:
            return False
        self._remember(collection, doc_id, model)
        await self._session.delete(model)
        await self._session.flush()
        return True

    # ── Transactions ─────────────────────────────────────────────────

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        outermost = self._undo_log is None
        if outermost:
            self._undo_log = []
        mark = len(self._undo_log)
        try:
            yield
            await self._session.flush()
        except Exception:
            await self._undo(mark)
            raise
        finally:
            if outermost:
                self._undo_log = None

    async def _undo(self, mark: int) -> None:
        entries = self._undo_log[mark:]
        del self._undo_log[mark:]
        try:
            for entry in reversed(entries):
                model = await self._get_model(entry.collection, entry.doc_id)
                if entry.data is None:
                    if model is not None:
                        await self._session.delete(model)
                elif model is None:
                    self._session.add(
                        DocumentModel(
                            collection=entry.collection,
                            id=entry.doc_id,
                            data=entry.data,
                            created_at=entry.created_at,
                            updated_at=entry.updated_at,
                        )
                    )
                else:
                    model.data = entry.data
                    model.updated_at = entry.updated_at
                await self._session.flush()
        except Exception:
            logger.exception("Failed to undo transaction writes, rolling back session")
            await self._session.rollback()
