"""SQLAlchemy ORM model for collection documents."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, JSON, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from ohshop_admin.infrastructure.database.base import Base


class DocumentModel(Base):
    """ORM model: maps to the 'documents' table.

    Every collection shares the table; ``data`` is JSONB on PostgreSQL and
    plain JSON elsewhere.
    """

    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(100), primary_key=True)
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[dict] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_documents_collection_updated", "collection", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<DocumentModel(collection='{self.collection}', id='{self.id}')>"
