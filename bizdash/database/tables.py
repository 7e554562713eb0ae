# ==============================================================================
# DOCUMENT TABLES - SQLAlchemy Storage for the SQLite Document Store
# ==============================================================================
# Schemaless documents kept as JSON rows, plus a key table that enforces
# per-collection unique fields
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict
from uuid import uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from bizdash.utils.helpers import utc_now


class SQLBase(DeclarativeBase):
    """Base class for the document store tables."""


class DocumentRecord(SQLBase):
    """
    One document of one collection.

    The document body lives in ``data``; identity and timestamps are
    columns so they can be sorted and filtered without JSON extraction.

    Example:
        >>> DocumentRecord(collection="clients", data={"name": "John Doe"})
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    collection: Mapped[str] = mapped_column(String(64), nullable=False)
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )

    __table_args__ = (
        Index("ix_documents_collection_created", "collection", "created_at"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Merge the JSON body with id and timestamps."""
        document = dict(self.data or {})
        document["id"] = self.id
        document["created_at"] = self.created_at
        document["updated_at"] = self.updated_at
        return document

    def __repr__(self) -> str:
        return f"<DocumentRecord(collection={self.collection}, id={self.id})>"


class DocumentKey(SQLBase):
    """Unique field value claimed by a document."""

    __tablename__ = "document_keys"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    collection: Mapped[str] = mapped_column(String(64), nullable=False)
    field: Mapped[str] = mapped_column(String(64), nullable=False)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    document_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("collection", "field", "value", name="uq_document_keys"),
    )
