# ==============================================================================
# SQLITE ADAPTER - SQLAlchemy Async Document Store with aiosqlite
# ==============================================================================
# Lightweight document store for development and testing
# Same contract as the MongoDB adapter over a single JSON documents table
# ==============================================================================

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Optional

from sqlalchemy import and_, delete, func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bizdash.core.constants import DatabaseConstants
from bizdash.core.exceptions import AlreadyExistsError, DatabaseError
from bizdash.core.settings import settings
from bizdash.database.adapters.base_adapter import BaseDatabaseAdapter, Document
from bizdash.database.tables import DocumentKey, DocumentRecord, SQLBase
from bizdash.utils.helpers import utc_now

logger = logging.getLogger(__name__)

_COLUMN_FIELDS = ("id", "created_at", "updated_at")


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _json_dumps(value: Any) -> str:
    return json.dumps(value, default=_json_default)


class SQLiteAdapter(BaseDatabaseAdapter):
    """
    Document store adapter using SQLAlchemy async with aiosqlite.

    Every collection shares the ``documents`` table; the body of a
    document is a JSON column and equality filters and sorting are
    evaluated with SQLite's ``json_extract``. Unique fields are claimed
    in the ``document_keys`` table.

    Features:
        - Async SQLite operations using aiosqlite
        - Automatic table creation on connect
        - Same contract as MongoDBAdapter
        - File-based or in-memory database support

    Attributes:
        _database_url: SQLite connection string
        _engine: SQLAlchemy async engine
        _session_factory: Session factory for creating sessions

    Example:
        >>> adapter = SQLiteAdapter("sqlite:///./dev.db")
        >>> await adapter.connect()  # Creates tables automatically
        >>> client = await adapter.create("clients", {"name": "John Doe"})
    """

    def __init__(self, database_url: Optional[str] = None) -> None:
        """
        Initialize SQLite adapter.

        Args:
            database_url: SQLite connection URL (defaults to settings)
        """
        # Ensure async driver is used
        url = database_url or settings.SQLITE_URL
        if "sqlite://" in url and "aiosqlite" not in url:
            url = url.replace("sqlite://", "sqlite+aiosqlite://")

        self._database_url = url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """
        Initialize database engine and create tables.
        """
        try:
            self._engine = create_async_engine(
                self._database_url,
                echo=False,
                json_serializer=_json_dumps,
                # SQLite-specific settings
                connect_args={"check_same_thread": False},
            )

            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            # Create tables
            async with self._engine.begin() as conn:
                await conn.run_sync(SQLBase.metadata.create_all)

            logger.info("SQLite adapter connected successfully")

        except SQLAlchemyError as e:
            logger.error(f"Failed to connect to SQLite: {e}")
            raise DatabaseError(f"SQLite connection failed: {e}")

    async def disconnect(self) -> None:
        """Close database connections and dispose engine."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("SQLite adapter disconnected")

    async def health_check(self) -> bool:
        """
        Verify database connectivity.

        Returns:
            True if connection is healthy
        """
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except (DatabaseError, RuntimeError) as e:
            logger.warning(f"SQLite health check failed: {e}")
            return False

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a session scoped to one adapter call.

        Commits on successful exit, rolls back on exception and maps
        driver errors onto the application hierarchy.

        Yields:
            AsyncSession instance

        Raises:
            RuntimeError: If database not connected
        """
        if not self._session_factory:
            raise RuntimeError("Database not connected. Call connect() first.")

        session: AsyncSession = self._session_factory()
        try:
            yield session
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            raise AlreadyExistsError(
                message="Duplicate value for a unique field",
                details={"cause": str(e.orig)},
            )
        except SQLAlchemyError as e:
            await session.rollback()
            raise DatabaseError(f"SQLite operation failed: {e}")
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    # ==========================================================================
    # QUERY HELPERS
    # ==========================================================================

    @staticmethod
    def _field(name: str):
        if name in _COLUMN_FIELDS:
            return getattr(DocumentRecord, name)
        return func.json_extract(DocumentRecord.data, f"$.{name}")

    def _conditions(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]],
    ) -> List[Any]:
        conditions = [DocumentRecord.collection == collection]
        for key, value in (filters or {}).items():
            column = self._field(key)
            if value is None:
                conditions.append(column.is_(None))
            else:
                if isinstance(value, Enum):
                    value = value.value
                conditions.append(column == value)
        return conditions

    @staticmethod
    def _unique_keys(
        collection: str,
        document_id: str,
        data: Dict[str, Any],
    ) -> List[DocumentKey]:
        keys = []
        for field in DatabaseConstants.UNIQUE_FIELDS.get(collection, ()):
            value = data.get(field)
            if value is not None:
                keys.append(
                    DocumentKey(
                        collection=collection,
                        field=field,
                        value=str(value),
                        document_id=document_id,
                    )
                )
        return keys

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(
        self,
        collection: str,
        data: Document,
    ) -> Document:
        """Create a new document."""
        body = {k: v for k, v in data.items() if k not in _COLUMN_FIELDS}

        async with self.session() as session:
            now = utc_now()
            record = DocumentRecord(
                collection=collection,
                data=body,
                created_at=now,
                updated_at=now,
            )
            session.add(record)
            await session.flush()

            session.add_all(self._unique_keys(collection, record.id, body))
            await session.flush()

            return record.to_dict()

    async def get_by_id(
        self,
        collection: str,
        id: str,
    ) -> Optional[Document]:
        """Retrieve document by ID."""
        async with self.session() as session:
            record = await session.get(DocumentRecord, str(id))
            if record is None or record.collection != collection:
                return None
            return record.to_dict()

    async def get_all(
        self,
        collection: str,
        skip: int = 0,
        limit: Optional[int] = 100,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> List[Document]:
        """Retrieve multiple documents with filtering and sorting."""
        async with self.session() as session:
            query = select(DocumentRecord).where(
                and_(*self._conditions(collection, filters))
            )

            # Apply sorting
            if sort_by:
                order_column = self._field(sort_by)
                if sort_order.lower() == "desc":
                    order_column = order_column.desc()
                query = query.order_by(order_column)

            # Apply pagination
            if skip:
                query = query.offset(skip)
            if limit:
                query = query.limit(limit)

            result = await session.execute(query)
            return [record.to_dict() for record in result.scalars().all()]

    async def update(
        self,
        collection: str,
        id: str,
        data: Document,
    ) -> Optional[Document]:
        """Update an existing document."""
        fields = {k: v for k, v in data.items() if k not in _COLUMN_FIELDS}

        async with self.session() as session:
            record = await session.get(DocumentRecord, str(id))
            if record is None or record.collection != collection:
                return None

            # Reassign so the JSON column is flagged as modified
            record.data = {**(record.data or {}), **fields}
            record.updated_at = utc_now()

            unique = DatabaseConstants.UNIQUE_FIELDS.get(collection, ())
            changed = [f for f in unique if f in fields]
            if changed:
                await session.execute(
                    delete(DocumentKey).where(
                        DocumentKey.document_id == record.id,
                        DocumentKey.field.in_(changed),
                    )
                )
                session.add_all(
                    self._unique_keys(
                        collection,
                        record.id,
                        {f: fields[f] for f in changed},
                    )
                )

            await session.flush()
            return record.to_dict()

    async def delete(
        self,
        collection: str,
        id: str,
    ) -> bool:
        """Delete a document by ID."""
        async with self.session() as session:
            record = await session.get(DocumentRecord, str(id))
            if record is None or record.collection != collection:
                return False

            await session.execute(
                delete(DocumentKey).where(DocumentKey.document_id == record.id)
            )
            await session.delete(record)
            return True

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Count documents matching filters."""
        async with self.session() as session:
            query = (
                select(func.count())
                .select_from(DocumentRecord)
                .where(and_(*self._conditions(collection, filters)))
            )
            result = await session.execute(query)
            return result.scalar() or 0
