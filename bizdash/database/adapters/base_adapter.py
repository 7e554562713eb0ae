# ==============================================================================
# BASE DATABASE ADAPTER - Abstract Document Store Interface
# ==============================================================================
# Defines the contract for all document store adapters
# Ensures consistent API across MongoDB and the SQLite document store
# ==============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Document = Dict[str, Any]


class BaseDatabaseAdapter(ABC):
    """
    Abstract Base Class for Document Store Adapters.

    Provides a unified interface for CRUD operations over schemaless
    collections. Documents go in and come out as plain dictionaries with a
    string ``id`` assigned by the store.

    Contract shared by every adapter:
        - ``create`` assigns ``id``, ``created_at`` and ``updated_at``
        - ``update`` is a partial update and refreshes ``updated_at``
        - Unknown or malformed ids behave like missing documents
        - Unique fields from ``DatabaseConstants.UNIQUE_FIELDS`` are
          enforced and violations raise ``AlreadyExistsError``
        - Driver and transport failures raise ``DatabaseError``
        - No operation spans more than one document atomically

    Example:
        >>> adapter = MongoDBAdapter()
        >>> await adapter.connect()
        >>> client = await adapter.create("clients", {"name": "John Doe"})
        >>> await adapter.disconnect()
    """

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish database connection.

        Initializes the client/engine and creates indexes and tables the
        adapter relies on. Must be called before any other operation.

        Raises:
            DatabaseError: If connection cannot be established
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Close database connection.

        Releases pooled connections. Should be called on shutdown.
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if database connection is healthy.

        Returns:
            True if connection is healthy, False otherwise
        """

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    @abstractmethod
    async def create(
        self,
        collection: str,
        data: Document,
    ) -> Document:
        """
        Insert a new document.

        Args:
            collection: Collection name
            data: Document fields; any ``id`` key is ignored

        Returns:
            Stored document including ``id`` and timestamps

        Raises:
            AlreadyExistsError: If a unique field collides
            DatabaseError: If the write fails
        """

    @abstractmethod
    async def get_by_id(
        self,
        collection: str,
        id: str,
    ) -> Optional[Document]:
        """
        Retrieve a document by id.

        Args:
            collection: Collection name
            id: Document id

        Returns:
            Document if found, None otherwise
        """

    @abstractmethod
    async def get_all(
        self,
        collection: str,
        skip: int = 0,
        limit: Optional[int] = 100,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> List[Document]:
        """
        Retrieve documents with equality filtering and single-field sort.

        Args:
            collection: Collection name
            skip: Number of documents to skip
            limit: Maximum number of documents, None for no limit
            filters: Field-value pairs that must all match exactly
            sort_by: Field name to sort by
            sort_order: Sort direction ("asc" or "desc")

        Returns:
            List of matching documents
        """

    @abstractmethod
    async def update(
        self,
        collection: str,
        id: str,
        data: Document,
    ) -> Optional[Document]:
        """
        Apply a partial update.

        Last write wins; no concurrency token is checked.

        Args:
            collection: Collection name
            id: Document id
            data: Fields to set

        Returns:
            Updated document if found, None otherwise
        """

    @abstractmethod
    async def delete(
        self,
        collection: str,
        id: str,
    ) -> bool:
        """
        Delete a document by id.

        Args:
            collection: Collection name
            id: Document id

        Returns:
            True if deleted, False if not found
        """

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    @abstractmethod
    async def count(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        """
        Count documents matching filters.

        Args:
            collection: Collection name
            filters: Field-value pairs for filtering

        Returns:
            Number of matching documents
        """

    async def exists(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> bool:
        """Check if any document matches the filters."""
        return await self.count(collection, filters) > 0

    async def find_one(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> Optional[Document]:
        """Find the first document matching the filters."""
        results = await self.get_all(collection, skip=0, limit=1, filters=filters)
        return results[0] if results else None
