# ==============================================================================
# BASE REPOSITORY - Generic Data Access Abstraction
# ==============================================================================
# Repository Pattern over one collection of the document store
# Works with both the MongoDB and SQLite document adapters
# ==============================================================================

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from bizdash.database.adapters.base_adapter import BaseDatabaseAdapter, Document


def to_storable(value: Any) -> Any:
    """
    Convert a value into something every document store accepts.

    Decimals become floats (the stores' number type), enums become their
    values and pydantic models become dictionaries. Containers are
    converted recursively.
    """
    if isinstance(value, BaseModel):
        return to_storable(value.model_dump())
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: to_storable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_storable(v) for v in value]
    return value


class BaseRepository:
    """
    Base repository providing standard CRUD operations on one collection.

    Decouples services from the concrete document store. Every method
    returns plain dictionaries as stored; validation into response
    schemas is the service layer's job.

    Attributes:
        _adapter: Database adapter for database operations
        _collection_name: Collection identifier

    Example:
        >>> class ClientRepository(BaseRepository):
        ...     collection_name = "clients"
        ...
        >>> repo = ClientRepository(adapter)
        >>> client = await repo.create({"name": "John Doe"})
    """

    collection_name: str = ""

    def __init__(
        self,
        adapter: BaseDatabaseAdapter,
        collection_name: Optional[str] = None,
    ) -> None:
        """
        Initialize repository.

        Args:
            adapter: Database adapter instance
            collection_name: Overrides the class-level collection name
        """
        self._adapter = adapter
        self._collection_name = collection_name or self.collection_name

    @property
    def collection(self) -> str:
        return self._collection_name

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(self, data: Union[Dict[str, Any], BaseModel]) -> Document:
        """
        Create a new document.

        Args:
            data: Fields or pydantic schema

        Returns:
            Created document with generated id and timestamps
        """
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        return await self._adapter.create(self._collection_name, to_storable(data))

    async def get(self, id: str) -> Optional[Document]:
        """
        Retrieve document by id.

        Returns:
            Document if found, None otherwise
        """
        return await self._adapter.get_by_id(self._collection_name, id)

    async def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Document]:
        """
        Retrieve documents matching equality filters.

        Args:
            filters: Field-value pairs for filtering
            sort_by: Field to sort by
            sort_order: Sort direction ("asc" or "desc")
            skip: Number of documents to skip
            limit: Maximum documents to return, None for all

        Returns:
            List of matching documents
        """
        return await self._adapter.get_all(
            self._collection_name,
            skip=skip,
            limit=limit,
            filters=to_storable(filters) if filters else None,
            sort_by=sort_by,
            sort_order=sort_order,
        )

    async def update(
        self,
        id: str,
        data: Union[Dict[str, Any], BaseModel],
    ) -> Optional[Document]:
        """
        Apply a partial update.

        Returns:
            Updated document if found, None otherwise
        """
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        return await self._adapter.update(self._collection_name, id, to_storable(data))

    async def delete(self, id: str) -> bool:
        """
        Delete a document by id.

        Returns:
            True if deleted, False if not found
        """
        return await self._adapter.delete(self._collection_name, id)

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching filters."""
        return await self._adapter.count(
            self._collection_name,
            to_storable(filters) if filters else None,
        )

    async def exists(self, id: str) -> bool:
        """Check if a document exists by id."""
        return await self.get(id) is not None

    async def find_one(self, filters: Dict[str, Any]) -> Optional[Document]:
        """Find a single document matching filters."""
        return await self._adapter.find_one(self._collection_name, to_storable(filters))
