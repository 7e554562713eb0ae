# ==============================================================================
# BASE SERVICE - Generic Business Logic Layer
# ==============================================================================
# Abstract service providing common CRUD operations over a repository
# ==============================================================================

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from bizdash.core.exceptions import NotFoundError
from bizdash.database.adapters.base_adapter import Document
from bizdash.database.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)

# Type variables for generic service
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)
ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)


class BaseService(ABC, Generic[CreateSchemaType, UpdateSchemaType, ResponseSchemaType]):
    """
    Abstract base service providing standard business operations.

    Encapsulates business rules for one collection and converts stored
    documents into response schemas for the API layer.

    Generic Parameters:
        CreateSchemaType: Pydantic schema for creation
        UpdateSchemaType: Pydantic schema for updates
        ResponseSchemaType: Pydantic schema for responses

    Attributes:
        _repository: Repository of the managed collection
        resource_name: Human-readable name used in error messages

    Example:
        >>> class ClientService(BaseService[ClientCreate, ClientUpdate, ClientResponse]):
        ...     def _to_response(self, document):
        ...         return ClientResponse.model_validate(document)
    """

    resource_name: str = "Resource"

    def __init__(self, repository: BaseRepository) -> None:
        """
        Initialize service.

        Args:
            repository: Repository of the managed collection
        """
        self._repository = repository

    # ==========================================================================
    # ABSTRACT METHODS
    # ==========================================================================

    @abstractmethod
    def _to_response(self, document: Document) -> ResponseSchemaType:
        """
        Convert a stored document to its response schema.

        Args:
            document: Stored document

        Returns:
            Response schema instance
        """

    def _not_found(self, id: Any) -> NotFoundError:
        return NotFoundError(
            message=f"{self.resource_name} not found",
            resource_type=self.resource_name.lower(),
            resource_id=id,
        )

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(self, schema: CreateSchemaType) -> ResponseSchemaType:
        """
        Create a new record.

        Args:
            schema: Validated creation schema

        Returns:
            Created record as response schema
        """
        document = await self._repository.create(schema.model_dump())
        logger.info(f"{self.resource_name} created: {document['id']}")
        return self._to_response(document)

    async def get_document(self, id: str) -> Document:
        """
        Retrieve the stored document.

        Raises:
            NotFoundError: If the record does not exist
        """
        document = await self._repository.get(id)
        if not document:
            raise self._not_found(id)
        return document

    async def get_by_id(self, id: str) -> ResponseSchemaType:
        """
        Retrieve record by ID.

        Raises:
            NotFoundError: If record not found
        """
        return self._to_response(await self.get_document(id))

    async def get_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = "created_at",
        sort_order: str = "desc",
    ) -> List[ResponseSchemaType]:
        """
        Retrieve records matching equality filters, newest first.

        Args:
            filters: Filter criteria
            sort_by: Sort field
            sort_order: Sort direction

        Returns:
            List of records as response schemas
        """
        documents = await self._repository.list(
            filters=filters,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return [self._to_response(d) for d in documents]

    async def update(
        self,
        id: str,
        schema: UpdateSchemaType,
    ) -> ResponseSchemaType:
        """
        Apply the fields that were sent.

        Raises:
            NotFoundError: If record not found
        """
        data = schema.model_dump(exclude_unset=True)
        document = await self._repository.update(id, data)
        if not document:
            raise self._not_found(id)
        logger.info(f"{self.resource_name} updated: {id} ({', '.join(data) or 'no fields'})")
        return self._to_response(document)

    async def delete(self, id: str) -> bool:
        """
        Delete a record. Related records are left untouched.

        Raises:
            NotFoundError: If nothing was removed
        """
        deleted = await self._repository.delete(id)
        if not deleted:
            raise self._not_found(id)
        logger.info(f"{self.resource_name} deleted: {id}")
        return True

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records matching filters."""
        return await self._repository.count(filters)
