# ==============================================================================
# MONGODB ADAPTER - Motor Async Driver Implementation
# ==============================================================================
# Document-oriented database adapter with full async support
# Uses Motor for non-blocking MongoDB operations
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from bizdash.core.constants import DatabaseConstants
from bizdash.core.exceptions import AlreadyExistsError, DatabaseError
from bizdash.core.settings import settings
from bizdash.database.adapters.base_adapter import BaseDatabaseAdapter, Document
from bizdash.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class MongoDBAdapter(BaseDatabaseAdapter):
    """
    MongoDB database adapter using Motor async driver.

    Features:
        - Async MongoDB operations using Motor
        - Automatic ObjectId <-> string conversion
        - Unique and secondary indexes created on connect
        - ``$currentDate`` maintained ``updated_at`` on every update

    Attributes:
        _connection_url: MongoDB connection string
        _database_name: Target database name
        _client: Motor async client
        _database: Target database instance

    Example:
        >>> adapter = MongoDBAdapter()
        >>> await adapter.connect()
        >>> doc = await adapter.create("clients", {"name": "John Doe"})
        >>> print(doc["id"])  # String ID
    """

    def __init__(
        self,
        connection_url: Optional[str] = None,
        database_name: Optional[str] = None,
    ) -> None:
        """
        Initialize MongoDB adapter.

        Args:
            connection_url: MongoDB connection URI (defaults to settings)
            database_name: Database name (defaults to settings)
        """
        self._connection_url = connection_url or settings.MONGODB_URL
        self._database_name = database_name or settings.MONGODB_DB
        self._client: Optional[AsyncIOMotorClient] = None
        self._database: Optional[AsyncIOMotorDatabase] = None

    # ==========================================================================
    # ID SERIALIZATION HELPERS
    # ==========================================================================

    @staticmethod
    def _serialize_id(document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert MongoDB ObjectId to string for serialization.

        Transforms _id to id and converts ObjectId to string.
        """
        if document and "_id" in document:
            document["id"] = str(document.pop("_id"))
        return document

    @staticmethod
    def _deserialize_id(id_value: Any) -> Optional[ObjectId]:
        """
        Convert string ID to MongoDB ObjectId.

        Returns:
            ObjectId instance, or None when the value is not a valid id
        """
        if isinstance(id_value, ObjectId):
            return id_value
        try:
            return ObjectId(id_value)
        except (InvalidId, TypeError):
            return None

    def _build_query(
        self,
        filters: Optional[Dict[str, Any]],
    ) -> Optional[Dict[str, Any]]:
        """
        Build MongoDB query from an equality filter dictionary.

        Returns:
            MongoDB query, or None when an ``id`` filter can never match
        """
        if not filters:
            return {}

        query: Dict[str, Any] = {}
        for key, value in filters.items():
            if key == "id":
                object_id = self._deserialize_id(value)
                if object_id is None:
                    return None
                query["_id"] = object_id
            else:
                query[key] = value
        return query

    def _db(self) -> AsyncIOMotorDatabase:
        if self._database is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._database

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """
        Initialize MongoDB connection.

        Creates Motor client, selects target database and ensures indexes.
        """
        try:
            self._client = AsyncIOMotorClient(
                self._connection_url,
                maxPoolSize=settings.DB_POOL_SIZE,
                minPoolSize=1,
                maxIdleTimeMS=settings.DB_POOL_TIMEOUT * 1000,
                tz_aware=True,
            )
            self._database = self._client[self._database_name]

            # Verify connection
            await self._client.admin.command("ping")
            await self._ensure_indexes()

            logger.info(f"MongoDB adapter connected to {self._database_name}")

        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise DatabaseError(f"MongoDB connection failed: {e}")

    async def _ensure_indexes(self) -> None:
        db = self._db()
        for collection, fields in DatabaseConstants.UNIQUE_FIELDS.items():
            for field in fields:
                await db[collection].create_index(
                    [(field, ASCENDING)],
                    unique=True,
                    name=f"uq_{collection}_{field}",
                )
        for collection, fields in DatabaseConstants.INDEXED_FIELDS.items():
            for field in fields:
                await db[collection].create_index([(field, ASCENDING)])
        logger.debug("MongoDB indexes ensured")

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._database = None
            logger.info("MongoDB adapter disconnected")

    async def health_check(self) -> bool:
        """
        Verify database connectivity.

        Returns:
            True if connection is healthy
        """
        try:
            if self._client:
                await self._client.admin.command("ping")
                return True
            return False
        except PyMongoError as e:
            logger.warning(f"MongoDB health check failed: {e}")
            return False

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(
        self,
        collection: str,
        data: Document,
    ) -> Document:
        """Create a new document."""
        db = self._db()

        # MongoDB generates _id
        document = {k: v for k, v in data.items() if k != "id"}
        now = utc_now()
        document["created_at"] = now
        document["updated_at"] = now

        try:
            result = await db[collection].insert_one(document)
        except DuplicateKeyError as e:
            raise AlreadyExistsError(
                message=f"Duplicate value in '{collection}'",
                resource_type=collection,
                details={"key": e.details.get("keyValue") if e.details else None},
            )
        except PyMongoError as e:
            raise DatabaseError(f"Insert into '{collection}' failed: {e}")

        document.pop("_id", None)
        document["id"] = str(result.inserted_id)
        return document

    async def get_by_id(
        self,
        collection: str,
        id: str,
    ) -> Optional[Document]:
        """Retrieve document by ID."""
        object_id = self._deserialize_id(id)
        if object_id is None:
            return None

        try:
            document = await self._db()[collection].find_one({"_id": object_id})
        except PyMongoError as e:
            raise DatabaseError(f"Read from '{collection}' failed: {e}")
        return self._serialize_id(document) if document else None

    async def get_all(
        self,
        collection: str,
        skip: int = 0,
        limit: Optional[int] = 100,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> List[Document]:
        """Retrieve multiple documents."""
        query = self._build_query(filters)
        if query is None:
            return []

        cursor = self._db()[collection].find(query)

        # Apply sorting
        if sort_by:
            direction = ASCENDING if sort_order.lower() == "asc" else DESCENDING
            cursor = cursor.sort("_id" if sort_by == "id" else sort_by, direction)

        # Apply pagination
        cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)

        try:
            documents = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise DatabaseError(f"Query on '{collection}' failed: {e}")
        return [self._serialize_id(doc) for doc in documents]

    async def update(
        self,
        collection: str,
        id: str,
        data: Document,
    ) -> Optional[Document]:
        """Update an existing document."""
        object_id = self._deserialize_id(id)
        if object_id is None:
            return None

        # Remove id and server-managed timestamps from update data
        fields = {
            k: v for k, v in data.items()
            if k not in ("id", "created_at", "updated_at")
        }
        operation: Dict[str, Any] = {"$currentDate": {"updated_at": True}}
        if fields:
            operation["$set"] = fields

        try:
            result = await self._db()[collection].find_one_and_update(
                {"_id": object_id},
                operation,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise AlreadyExistsError(
                message=f"Duplicate value in '{collection}'",
                resource_type=collection,
                details={"key": e.details.get("keyValue") if e.details else None},
            )
        except PyMongoError as e:
            raise DatabaseError(f"Update in '{collection}' failed: {e}")
        return self._serialize_id(result) if result else None

    async def delete(
        self,
        collection: str,
        id: str,
    ) -> bool:
        """Delete a document by ID."""
        object_id = self._deserialize_id(id)
        if object_id is None:
            return False

        try:
            result = await self._db()[collection].delete_one({"_id": object_id})
        except PyMongoError as e:
            raise DatabaseError(f"Delete from '{collection}' failed: {e}")
        return result.deleted_count > 0

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Count documents matching filters."""
        query = self._build_query(filters)
        if query is None:
            return 0

        try:
            return await self._db()[collection].count_documents(query)
        except PyMongoError as e:
            raise DatabaseError(f"Count on '{collection}' failed: {e}")
