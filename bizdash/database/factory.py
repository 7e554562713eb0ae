# ==============================================================================
# DATABASE FACTORY - Adapter Instantiation & Lifecycle Management
# ==============================================================================
# Factory Pattern for creating and managing document store adapters
# Singleton caching for efficient resource utilization
# ==============================================================================

from __future__ import annotations

import logging
from typing import Dict, Optional

from bizdash.core.settings import settings, DatabaseType
from bizdash.core.exceptions import DatabaseError
from bizdash.database.adapters.base_adapter import BaseDatabaseAdapter
from bizdash.database.adapters.mongodb_adapter import MongoDBAdapter
from bizdash.database.adapters.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


class DatabaseFactory:
    """
    Factory class for creating and managing document store adapters.

    Features:
        - Dynamic adapter creation based on configuration
        - Singleton caching for adapter instances
        - Lifecycle management (initialize/shutdown)

    Class Attributes:
        _instances: Cache of initialized adapter instances

    Example:
        >>> # Initialize at application startup
        >>> await DatabaseFactory.initialize()
        >>>
        >>> # Get adapter for database operations
        >>> adapter = DatabaseFactory.get_adapter()
        >>> client = await adapter.get_by_id("clients", client_id)
        >>>
        >>> # Shutdown at application exit
        >>> await DatabaseFactory.shutdown()
    """

    _instances: Dict[DatabaseType, BaseDatabaseAdapter] = {}

    @classmethod
    def create_adapter(
        cls,
        db_type: Optional[DatabaseType] = None,
        **kwargs,
    ) -> BaseDatabaseAdapter:
        """
        Create and return appropriate database adapter.

        Returns cached instance if available, otherwise creates new.

        Args:
            db_type: Database type (defaults to settings.DATABASE_TYPE)
            **kwargs: Additional adapter configuration
                - database_url: SQLite connection URL
                - connection_url: MongoDB connection URL
                - database_name: MongoDB database name

        Returns:
            Database adapter instance

        Raises:
            ValueError: If database type is not supported
        """
        db_type = db_type or settings.DATABASE_TYPE

        # Return cached instance if available
        if db_type in cls._instances:
            return cls._instances[db_type]

        adapter: BaseDatabaseAdapter

        if db_type == DatabaseType.SQLITE:
            adapter = SQLiteAdapter(database_url=kwargs.get("database_url"))
            logger.info("Created SQLite adapter")

        elif db_type == DatabaseType.MONGODB:
            adapter = MongoDBAdapter(
                connection_url=kwargs.get("connection_url"),
                database_name=kwargs.get("database_name"),
            )
            logger.info("Created MongoDB adapter")

        else:
            raise ValueError(f"Unsupported database type: {db_type}")

        cls._instances[db_type] = adapter
        return adapter

    @classmethod
    async def initialize(
        cls,
        db_type: Optional[DatabaseType] = None,
        **kwargs,
    ) -> BaseDatabaseAdapter:
        """
        Initialize database connection.

        Creates adapter and establishes database connection.
        Should be called at application startup.

        Args:
            db_type: Database type (defaults to settings.DATABASE_TYPE)
            **kwargs: Forwarded to ``create_adapter``

        Returns:
            Initialized database adapter

        Raises:
            DatabaseError: If connection fails
        """
        adapter = cls.create_adapter(db_type, **kwargs)

        try:
            await adapter.connect()
        except DatabaseError:
            cls._instances.pop(db_type or settings.DATABASE_TYPE, None)
            raise

        logger.info(f"Database initialized: {db_type or settings.DATABASE_TYPE}")
        return adapter

    @classmethod
    async def shutdown(cls) -> None:
        """
        Close all database connections.

        Releases all resources and clears adapter cache.
        Should be called at application shutdown.
        """
        for db_type, adapter in cls._instances.items():
            try:
                await adapter.disconnect()
                logger.info(f"Disconnected: {db_type}")
            except Exception as e:
                logger.error(f"Error disconnecting {db_type}: {e}")

        cls._instances.clear()
        logger.info("All database connections closed")

    @classmethod
    def get_adapter(
        cls,
        db_type: Optional[DatabaseType] = None,
    ) -> BaseDatabaseAdapter:
        """
        Get existing adapter instance.

        Args:
            db_type: Database type (defaults to settings.DATABASE_TYPE)

        Returns:
            Initialized adapter instance

        Raises:
            RuntimeError: If adapter not initialized
        """
        db_type = db_type or settings.DATABASE_TYPE

        if db_type not in cls._instances:
            raise RuntimeError(
                f"Database adapter for {db_type} not initialized. "
                f"Call DatabaseFactory.initialize() first."
            )

        return cls._instances[db_type]

    @classmethod
    def is_initialized(
        cls,
        db_type: Optional[DatabaseType] = None,
    ) -> bool:
        """Check if an adapter for ``db_type`` is cached."""
        db_type = db_type or settings.DATABASE_TYPE
        return db_type in cls._instances

    @classmethod
    async def health_check(
        cls,
        db_type: Optional[DatabaseType] = None,
    ) -> bool:
        """
        Check database health.

        Returns:
            True if database is healthy
        """
        try:
            adapter = cls.get_adapter(db_type)
        except RuntimeError:
            return False
        return await adapter.health_check()

    @classmethod
    def reset(cls) -> None:
        """
        Reset factory state.

        Clears adapter cache without disconnecting.
        Primarily for testing purposes.
        """
        cls._instances.clear()
