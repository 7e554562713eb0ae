# ==============================================================================
# DATABASE ADAPTERS PACKAGE
# ==============================================================================

"""
Database Adapters
=================

Provides unified interface implementations for document stores:
- BaseDatabaseAdapter: Abstract interface definition
- MongoDBAdapter: MongoDB using Motor async driver
- SQLiteAdapter: JSON document table using SQLAlchemy async + aiosqlite
"""

from bizdash.database.adapters.base_adapter import BaseDatabaseAdapter, Document
from bizdash.database.adapters.mongodb_adapter import MongoDBAdapter
from bizdash.database.adapters.sqlite_adapter import SQLiteAdapter

__all__ = [
    "BaseDatabaseAdapter",
    "Document",
    "MongoDBAdapter",
    "SQLiteAdapter",
]
