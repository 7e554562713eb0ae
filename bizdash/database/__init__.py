# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================
# Document store abstraction with MongoDB and SQLite backends
# ==============================================================================

"""
Database Module
===============

Provides a unified document store abstraction supporting:
- MongoDB (hosted document database, production)
- SQLite JSON document table (development/testing)

Key Components:
- Adapters: Database-specific implementations
- Factory: Dynamic adapter instantiation
- Repositories: Per-collection data access
"""

from bizdash.database.factory import DatabaseFactory
from bizdash.database.adapters.base_adapter import BaseDatabaseAdapter

__all__ = [
    "DatabaseFactory",
    "BaseDatabaseAdapter",
]
