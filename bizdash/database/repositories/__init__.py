# ==============================================================================
# REPOSITORIES PACKAGE INITIALIZATION
# ==============================================================================

"""
Repository Pattern Implementation
=================================

Provides data access abstraction through the Repository Pattern:
- BaseRepository: Generic repository over one collection
- Client, Product, Order and Invoice repositories
"""

from bizdash.database.repositories.base_repository import BaseRepository, to_storable
from bizdash.database.repositories.business import (
    ClientRepository,
    InvoiceRepository,
    OrderRepository,
    ProductRepository,
)

__all__ = [
    "BaseRepository",
    "to_storable",
    "ClientRepository",
    "ProductRepository",
    "OrderRepository",
    "InvoiceRepository",
]
