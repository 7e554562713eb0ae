# ==============================================================================
# SCHEMAS PACKAGE INITIALIZATION
# ==============================================================================

"""
Pydantic Schemas
================

Request/Response validation schemas for API endpoints:
- Base: Response envelope and shared money types
- Client: Customer records
- Product: Catalog and inventory
- Order: Order intake and line items
- Invoice: Billing documents and fulfillment results
- Dashboard: Aggregated statistics
"""

from bizdash.schemas.base import (
    BaseSchema,
    TimestampSchema,
    APIResponse,
    HealthResponse,
    Money,
    PriceInput,
    TaxRate,
)
from bizdash.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
)
from bizdash.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)
from bizdash.schemas.order import (
    OrderItemCreate,
    OrderItem,
    OrderCreate,
    OrderResponse,
)
from bizdash.schemas.invoice import (
    InvoiceClient,
    InvoiceStatusUpdate,
    InvoiceResponse,
    StockUpdateResult,
    FulfillmentResult,
)
from bizdash.schemas.dashboard import (
    ProductStats,
    DashboardStats,
    ListSummary,
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampSchema",
    "APIResponse",
    "HealthResponse",
    "Money",
    "PriceInput",
    "TaxRate",
    # Client
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    # Product
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    # Order
    "OrderItemCreate",
    "OrderItem",
    "OrderCreate",
    "OrderResponse",
    # Invoice
    "InvoiceClient",
    "InvoiceStatusUpdate",
    "InvoiceResponse",
    "StockUpdateResult",
    "FulfillmentResult",
    # Dashboard
    "ProductStats",
    "DashboardStats",
    "ListSummary",
]
