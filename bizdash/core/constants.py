# ==============================================================================
# APPLICATION CONSTANTS - Centralized Configuration Values
# ==============================================================================
# Immutable constants used throughout the application
# Organized by category for easy maintenance
# ==============================================================================

from __future__ import annotations

from enum import Enum
from typing import Dict, Final, Tuple


# ==============================================================================
# API CONSTANTS
# ==============================================================================

class APIConstants:
    """API-related constants."""

    # List defaults
    DEFAULT_PAGE_SIZE: Final[int] = 100
    MAX_PAGE_SIZE: Final[int] = 1000

    # Response headers
    REQUEST_ID_HEADER: Final[str] = "X-Request-ID"
    RESPONSE_TIME_HEADER: Final[str] = "X-Response-Time"


# ==============================================================================
# DATABASE CONSTANTS
# ==============================================================================

class DatabaseConstants:
    """Database-related constants."""

    # Collection names
    CLIENTS_COLLECTION: Final[str] = "clients"
    PRODUCTS_COLLECTION: Final[str] = "products"
    ORDERS_COLLECTION: Final[str] = "orders"
    INVOICES_COLLECTION: Final[str] = "invoices"

    # Unique constraints per collection
    UNIQUE_FIELDS: Final[Dict[str, Tuple[str, ...]]] = {
        INVOICES_COLLECTION: ("order_id",),
    }

    # Secondary indexes for equality filters
    INDEXED_FIELDS: Final[Dict[str, Tuple[str, ...]]] = {
        CLIENTS_COLLECTION: ("status",),
        PRODUCTS_COLLECTION: ("status",),
        ORDERS_COLLECTION: ("client_id", "status"),
        INVOICES_COLLECTION: ("client_id", "status"),
    }

    # Query limits
    DEFAULT_QUERY_LIMIT: Final[int] = 1000


# ==============================================================================
# STATUS ENUMERATIONS
# ==============================================================================

class ClientStatus(str, Enum):
    """Client account status."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ClientFilter(str, Enum):
    """Status filter values accepted by the client list view."""
    ALL = "All"
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    PENDING_ORDERS = "PendingOrders"


class ProductStatus(str, Enum):
    """Product inventory status."""
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"
    ARRIVING_SOON = "Arriving Soon"


class OrderStatus(str, Enum):
    """Order lifecycle status."""
    PENDING = "Pending"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class InvoiceStatus(str, Enum):
    """Invoice payment status."""
    PAID = "Paid"
    PENDING = "Pending"
    OVERDUE = "Overdue"


# ==============================================================================
# INVENTORY CONSTANTS
# ==============================================================================

class InventoryConstants:
    """Inventory rules."""

    LOW_STOCK_THRESHOLD: Final[int] = 10
    LOW_STOCK_STATUSES: Final[Tuple[str, ...]] = (
        ProductStatus.LOW_STOCK.value,
        ProductStatus.OUT_OF_STOCK.value,
    )

    # Field limits applied to product input
    REFERENCE_MAX_LENGTH: Final[int] = 50
    NAME_MAX_LENGTH: Final[int] = 100
    DESCRIPTION_MAX_LENGTH: Final[int] = 500
    FEATURE_MAX_LENGTH: Final[int] = 50


# ==============================================================================
# BILLING CONSTANTS
# ==============================================================================

class BillingConstants:
    """Order and invoice numbering."""

    INVOICE_PREFIX: Final[str] = "INV"
    ORDER_PREFIX: Final[str] = "ORD"
    INVOICE_TIMESTAMP_DIGITS: Final[int] = 8
    INVOICE_SUFFIX_DIGITS: Final[int] = 3
    INVOICE_NOTES_TEMPLATE: Final[str] = "Generated from Order #{order_number}"


# ==============================================================================
# ERROR MESSAGES
# ==============================================================================

class ErrorMessages:
    """Standardized error messages."""

    # Resources
    CLIENT_NOT_FOUND: Final[str] = "Client not found"
    PRODUCT_NOT_FOUND: Final[str] = "Product not found"
    ORDER_NOT_FOUND: Final[str] = "Order not found"
    INVOICE_NOT_FOUND: Final[str] = "Invoice not found"

    # Validation
    NO_ORDER_ITEMS: Final[str] = "Please add at least one item"
    ITEM_WITHOUT_PRODUCT: Final[str] = "Please select a product for every item"
    INSUFFICIENT_STOCK: Final[str] = "Insufficient stock available"


# ==============================================================================
# SUCCESS MESSAGES
# ==============================================================================

class SuccessMessages:
    """Standardized success messages."""

    # Generic
    CREATED: Final[str] = "Resource created successfully"
    UPDATED: Final[str] = "Resource updated successfully"
    DELETED: Final[str] = "Resource deleted successfully"

    # Orders
    ORDER_PLACED: Final[str] = "Order created successfully"
    ORDER_FULFILLED: Final[str] = "Order processed and invoice generated"

    # Invoices
    INVOICE_UPDATED: Final[str] = "Invoice status updated"
