# ==============================================================================
# SERVICES PACKAGE INITIALIZATION
# ==============================================================================

"""
Service Layer
=============

Business logic for the dashboard:
- BaseService: Generic service with common operations
- ClientService: Clients and their pending-order counts
- ProductService: Product catalog and inventory statistics
- OrderService: Order intake and validation
- InvoiceService: Invoice lookup, status and documents
- FulfillmentService: Order to invoice workflow
- DashboardService: Business-wide aggregates
"""

from bizdash.services.base_service import BaseService
from bizdash.services.client_service import ClientService
from bizdash.services.product_service import ProductService, compute_product_stats
from bizdash.services.order_service import OrderService
from bizdash.services.invoice_service import InvoiceService
from bizdash.services.fulfillment_service import FulfillmentService
from bizdash.services.dashboard_service import DashboardService
from bizdash.services.order_locks import LockToken, OrderLockRegistry
from bizdash.services.rendering import (
    HtmlInvoiceRenderer,
    InvoiceRenderer,
    RenderedDocument,
)

__all__ = [
    "BaseService",
    "ClientService",
    "ProductService",
    "compute_product_stats",
    "OrderService",
    "InvoiceService",
    "FulfillmentService",
    "DashboardService",
    "LockToken",
    "OrderLockRegistry",
    "HtmlInvoiceRenderer",
    "InvoiceRenderer",
    "RenderedDocument",
]
