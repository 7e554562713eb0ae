# ==============================================================================
# API V1 ENDPOINTS PACKAGE
# ==============================================================================

"""
API V1 Endpoints
================

Version 1 API endpoint implementations.
"""

from bizdash.api.v1.clients import router as clients_router
from bizdash.api.v1.products import router as products_router
from bizdash.api.v1.orders import router as orders_router
from bizdash.api.v1.invoices import router as invoices_router
from bizdash.api.v1.dashboard import router as dashboard_router

__all__ = [
    "clients_router",
    "products_router",
    "orders_router",
    "invoices_router",
    "dashboard_router",
]
