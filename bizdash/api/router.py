# ==============================================================================
# MAIN API ROUTER - Route Aggregation
# ==============================================================================
# Combines all API version routers
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from bizdash.core.settings import settings
from bizdash.api.v1 import (
    clients_router,
    products_router,
    orders_router,
    invoices_router,
    dashboard_router,
)

# Create main API router
api_router = APIRouter()

# Include v1 routers with API prefix
api_router.include_router(clients_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(products_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(orders_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(invoices_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(dashboard_router, prefix=settings.API_V1_PREFIX)
