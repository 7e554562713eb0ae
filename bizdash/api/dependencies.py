# ==============================================================================
# API DEPENDENCIES - Dependency Injection
# ==============================================================================
# FastAPI dependencies for database access, app-scoped state and services
# ==============================================================================

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from bizdash.core.settings import Settings, get_settings
from bizdash.database.factory import DatabaseFactory
from bizdash.database.adapters.base_adapter import BaseDatabaseAdapter
from bizdash.database.repositories import (
    ClientRepository,
    InvoiceRepository,
    OrderRepository,
    ProductRepository,
)
from bizdash.services.client_service import ClientService
from bizdash.services.dashboard_service import DashboardService
from bizdash.services.fulfillment_service import FulfillmentService
from bizdash.services.invoice_service import InvoiceService
from bizdash.services.order_locks import OrderLockRegistry
from bizdash.services.order_service import OrderService
from bizdash.services.product_service import ProductService
from bizdash.services.rendering import InvoiceRenderer


# ==============================================================================
# DATABASE DEPENDENCIES
# ==============================================================================

async def get_adapter() -> BaseDatabaseAdapter:
    """
    Get database adapter dependency.

    Returns initialized adapter from factory.
    """
    return DatabaseFactory.get_adapter()


# Annotated type for database adapter
DatabaseDep = Annotated[BaseDatabaseAdapter, Depends(get_adapter)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


# ==============================================================================
# APPLICATION STATE DEPENDENCIES
# ==============================================================================

async def get_order_locks(request: Request) -> OrderLockRegistry:
    """In-flight fulfillment registry created with the application."""
    return request.app.state.order_locks


async def get_invoice_renderer(request: Request) -> InvoiceRenderer:
    """Invoice renderer created with the application."""
    return request.app.state.invoice_renderer


OrderLocksDep = Annotated[OrderLockRegistry, Depends(get_order_locks)]
RendererDep = Annotated[InvoiceRenderer, Depends(get_invoice_renderer)]


# ==============================================================================
# SERVICE DEPENDENCIES
# ==============================================================================

async def get_client_service(adapter: DatabaseDep) -> ClientService:
    """Get client service instance."""
    return ClientService(ClientRepository(adapter), OrderRepository(adapter))


async def get_product_service(adapter: DatabaseDep) -> ProductService:
    """Get product service instance."""
    return ProductService(ProductRepository(adapter))


async def get_order_service(
    adapter: DatabaseDep,
    config: SettingsDep,
) -> OrderService:
    """Get order service instance."""
    return OrderService(
        OrderRepository(adapter),
        ClientRepository(adapter),
        ProductRepository(adapter),
        default_tax_rate=config.DEFAULT_TAX_RATE,
    )


async def get_invoice_service(
    adapter: DatabaseDep,
    renderer: RendererDep,
) -> InvoiceService:
    """Get invoice service instance."""
    return InvoiceService(InvoiceRepository(adapter), renderer)


async def get_fulfillment_service(
    adapter: DatabaseDep,
    renderer: RendererDep,
    locks: OrderLocksDep,
    config: SettingsDep,
) -> FulfillmentService:
    """Get fulfillment service instance."""
    return FulfillmentService(
        orders=OrderRepository(adapter),
        clients=ClientRepository(adapter),
        products=ProductRepository(adapter),
        invoices=InvoiceRepository(adapter),
        renderer=renderer,
        locks=locks,
        due_days=config.INVOICE_DUE_DAYS,
        low_stock_threshold=config.LOW_STOCK_THRESHOLD,
        compensate_on_failure=config.FULFILLMENT_COMPENSATE_ON_FAILURE,
    )


async def get_dashboard_service(adapter: DatabaseDep) -> DashboardService:
    """Get dashboard service instance."""
    return DashboardService(
        ClientRepository(adapter),
        InvoiceRepository(adapter),
        ProductRepository(adapter),
    )


# Annotated service types
ClientServiceDep = Annotated[ClientService, Depends(get_client_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
InvoiceServiceDep = Annotated[InvoiceService, Depends(get_invoice_service)]
FulfillmentServiceDep = Annotated[FulfillmentService, Depends(get_fulfillment_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
