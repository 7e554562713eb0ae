# ==============================================================================
# DASHBOARD SCHEMAS - Aggregated Statistics
# ==============================================================================

from __future__ import annotations

from decimal import Decimal
from typing import Dict

from pydantic import Field

from bizdash.schemas.base import BaseSchema, Money


class ProductStats(BaseSchema):
    """Catalog totals shown above the product list."""

    total_products: int = Field(0, description="Number of products")
    total_inventory_value: Money = Field(
        Decimal(0),
        description="Sum of price x stock, missing prices count as 0",
    )
    low_stock_count: int = Field(
        0,
        description="Products that are Low Stock or Out of Stock",
    )
    total_sales: int = Field(0, description="Units sold across all products")


class DashboardStats(BaseSchema):
    """Headline numbers of the dashboard."""

    total_revenue: Money = Field(
        Decimal(0),
        description="Sum of Paid invoice totals",
    )
    clients_count: int = Field(0, description="Number of clients")
    invoices_count: int = Field(0, description="Number of invoices")
    products_count: int = Field(0, description="Number of products")


class ListSummary(BaseSchema):
    """Totals shown next to the list filters."""

    total: int = Field(0, description="Unfiltered number of records")
    counts: Dict[str, int] = Field(
        default_factory=dict,
        description="Records kept by each status filter",
    )
