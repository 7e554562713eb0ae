# ==============================================================================
# PRODUCT SERVICE - Catalog and Inventory
# ==============================================================================
# Business logic for products and catalog statistics
# ==============================================================================

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, List

from bizdash.core.constants import InventoryConstants, ProductStatus
from bizdash.core.pricing import round_money, to_decimal
from bizdash.database.adapters.base_adapter import Document
from bizdash.database.repositories import ProductRepository
from bizdash.schemas.dashboard import ListSummary, ProductStats
from bizdash.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from bizdash.services.base_service import BaseService
from bizdash.utils.filters import ALL, filter_products, status_counts

logger = logging.getLogger(__name__)


def compute_product_stats(products: Iterable[Document]) -> ProductStats:
    """
    Aggregate catalog totals.

    Inventory value is the sum of ``price * stock`` with missing prices
    counted as 0. Low stock covers Low Stock and Out of Stock.
    """
    total_products = 0
    inventory_value = Decimal(0)
    low_stock = 0
    total_sales = 0

    for product in products:
        total_products += 1
        inventory_value += to_decimal(product.get("price")) * to_decimal(product.get("stock"))
        if product.get("status") in InventoryConstants.LOW_STOCK_STATUSES:
            low_stock += 1
        total_sales += int(product.get("sales") or 0)

    return ProductStats(
        total_products=total_products,
        total_inventory_value=round_money(inventory_value),
        low_stock_count=low_stock,
        total_sales=total_sales,
    )


class ProductService(BaseService[ProductCreate, ProductUpdate, ProductResponse]):
    """Product catalog service."""

    resource_name = "Product"

    def __init__(self, products: ProductRepository) -> None:
        super().__init__(products)

    def _to_response(self, document: Document) -> ProductResponse:
        return ProductResponse.model_validate(document)

    async def list_view(
        self,
        status: str = ALL,
        query: str = "",
    ) -> List[ProductResponse]:
        """Products filtered by status and search text, newest first."""
        products = await self.get_all()
        return filter_products(products, status=status, query=query)

    async def summary(self) -> ListSummary:
        """Total products and the count behind each status filter."""
        documents = await self._repository.list()
        statuses = [ALL] + [s.value for s in ProductStatus]
        return ListSummary(total=len(documents), counts=status_counts(documents, statuses))

    async def get_stats(self) -> ProductStats:
        """Catalog totals over every product."""
        documents = await self._repository.list()
        return compute_product_stats(documents)
