# ==============================================================================
# DASHBOARD SERVICE - Headline Statistics
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal

from bizdash.core.pricing import round_money, to_decimal
from bizdash.database.repositories import (
    ClientRepository,
    InvoiceRepository,
    ProductRepository,
)
from bizdash.schemas.dashboard import DashboardStats

logger = logging.getLogger(__name__)


class DashboardService:
    """
    Builds the dashboard headline numbers.

    Revenue only counts Paid invoices; Pending and Overdue invoices are
    not revenue yet.
    """

    def __init__(
        self,
        clients: ClientRepository,
        invoices: InvoiceRepository,
        products: ProductRepository,
    ) -> None:
        self._clients = clients
        self._invoices = invoices
        self._products = products

    async def get_stats(self) -> DashboardStats:
        clients, invoices, paid, products = await asyncio.gather(
            self._clients.count(),
            self._invoices.count(),
            self._invoices.list_paid(),
            self._products.count(),
        )

        revenue = Decimal(0)
        for invoice in paid:
            revenue += to_decimal(invoice.get("total_amount"))

        return DashboardStats(
            total_revenue=round_money(revenue),
            clients_count=clients,
            invoices_count=invoices,
            products_count=products,
        )
