# ==============================================================================
# AGGREGATION TESTS
# ==============================================================================
# Pending-order counts, catalog statistics and dashboard totals
# ==============================================================================

from decimal import Decimal

import pytest

from bizdash.core.exceptions import NotFoundError
from bizdash.database.repositories import OrderRepository
from bizdash.services.client_service import ClientService
from bizdash.services.dashboard_service import DashboardService
from bizdash.services.product_service import ProductService, compute_product_stats


class RendezvousOrderRepository(OrderRepository):
    """Order repository whose pending counts wait for each other."""

    def __init__(self, adapter, gate):
        super().__init__(adapter)
        self.gate = gate

    async def count_pending_for_client(self, client_id):
        await self.gate.wait()
        return await super().count_pending_for_client(client_id)


def _order(client_id, status):
    return {
        "client_id": client_id,
        "client_cin": "",
        "client_name": "",
        "order_number": "ORD-1",
        "items": [],
        "subtotal": 0,
        "tax_rate": 0.19,
        "tax_amount": 0,
        "total_amount": 0,
        "status": status,
    }


class TestPendingOrderCounts:
    """Tests for the client list view aggregation."""

    @pytest.mark.asyncio
    async def test_counts_only_pending_orders(self, repositories):
        client = await repositories["clients"].create({"name": "John Doe", "status": "Active"})
        for status in ("Pending", "Pending", "Completed"):
            await repositories["orders"].create(_order(client["id"], status))
        service = ClientService(repositories["clients"], repositories["orders"])

        view = await service.get_with_pending_count(client["id"])

        assert view.pending_orders_count == 2

    @pytest.mark.asyncio
    async def test_list_view_puts_pending_clients_first(self, repositories):
        ids = {}
        for name in ("Amy", "Bob", "Carl"):
            ids[name] = (await repositories["clients"].create({"name": name, "status": "Active"}))["id"]
        await repositories["orders"].create(_order(ids["Bob"], "Pending"))
        service = ClientService(repositories["clients"], repositories["orders"])

        clients = await service.list_view()

        assert clients[0].name == "Bob"
        assert clients[0].pending_orders_count == 1
        assert {c.name for c in clients[1:]} == {"Amy", "Carl"}

    @pytest.mark.asyncio
    async def test_list_view_filters(self, repositories):
        await repositories["clients"].create({"name": "John Doe", "status": "Active"})
        await repositories["clients"].create({"name": "Amy", "status": "Inactive"})
        service = ClientService(repositories["clients"], repositories["orders"])

        assert [c.name for c in await service.list_view(query="jo")] == ["John Doe"]
        assert [c.name for c in await service.list_view(status="Inactive")] == ["Amy"]
        assert await service.list_view(status="PendingOrders") == []

    @pytest.mark.asyncio
    async def test_pending_counts_run_concurrently(self, adapter, repositories, rendezvous):
        ids = []
        for name in ("Amy", "Bob", "Carl"):
            ids.append((await repositories["clients"].create({"name": name, "status": "Active"}))["id"])
        await repositories["orders"].create(_order(ids[1], "Pending"))
        gate = rendezvous(3)
        orders = RendezvousOrderRepository(adapter, gate)
        service = ClientService(repositories["clients"], orders)

        clients = await service.list_with_pending_counts()

        assert gate.arrived == 3
        assert {c.name: c.pending_orders_count for c in clients} == {"Amy": 0, "Bob": 1, "Carl": 0}

    @pytest.mark.asyncio
    async def test_orders_of_unknown_client(self, repositories):
        service = ClientService(repositories["clients"], repositories["orders"])

        with pytest.raises(NotFoundError):
            await service.get_orders("missing")


class TestProductStats:
    """Tests for catalog statistics."""

    def test_compute(self):
        stats = compute_product_stats([
            {"price": 10.5, "stock": 4, "status": "In Stock", "sales": 3},
            {"price": None, "stock": 7, "status": "Low Stock", "sales": 1},
            {"price": 2, "stock": 0, "status": "Out of Stock"},
            {"price": 1, "stock": 100, "status": "Arriving Soon", "sales": 0},
        ])

        assert stats.total_products == 4
        assert stats.total_inventory_value == Decimal("142.00")
        assert stats.low_stock_count == 2
        assert stats.total_sales == 4

    def test_empty_catalog(self):
        stats = compute_product_stats([])
        assert stats.total_products == 0
        assert stats.total_inventory_value == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_service_reads_every_product(self, repositories):
        for i in range(3):
            await repositories["products"].create({
                "reference": f"R{i}",
                "name": f"Item {i}",
                "price": 5,
                "stock": 2,
                "status": "In Stock",
            })

        stats = await ProductService(repositories["products"]).get_stats()

        assert stats.total_products == 3
        assert stats.total_inventory_value == Decimal("30.00")


class TestDashboardStats:
    """Tests for dashboard totals."""

    @pytest.mark.asyncio
    async def test_revenue_counts_paid_invoices_only(self, repositories):
        await repositories["clients"].create({"name": "John Doe", "status": "Active"})
        await repositories["products"].create({"reference": "R", "name": "Item"})
        for index, (status, total) in enumerate(
            [("Paid", 100.10), ("Paid", 19.9), ("Pending", 50), ("Overdue", 20)]
        ):
            await repositories["invoices"].create({
                "invoice_number": f"INV-00000000-00{index}",
                "order_id": f"order-{index}",
                "total_amount": total,
                "status": status,
            })
        service = DashboardService(
            repositories["clients"],
            repositories["invoices"],
            repositories["products"],
        )

        stats = await service.get_stats()

        assert stats.total_revenue == Decimal("120.00")
        assert stats.invoices_count == 4
        assert stats.clients_count == 1
        assert stats.products_count == 1

    @pytest.mark.asyncio
    async def test_paid_invoice_listing(self, repositories):
        for index, status in enumerate(["Paid", "Pending", "Paid"]):
            await repositories["invoices"].create({
                "invoice_number": f"INV-00000000-00{index}",
                "order_id": f"order-{index}",
                "total_amount": 10,
                "status": status,
            })

        paid = await repositories["invoices"].list_paid()

        assert sorted(i["order_id"] for i in paid) == ["order-0", "order-2"]
