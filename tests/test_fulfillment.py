# ==============================================================================
# FULFILLMENT SERVICE TESTS
# ==============================================================================
# Order intake and the order to invoice workflow over a real SQLite store
# ==============================================================================

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from bizdash.core.exceptions import (
    BusinessRuleError,
    FulfillmentError,
    InsufficientStockError,
    NotFoundError,
    OrderAlreadyFulfilledError,
    OrderInFlightError,
    ValidationError,
)
from bizdash.database.repositories import OrderRepository, ProductRepository
from bizdash.schemas.order import OrderCreate
from bizdash.services.fulfillment_service import FulfillmentService
from bizdash.services.order_locks import OrderLockRegistry
from bizdash.services.order_service import OrderService
from bizdash.services.rendering import HtmlInvoiceRenderer, InvoiceRenderer

NOW = datetime(2024, 5, 10, 9, 30, tzinfo=timezone.utc)


class BrokenRenderer(InvoiceRenderer):
    async def render(self, invoice):
        raise OSError("printer on fire")


class FailingOrderRepository(OrderRepository):
    """Order repository whose updates always fail."""

    async def update(self, id, data):
        raise RuntimeError("write rejected")


class RendezvousProductRepository(ProductRepository):
    """Product repository whose reads wait for each other."""

    def __init__(self, adapter, gate):
        super().__init__(adapter)
        self.gate = gate

    async def get(self, id):
        await self.gate.wait()
        return await super().get(id)


def _order_service(repositories, tax_rate="0.19"):
    return OrderService(
        repositories["orders"],
        repositories["clients"],
        repositories["products"],
        default_tax_rate=Decimal(tax_rate),
    )


def _fulfillment_service(repositories, **overrides):
    options = {
        "orders": repositories["orders"],
        "clients": repositories["clients"],
        "products": repositories["products"],
        "invoices": repositories["invoices"],
        "renderer": HtmlInvoiceRenderer(company_name="Acme"),
        "locks": OrderLockRegistry(),
        "clock": lambda: NOW,
    }
    options.update(overrides)
    return FulfillmentService(**options)


async def _seed(repositories, stock=15, price=10.005, status="In Stock"):
    client = await repositories["clients"].create({
        "cin": "12345678",
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "+216 20 000 000",
        "location": "Tunis",
        "status": "Active",
    })
    product = await repositories["products"].create({
        "reference": "LMP-01",
        "name": "Desk Lamp",
        "price": price,
        "stock": stock,
        "sales": 0,
        "status": status,
    })
    return client, product


async def _place(repositories, client, product, quantity=2, tax_rate="0.2"):
    schema = OrderCreate(
        client_id=client["id"],
        items=[{"product_id": product["id"], "quantity": quantity}],
        tax_rate=tax_rate,
    )
    return await _order_service(repositories).create_order(schema)


# ==============================================================================
# ORDER INTAKE
# ==============================================================================

class TestCreateOrder:
    """Tests for order intake."""

    @pytest.mark.asyncio
    async def test_snapshots_prices_and_totals(self, repositories):
        client, product = await _seed(repositories)

        order = await _place(repositories, client, product)

        assert order.status == "Pending"
        assert order.client_cin == "12345678"
        assert order.client_name == "John Doe"
        assert order.order_number.startswith("ORD-")
        assert order.items[0].reference == "LMP-01"
        assert order.items[0].description == "Desk Lamp"
        assert order.items[0].unit_price == Decimal("10.005")
        assert order.subtotal == Decimal("20.01")
        assert order.tax_amount == Decimal("4.00")
        assert order.total_amount == Decimal("24.01")

    @pytest.mark.asyncio
    async def test_does_not_touch_stock(self, repositories):
        client, product = await _seed(repositories)

        await _place(repositories, client, product, quantity=5)

        stored = await repositories["products"].get(product["id"])
        assert stored["stock"] == 15
        assert stored["sales"] == 0

    @pytest.mark.asyncio
    async def test_default_tax_rate(self, repositories):
        client, product = await _seed(repositories, price=100)
        schema = OrderCreate(
            client_id=client["id"],
            items=[{"product_id": product["id"], "quantity": 1}],
        )

        order = await _order_service(repositories).create_order(schema)

        assert order.tax_rate == Decimal("0.19")
        assert order.total_amount == Decimal("119.00")

    @pytest.mark.asyncio
    async def test_tax_percent_is_converted(self, repositories):
        client, product = await _seed(repositories, price=50)
        schema = OrderCreate(
            client_id=client["id"],
            items=[{"product_id": product["id"], "quantity": 2}],
            tax_percent=7,
        )

        order = await _order_service(repositories).create_order(schema)

        assert order.tax_rate == Decimal("0.07")
        assert order.tax_amount == Decimal("7.00")

    @pytest.mark.asyncio
    async def test_insufficient_stock(self, repositories):
        client, product = await _seed(repositories, stock=3)

        with pytest.raises(InsufficientStockError) as exc_info:
            await _place(repositories, client, product, quantity=4)

        issue = exc_info.value.details["stock_issues"][0]
        assert issue["requested"] == 4
        assert issue["available"] == 3
        assert await repositories["orders"].count() == 0

    @pytest.mark.asyncio
    async def test_rejects_missing_client_and_items(self, repositories):
        with pytest.raises(ValidationError) as exc_info:
            await _order_service(repositories).create_order(OrderCreate())

        assert set(exc_info.value.errors) == {"client_id", "items"}

    @pytest.mark.asyncio
    async def test_rejects_item_without_product(self, repositories):
        client, _ = await _seed(repositories)
        schema = OrderCreate(client_id=client["id"], items=[{"quantity": 1}])

        with pytest.raises(ValidationError):
            await _order_service(repositories).create_order(schema)

    @pytest.mark.asyncio
    async def test_unknown_product(self, repositories):
        client, _ = await _seed(repositories)
        schema = OrderCreate(
            client_id=client["id"],
            items=[{"product_id": "missing", "quantity": 1}],
        )

        with pytest.raises(NotFoundError):
            await _order_service(repositories).create_order(schema)


# ==============================================================================
# FULFILLMENT
# ==============================================================================

class TestFulfillOrder:
    """Tests for the order to invoice workflow."""

    @pytest.mark.asyncio
    async def test_end_to_end(self, repositories):
        client, product = await _seed(repositories, stock=15)
        order = await _place(repositories, client, product, quantity=10)

        result = await _fulfillment_service(repositories).fulfill_order(order.id)

        invoice = result.invoice
        assert invoice.order_id == order.id
        assert invoice.client_id == client["id"]
        assert invoice.client_cin == "12345678"
        assert invoice.client.name == "John Doe"
        assert invoice.client.email == "john@example.com"
        assert invoice.total_amount == order.total_amount
        assert invoice.tax_rate == order.tax_rate
        assert invoice.status == "Pending"
        assert invoice.notes == f"Generated from Order #{order.order_number}"
        assert invoice.issue_date == NOW
        assert invoice.due_date == NOW + timedelta(days=30)

        assert result.order.status == "Completed"
        assert result.order.invoice_id == invoice.id

        assert result.stock_updates[0].success is True
        stored = await repositories["products"].get(product["id"])
        assert stored["stock"] == 5
        assert stored["sales"] == 10
        assert stored["status"] == "Low Stock"

        assert result.document_rendered is True
        assert result.pending_orders_count == 0
        assert [o.id for o in result.client_orders] == [order.id]

    @pytest.mark.asyncio
    async def test_selling_out(self, repositories):
        client, product = await _seed(repositories, stock=5)
        order = await _place(repositories, client, product, quantity=5)

        await _fulfillment_service(repositories).fulfill_order(order.id)

        stored = await repositories["products"].get(product["id"])
        assert stored["stock"] == 0
        assert stored["status"] == "Out of Stock"

    @pytest.mark.asyncio
    async def test_arriving_soon_kept(self, repositories):
        client, product = await _seed(repositories, stock=15, status="Arriving Soon")
        order = await _place(repositories, client, product, quantity=10)

        await _fulfillment_service(repositories).fulfill_order(order.id)

        stored = await repositories["products"].get(product["id"])
        assert stored["status"] == "Arriving Soon"

    @pytest.mark.asyncio
    async def test_repeated_product_lines_are_combined(self, repositories):
        client, product = await _seed(repositories, stock=20)
        schema = OrderCreate(
            client_id=client["id"],
            items=[
                {"product_id": product["id"], "quantity": 3},
                {"product_id": product["id"], "quantity": 4},
            ],
        )
        order = await _order_service(repositories).create_order(schema)

        result = await _fulfillment_service(repositories).fulfill_order(order.id)

        assert len(result.stock_updates) == 1
        stored = await repositories["products"].get(product["id"])
        assert stored["stock"] == 13
        assert stored["sales"] == 7

    @pytest.mark.asyncio
    async def test_stock_updates_run_concurrently(self, adapter, repositories, rendezvous):
        client, lamp = await _seed(repositories, stock=15)
        pen = await repositories["products"].create({
            "reference": "PEN-02",
            "name": "Pen",
            "price": 1.5,
            "stock": 40,
            "sales": 0,
            "status": "In Stock",
        })
        schema = OrderCreate(
            client_id=client["id"],
            items=[
                {"product_id": lamp["id"], "quantity": 2},
                {"product_id": pen["id"], "quantity": 5},
            ],
        )
        order = await _order_service(repositories).create_order(schema)
        gate = rendezvous(2)
        service = _fulfillment_service(
            repositories, products=RendezvousProductRepository(adapter, gate)
        )

        result = await service.fulfill_order(order.id)

        assert gate.arrived == 2
        assert [u.success for u in result.stock_updates] == [True, True]
        assert (await repositories["products"].get(pen["id"]))["stock"] == 35
        assert (await repositories["products"].get(lamp["id"]))["stock"] == 13

    @pytest.mark.asyncio
    async def test_second_fulfillment_is_rejected(self, repositories):
        client, product = await _seed(repositories)
        order = await _place(repositories, client, product)
        service = _fulfillment_service(repositories)
        first = await service.fulfill_order(order.id)

        with pytest.raises(OrderAlreadyFulfilledError) as exc_info:
            await service.fulfill_order(order.id)

        assert exc_info.value.invoice_id == first.invoice.id
        assert await repositories["invoices"].count() == 1
        stored = await repositories["products"].get(product["id"])
        assert stored["stock"] == 13

    @pytest.mark.asyncio
    async def test_concurrent_fulfillment_creates_one_invoice(self, repositories):
        client, product = await _seed(repositories)
        order = await _place(repositories, client, product)
        service = _fulfillment_service(repositories)

        results = await asyncio.gather(
            service.fulfill_order(order.id),
            service.fulfill_order(order.id),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], (OrderInFlightError, OrderAlreadyFulfilledError))
        assert await repositories["invoices"].count() == 1

    @pytest.mark.asyncio
    async def test_existing_invoice_blocks_fulfillment(self, repositories):
        client, product = await _seed(repositories)
        order = await _place(repositories, client, product)
        service = _fulfillment_service(repositories)
        await repositories["invoices"].create(
            service.build_invoice(order, client, NOW, invoice_number="INV-00000000-001")
        )

        with pytest.raises(OrderAlreadyFulfilledError):
            await service.fulfill_order(order.id)

        stored = await repositories["orders"].get(order.id)
        assert stored["status"] == "Pending"

    @pytest.mark.asyncio
    async def test_unknown_order(self, repositories):
        with pytest.raises(NotFoundError):
            await _fulfillment_service(repositories).fulfill_order("missing")

    @pytest.mark.asyncio
    async def test_cancelled_order_is_rejected(self, repositories):
        client, product = await _seed(repositories)
        order = await _place(repositories, client, product)
        await repositories["orders"].update(order.id, {"status": "Cancelled"})

        with pytest.raises(BusinessRuleError):
            await _fulfillment_service(repositories).fulfill_order(order.id)

    @pytest.mark.asyncio
    async def test_deleted_client_uses_order_snapshot(self, repositories):
        client, product = await _seed(repositories)
        order = await _place(repositories, client, product)
        await repositories["clients"].delete(client["id"])

        result = await _fulfillment_service(repositories).fulfill_order(order.id)

        assert result.invoice.client.name == "John Doe"
        assert result.invoice.client_cin == "12345678"
        assert result.order.status == "Completed"

    @pytest.mark.asyncio
    async def test_render_failure_is_best_effort(self, repositories):
        client, product = await _seed(repositories)
        order = await _place(repositories, client, product)
        service = _fulfillment_service(repositories, renderer=BrokenRenderer())

        result = await service.fulfill_order(order.id)

        assert result.document_rendered is False
        assert result.order.status == "Completed"

    @pytest.mark.asyncio
    async def test_deleted_product_is_reported(self, repositories):
        client, product = await _seed(repositories)
        order = await _place(repositories, client, product)
        await repositories["products"].delete(product["id"])

        result = await _fulfillment_service(repositories).fulfill_order(order.id)

        assert result.order.status == "Completed"
        assert result.stock_updates[0].success is False
        assert result.stock_updates[0].error

    @pytest.mark.asyncio
    async def test_order_update_failure_keeps_invoice(self, adapter, repositories):
        client, product = await _seed(repositories)
        order = await _place(repositories, client, product)
        service = _fulfillment_service(
            repositories,
            orders=FailingOrderRepository(adapter),
        )

        with pytest.raises(FulfillmentError) as exc_info:
            await service.fulfill_order(order.id)

        assert exc_info.value.step == "update_order"
        assert exc_info.value.invoice_id is not None
        assert await repositories["invoices"].count() == 1
        stored_order = await repositories["orders"].get(order.id)
        assert stored_order["status"] == "Pending"
        stored_product = await repositories["products"].get(product["id"])
        assert stored_product["stock"] == 15

    @pytest.mark.asyncio
    async def test_order_update_failure_compensates_when_enabled(self, adapter, repositories):
        client, product = await _seed(repositories)
        order = await _place(repositories, client, product)
        service = _fulfillment_service(
            repositories,
            orders=FailingOrderRepository(adapter),
            compensate_on_failure=True,
        )

        with pytest.raises(FulfillmentError) as exc_info:
            await service.fulfill_order(order.id)

        assert exc_info.value.invoice_id is None
        assert await repositories["invoices"].count() == 0

    @pytest.mark.asyncio
    async def test_lock_released_after_failure(self, adapter, repositories):
        locks = OrderLockRegistry()
        service = _fulfillment_service(repositories, locks=locks)

        with pytest.raises(NotFoundError):
            await service.fulfill_order("missing")

        assert not locks.is_locked("missing")

    @pytest.mark.asyncio
    async def test_document_written_to_export_dir(self, repositories, tmp_path):
        client, product = await _seed(repositories)
        order = await _place(repositories, client, product)
        renderer = HtmlInvoiceRenderer(export_dir=str(tmp_path / "invoices"))

        result = await _fulfillment_service(repositories, renderer=renderer).fulfill_order(order.id)

        assert result.document_path is not None
        with open(result.document_path, encoding="utf-8") as handle:
            assert result.invoice.invoice_number in handle.read()
