# ==============================================================================
# FULFILLMENT SERVICE - Order to Invoice Workflow
# ==============================================================================
# Turns a Pending order into a Completed order with an invoice and records
# the sale in inventory. Each step is a separate write; nothing is atomic.
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from bizdash.core.constants import (
    BillingConstants,
    ErrorMessages,
    InvoiceStatus,
    OrderStatus,
)
from bizdash.core.exceptions import (
    AlreadyExistsError,
    BusinessRuleError,
    FulfillmentError,
    NotFoundError,
    OrderAlreadyFulfilledError,
)
from bizdash.core.pricing import apply_sale, line_total, round_money
from bizdash.database.adapters.base_adapter import Document
from bizdash.database.repositories import (
    ClientRepository,
    InvoiceRepository,
    OrderRepository,
    ProductRepository,
)
from bizdash.schemas.invoice import (
    FulfillmentResult,
    InvoiceResponse,
    StockUpdateResult,
)
from bizdash.schemas.order import OrderResponse
from bizdash.services.order_locks import OrderLockRegistry
from bizdash.services.rendering import InvoiceRenderer
from bizdash.utils.helpers import add_days, generate_invoice_number, utc_now

logger = logging.getLogger(__name__)


class FulfillmentService:
    """
    Order fulfillment workflow.

    Steps:
        1. Issue date is now, due date is ``due_days`` later
        2. Build the invoice from the order's stored amounts and the
           client's current contact details
        3. Persist the invoice (critical)
        4. Mark the order Completed and link the invoice (critical)
        5. Record the sale on every ordered product (best-effort, concurrent)
        6. Render the invoice document (best-effort)
        7. Reload the client's orders and pending count (best-effort)

    A failure in step 3 or 4 raises ``FulfillmentError`` and leaves the
    order Pending. An invoice persisted before a step 4 failure is kept
    unless ``compensate_on_failure`` is set.

    Example:
        >>> result = await service.fulfill_order(order_id)
        >>> result.order.status
        'Completed'
    """

    def __init__(
        self,
        orders: OrderRepository,
        clients: ClientRepository,
        products: ProductRepository,
        invoices: InvoiceRepository,
        renderer: InvoiceRenderer,
        locks: OrderLockRegistry,
        due_days: int = 30,
        low_stock_threshold: int = 10,
        compensate_on_failure: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._orders = orders
        self._clients = clients
        self._products = products
        self._invoices = invoices
        self._renderer = renderer
        self._locks = locks
        self._due_days = due_days
        self._low_stock_threshold = low_stock_threshold
        self._compensate_on_failure = compensate_on_failure
        self._clock = clock

    # ==========================================================================
    # WORKFLOW
    # ==========================================================================

    async def fulfill_order(self, order_id: str) -> FulfillmentResult:
        """
        Fulfill a Pending order.

        Args:
            order_id: Order to fulfill

        Returns:
            Completed order, its invoice and the best-effort outcomes

        Raises:
            OrderInFlightError: The order is already being fulfilled
            NotFoundError: The order does not exist
            OrderAlreadyFulfilledError: The order already has an invoice
            BusinessRuleError: The order is neither Pending nor Completed
            FulfillmentError: Creating the invoice or updating the order failed
        """
        async with self._locks.hold(order_id):
            order = await self._load_pending_order(order_id)
            logger.info(f"Fulfilling order {order.order_number} ({order_id})")

            now = self._clock()
            client = await self._load_client(order)
            invoice_doc = await self._create_invoice(order, client, now)
            completed = await self._complete_order(order, invoice_doc)
            invoice = InvoiceResponse.model_validate(invoice_doc)

            stock_updates = await self._record_sales(order)
            rendered, document_path = await self._render(invoice)
            client_orders, pending = await self._refresh_client_view(order.client_id)

        logger.info(
            f"Order {order.order_number} fulfilled with invoice {invoice.invoice_number}"
        )
        return FulfillmentResult(
            order=completed,
            invoice=invoice,
            stock_updates=stock_updates,
            document_rendered=rendered,
            document_path=document_path,
            client_orders=client_orders,
            pending_orders_count=pending,
        )

    # ==========================================================================
    # PRECONDITIONS
    # ==========================================================================

    async def _load_pending_order(self, order_id: str) -> OrderResponse:
        document = await self._orders.get(order_id)
        if not document:
            raise NotFoundError(
                message=ErrorMessages.ORDER_NOT_FOUND,
                resource_type="order",
                resource_id=order_id,
            )

        order = OrderResponse.model_validate(document)
        if order.status == OrderStatus.COMPLETED.value:
            raise OrderAlreadyFulfilledError(order_id, order.invoice_id)
        if order.status != OrderStatus.PENDING.value:
            raise BusinessRuleError(
                message=f"Only Pending orders can be fulfilled (order is {order.status})",
                rule="fulfill_pending_only",
                details={"order_id": order_id, "status": order.status},
            )
        return order

    async def _load_client(self, order: OrderResponse) -> Dict[str, Any]:
        client = await self._clients.get(order.client_id) if order.client_id else None
        if client:
            return client

        # Client deleted since the order was placed
        logger.warning(
            f"Client {order.client_id} of order {order.id} not found, "
            f"invoicing with the order's client snapshot"
        )
        return {"id": order.client_id, "cin": order.client_cin, "name": order.client_name}

    # ==========================================================================
    # CRITICAL PATH
    # ==========================================================================

    def build_invoice(
        self,
        order: OrderResponse,
        client: Dict[str, Any],
        now: datetime,
        invoice_number: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Invoice fields for an order.

        Amounts are copied from the order, not recomputed. Line totals are
        recomputed from quantity and unit price.
        """
        return {
            "invoice_number": invoice_number or generate_invoice_number(now),
            "order_id": order.id,
            "client_id": order.client_id,
            "client_cin": client.get("cin") or order.client_cin,
            "client": {
                "name": client.get("name") or order.client_name,
                "email": client.get("email") or "",
                "phone": client.get("phone") or "",
                "location": client.get("location") or "",
            },
            "items": [
                {
                    **item.model_dump(),
                    "total_price": round_money(line_total(item.quantity, item.unit_price)),
                }
                for item in order.items
            ],
            "subtotal": order.subtotal,
            "tax_rate": order.tax_rate,
            "tax_amount": order.tax_amount,
            "total_amount": order.total_amount,
            "issue_date": now,
            "due_date": add_days(now, self._due_days),
            "status": InvoiceStatus.PENDING.value,
            "notes": BillingConstants.INVOICE_NOTES_TEMPLATE.format(
                order_number=order.order_number
            ),
        }

    async def _create_invoice(
        self,
        order: OrderResponse,
        client: Dict[str, Any],
        now: datetime,
    ) -> Document:
        try:
            invoice = await self._invoices.create(self.build_invoice(order, client, now))
        except AlreadyExistsError:
            existing = await self._invoices.get_by_order(order.id)
            logger.warning(f"Order {order.id} already has an invoice")
            raise OrderAlreadyFulfilledError(order.id, existing["id"] if existing else None)
        except Exception as e:
            logger.error(f"Creating invoice for order {order.id} failed: {e}")
            raise FulfillmentError(order.id, "create_invoice", e)

        logger.info(f"Invoice {invoice['invoice_number']} created for order {order.id}")
        return invoice

    async def _complete_order(
        self,
        order: OrderResponse,
        invoice: Document,
    ) -> OrderResponse:
        try:
            updated = await self._orders.update(
                order.id,
                {"status": OrderStatus.COMPLETED.value, "invoice_id": invoice["id"]},
            )
            if updated is None:
                raise NotFoundError(
                    message=ErrorMessages.ORDER_NOT_FOUND,
                    resource_type="order",
                    resource_id=order.id,
                )
        except Exception as e:
            logger.error(f"Completing order {order.id} failed: {e}")
            kept_invoice_id = await self._compensate(order.id, invoice)
            raise FulfillmentError(order.id, "update_order", e, invoice_id=kept_invoice_id)

        return OrderResponse.model_validate(updated)

    async def _compensate(self, order_id: str, invoice: Document) -> Optional[str]:
        """Delete the orphan invoice when enabled; returns the id of a kept invoice."""
        if not self._compensate_on_failure:
            logger.warning(
                f"Invoice {invoice['id']} kept although order {order_id} is still Pending"
            )
            return invoice["id"]

        try:
            await self._invoices.delete(invoice["id"])
        except Exception as e:
            logger.error(f"Compensating delete of invoice {invoice['id']} failed: {e}")
            return invoice["id"]

        logger.info(f"Invoice {invoice['id']} deleted after failed fulfillment")
        return None

    # ==========================================================================
    # BEST-EFFORT STEPS
    # ==========================================================================

    async def _record_sales(self, order: OrderResponse) -> List[StockUpdateResult]:
        """Apply every sale concurrently; failures are logged and reported."""
        quantities: Dict[str, int] = {}
        for item in order.items:
            if item.product_id:
                quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity

        return list(
            await asyncio.gather(
                *(self._record_sale(pid, qty) for pid, qty in quantities.items())
            )
        )

    async def _record_sale(self, product_id: str, quantity: int) -> StockUpdateResult:
        try:
            product = await self._products.get(product_id)
            if not product:
                raise NotFoundError(
                    message=ErrorMessages.PRODUCT_NOT_FOUND,
                    resource_type="product",
                    resource_id=product_id,
                )
            changes = apply_sale(product, quantity, self._low_stock_threshold)
            if await self._products.update(product_id, changes) is None:
                raise NotFoundError(
                    message=ErrorMessages.PRODUCT_NOT_FOUND,
                    resource_type="product",
                    resource_id=product_id,
                )
        except Exception as e:
            logger.warning(f"Stock update for product {product_id} failed: {e}")
            return StockUpdateResult(
                product_id=product_id,
                quantity=quantity,
                success=False,
                error=str(e),
            )

        return StockUpdateResult(
            product_id=product_id,
            quantity=quantity,
            success=True,
            **changes,
        )

    async def _render(self, invoice: InvoiceResponse) -> Tuple[bool, Optional[str]]:
        try:
            document = await self._renderer.render(invoice)
        except Exception as e:
            logger.warning(f"Rendering invoice {invoice.invoice_number} failed: {e}")
            return False, None
        return True, document.path

    async def _refresh_client_view(
        self,
        client_id: Optional[str],
    ) -> Tuple[List[OrderResponse], Optional[int]]:
        if not client_id:
            return [], None
        try:
            documents, pending = await asyncio.gather(
                self._orders.list_for_client(client_id),
                self._orders.count_pending_for_client(client_id),
            )
        except Exception as e:
            logger.warning(f"Refreshing orders of client {client_id} failed: {e}")
            return [], None
        return [OrderResponse.model_validate(d) for d in documents], pending
