# ==============================================================================
# ORDER SERVICE - Order Intake
# ==============================================================================
# Validates requested items against the catalog, snapshots prices and
# client identity, computes totals and stores a Pending order
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from bizdash.core.constants import ErrorMessages, OrderStatus
from bizdash.core.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from bizdash.core.pricing import calculate_totals, line_total, round_money, to_decimal
from bizdash.database.adapters.base_adapter import Document
from bizdash.database.repositories import (
    ClientRepository,
    OrderRepository,
    ProductRepository,
)
from bizdash.schemas.order import OrderCreate, OrderResponse
from bizdash.services.base_service import BaseService
from bizdash.utils.helpers import generate_order_number

logger = logging.getLogger(__name__)


class OrderService(BaseService[OrderCreate, OrderCreate, OrderResponse]):
    """
    Order service for order intake and lookup.

    Stock is checked but not decremented here; inventory moves only when
    the order is fulfilled.
    """

    resource_name = "Order"

    def __init__(
        self,
        orders: OrderRepository,
        clients: ClientRepository,
        products: ProductRepository,
        default_tax_rate: Decimal,
    ) -> None:
        super().__init__(orders)
        self._clients = clients
        self._products = products
        self._default_tax_rate = default_tax_rate

    def _to_response(self, document: Document) -> OrderResponse:
        return OrderResponse.model_validate(document)

    # ==========================================================================
    # ORDER OPERATIONS
    # ==========================================================================

    def _validate_request(self, schema: OrderCreate) -> None:
        errors: Dict[str, Any] = {}
        if not schema.client_id:
            errors["client_id"] = "Please select a client"
        if not schema.items:
            errors["items"] = ErrorMessages.NO_ORDER_ITEMS
        else:
            missing = [i for i, item in enumerate(schema.items) if not item.product_id]
            if missing:
                errors["items"] = {
                    "message": ErrorMessages.ITEM_WITHOUT_PRODUCT,
                    "indexes": missing,
                }
        if errors:
            raise ValidationError("Invalid order", errors=errors)

    async def create_order(self, schema: OrderCreate) -> OrderResponse:
        """
        Create a Pending order.

        Args:
            schema: Client, requested items and optional tax rate

        Returns:
            Stored order

        Raises:
            ValidationError: Missing client, no items or an item without product
            NotFoundError: Unknown client or product
            InsufficientStockError: Any item asks for more than is in stock
        """
        self._validate_request(schema)

        client = await self._clients.get(schema.client_id)
        if not client:
            raise NotFoundError(
                message=ErrorMessages.CLIENT_NOT_FOUND,
                resource_type="client",
                resource_id=schema.client_id,
            )

        products = await asyncio.gather(
            *(self._products.get(item.product_id) for item in schema.items)
        )

        items: List[Dict[str, Any]] = []
        stock_issues: List[Dict[str, Any]] = []
        for requested, product in zip(schema.items, products):
            if not product:
                raise NotFoundError(
                    message=ErrorMessages.PRODUCT_NOT_FOUND,
                    resource_type="product",
                    resource_id=requested.product_id,
                )

            available = int(product.get("stock") or 0)
            if requested.quantity > available:
                stock_issues.append({
                    "product_id": product["id"],
                    "name": product.get("name", ""),
                    "requested": requested.quantity,
                    "available": available,
                })

            unit_price = to_decimal(product.get("price"))
            items.append({
                "product_id": product["id"],
                "reference": product.get("reference") or product["id"],
                "description": product.get("name", ""),
                "quantity": requested.quantity,
                "unit_price": unit_price,
                "total_price": round_money(line_total(requested.quantity, unit_price)),
            })

        if stock_issues:
            raise InsufficientStockError(stock_issues)

        tax_rate = schema.resolved_tax_rate(self._default_tax_rate)
        totals = calculate_totals(items, tax_rate)

        document = await self._repository.create({
            "client_id": client["id"],
            "client_cin": client.get("cin", ""),
            "client_name": client.get("name", ""),
            "order_number": schema.order_number or generate_order_number(),
            "items": items,
            "subtotal": totals.subtotal,
            "tax_rate": tax_rate,
            "tax_amount": totals.tax_amount,
            "total_amount": totals.total_amount,
            "status": OrderStatus.PENDING.value,
        })
        logger.info(
            f"Order {document['order_number']} created for client {client['id']} "
            f"({len(items)} items, total {totals.total_amount})"
        )
        return self._to_response(document)

    async def list_orders(
        self,
        client_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[OrderResponse]:
        """Orders filtered by client and/or status, newest first."""
        filters: Dict[str, Any] = {}
        if client_id:
            filters["client_id"] = client_id
        if status:
            filters["status"] = status
        return await self.get_all(filters=filters or None)
