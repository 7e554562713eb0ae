# ==============================================================================
# INVOICE SCHEMAS - Billing Documents
# ==============================================================================
# Request/Response schemas for invoices and order fulfillment
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from bizdash.core.constants import InvoiceStatus
from bizdash.schemas.base import BaseSchema, Money, TaxRate, TimestampSchema
from bizdash.schemas.order import OrderItem, OrderResponse


class InvoiceClient(BaseSchema):
    """Client contact snapshot printed on the invoice."""

    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""


class InvoiceStatusUpdate(BaseSchema):
    """Schema for changing an invoice's payment status."""

    status: InvoiceStatus = Field(
        ...,
        description="Paid, Pending or Overdue",
    )


class InvoiceResponse(TimestampSchema):
    """Schema for invoice response."""

    id: str = Field(
        ...,
        description="Invoice unique identifier",
    )
    invoice_number: str = Field(
        ...,
        description="Human-friendly invoice number",
    )
    order_id: str = Field(
        ...,
        description="Order this invoice was generated from",
    )
    client_id: Optional[str] = Field(
        None,
        description="Billed client",
    )
    client_cin: str = Field(
        "",
        description="Client CIN",
    )
    client: InvoiceClient = Field(
        default_factory=InvoiceClient,
        description="Client contact snapshot",
    )
    items: List[OrderItem] = Field(
        default_factory=list,
        description="Invoiced line items",
    )
    subtotal: Money = Field(Decimal(0), description="Items subtotal")
    tax_rate: TaxRate = Field(Decimal(0), description="Tax rate as a fraction")
    tax_amount: Money = Field(Decimal(0), description="Tax amount")
    total_amount: Money = Field(Decimal(0), description="Invoice total")
    issue_date: datetime = Field(
        ...,
        description="Issue date",
    )
    due_date: datetime = Field(
        ...,
        description="Payment due date",
    )
    status: str = Field(
        InvoiceStatus.PENDING.value,
        description="Payment status",
    )
    notes: str = Field(
        "",
        description="Free-text notes",
    )


class StockUpdateResult(BaseSchema):
    """Outcome of one best-effort inventory adjustment."""

    product_id: str
    quantity: int
    success: bool
    stock: Optional[int] = None
    sales: Optional[int] = None
    status: Optional[str] = None
    error: Optional[str] = None


class FulfillmentResult(BaseSchema):
    """
    Outcome of fulfilling an order.

    The order and invoice reflect the critical path. Inventory, document
    rendering and the refreshed client view are best-effort and report
    their own outcome.
    """

    order: OrderResponse
    invoice: InvoiceResponse
    stock_updates: List[StockUpdateResult] = Field(default_factory=list)
    document_rendered: bool = False
    document_path: Optional[str] = None
    client_orders: List[OrderResponse] = Field(default_factory=list)
    pending_orders_count: Optional[int] = None
