# ==============================================================================
# ORDER SCHEMAS - Order Intake
# ==============================================================================
# Request/Response schemas for order management
# ==============================================================================

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field, model_validator

from bizdash.schemas.base import BaseSchema, Money, TaxRate, TimestampSchema


class OrderItemCreate(BaseSchema):
    """Requested line item; description and price are snapshotted server-side."""

    product_id: Optional[str] = Field(
        None,
        description="Product to order",
    )
    quantity: int = Field(
        1,
        ge=1,
        description="Quantity to order",
    )


class OrderItem(BaseSchema):
    """Line item embedded in an order or invoice."""

    product_id: Optional[str] = Field(
        None,
        description="Product ID",
    )
    reference: str = Field(
        "",
        description="Product reference at order time",
    )
    description: str = Field(
        "",
        description="Product name at order time",
    )
    quantity: int = Field(
        ...,
        ge=1,
        description="Ordered quantity",
    )
    unit_price: Money = Field(
        ...,
        description="Unit price at order time",
    )
    total_price: Money = Field(
        ...,
        description="Line total (quantity x unit price)",
    )


class OrderCreate(BaseSchema):
    """
    Schema for creating an order.

    The tax rate may be sent either as a fraction (``tax_rate``) or as a
    whole percentage (``tax_percent``); it is stored as a fraction.
    """

    client_id: Optional[str] = Field(
        None,
        description="Ordering client",
    )
    order_number: Optional[str] = Field(
        None,
        max_length=100,
        description="Free-text order number, defaults to ORD-<epoch millis>",
    )
    items: List[OrderItemCreate] = Field(
        default_factory=list,
        description="Requested items",
    )
    tax_rate: Optional[Decimal] = Field(
        None,
        ge=0,
        le=1,
        description="Tax rate as a fraction (0.19 = 19%)",
    )
    tax_percent: Optional[Decimal] = Field(
        None,
        ge=0,
        le=100,
        description="Tax rate as a percentage (19 = 19%)",
    )

    @model_validator(mode="after")
    def single_tax_representation(self) -> "OrderCreate":
        """Reject requests that send both tax representations."""
        if self.tax_rate is not None and self.tax_percent is not None:
            raise ValueError("Send either tax_rate or tax_percent, not both")
        return self

    def resolved_tax_rate(self, default: Decimal) -> Decimal:
        """Tax rate as a fraction, falling back to ``default``."""
        if self.tax_percent is not None:
            return self.tax_percent / 100
        if self.tax_rate is not None:
            return self.tax_rate
        return default


class OrderResponse(TimestampSchema):
    """Schema for order response."""

    id: str = Field(
        ...,
        description="Order unique identifier",
    )
    client_id: Optional[str] = Field(
        None,
        description="Ordering client",
    )
    client_cin: str = Field(
        "",
        description="Client CIN at order time",
    )
    client_name: str = Field(
        "",
        description="Client name at order time",
    )
    order_number: str = Field(
        "",
        description="Human-readable order number",
    )
    items: List[OrderItem] = Field(
        default_factory=list,
        description="Order line items",
    )
    subtotal: Money = Field(
        Decimal(0),
        description="Items subtotal",
    )
    tax_rate: TaxRate = Field(
        Decimal(0),
        description="Tax rate as a fraction",
    )
    tax_amount: Money = Field(
        Decimal(0),
        description="Tax amount",
    )
    total_amount: Money = Field(
        Decimal(0),
        description="Order total",
    )
    status: str = Field(
        ...,
        description="Order status",
    )
    invoice_id: Optional[str] = Field(
        None,
        description="Invoice generated from this order",
    )
