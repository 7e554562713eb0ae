# ==============================================================================
# PRICING - Order Totals and Inventory Status Rules
# ==============================================================================
# Pure functions shared by order intake and order fulfillment
# Money arithmetic runs on Decimal and is rounded once, at the output
# ==============================================================================

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Mapping, NamedTuple, Optional

from bizdash.core.constants import InventoryConstants, ProductStatus

CENTS = Decimal("0.01")


class Totals(NamedTuple):
    """Rounded amounts of an order or invoice."""

    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal


def to_decimal(value: Any) -> Decimal:
    """
    Convert a loosely-typed number to Decimal.

    Missing, boolean or non-numeric values count as zero. Floats go
    through ``str`` so that ``10.005`` stays ``10.005``.
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return Decimal(0)
    if not result.is_finite():
        return Decimal(0)
    return result


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def line_total(quantity: Any, unit_price: Any) -> Decimal:
    """Unrounded ``quantity * unit_price`` of a single line item."""
    return to_decimal(quantity) * to_decimal(unit_price)


def calculate_totals(items: Iterable[Any], tax_rate: Any) -> Totals:
    """
    Compute subtotal, tax and total for a sequence of line items.

    Args:
        items: Objects or mappings exposing ``quantity`` and ``unit_price``
        tax_rate: Tax rate as a fraction (0.2 = 20%)

    Returns:
        Totals rounded to 2 decimal places

    Example:
        >>> calculate_totals([{"quantity": 2, "unit_price": 10.005}], 0.2)
        Totals(subtotal=Decimal('20.01'), tax_amount=Decimal('4.00'), total_amount=Decimal('24.01'))
    """
    subtotal = Decimal(0)
    for item in items:
        subtotal += line_total(_field(item, "quantity"), _field(item, "unit_price"))

    tax_amount = subtotal * to_decimal(tax_rate)
    total_amount = subtotal + tax_amount

    return Totals(
        subtotal=round_money(subtotal),
        tax_amount=round_money(tax_amount),
        total_amount=round_money(total_amount),
    )


# ==============================================================================
# INVENTORY RULES
# ==============================================================================

def compute_product_status(
    current_status: Optional[str],
    new_stock: int,
    threshold: int = InventoryConstants.LOW_STOCK_THRESHOLD,
) -> Optional[str]:
    """
    Recompute a product status after a stock change.

    Stock at or below zero is always Out of Stock. Stock at or below the
    threshold becomes Low Stock unless the product is Arriving Soon.
    Otherwise the current status is kept.
    """
    if new_stock <= 0:
        return ProductStatus.OUT_OF_STOCK.value
    if new_stock <= threshold and current_status != ProductStatus.ARRIVING_SOON.value:
        return ProductStatus.LOW_STOCK.value
    return current_status


def apply_sale(
    product: Mapping[str, Any],
    quantity: int,
    threshold: int = InventoryConstants.LOW_STOCK_THRESHOLD,
) -> Dict[str, Any]:
    """
    Build the product update that records ``quantity`` units sold.

    Args:
        product: Current product document
        quantity: Units sold
        threshold: Low stock threshold

    Returns:
        Partial update with ``stock``, ``sales`` and ``status``
    """
    new_stock = int(product.get("stock") or 0) - quantity
    new_sales = int(product.get("sales") or 0) + quantity
    return {
        "stock": new_stock,
        "sales": new_sales,
        "status": compute_product_status(product.get("status"), new_stock, threshold),
    }
