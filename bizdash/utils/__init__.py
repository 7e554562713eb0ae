# ==============================================================================
# UTILS PACKAGE INITIALIZATION
# ==============================================================================

"""
Utilities Module
================

Helper functions and utilities:
- Order and invoice number generators
- Date/time utilities
- List filter, search and sort pipeline
"""

from bizdash.utils.helpers import (
    utc_now,
    generate_invoice_number,
    generate_order_number,
)
from bizdash.utils.filters import (
    filter_clients,
    filter_products,
    pending_first,
    status_counts,
)

__all__ = [
    "utc_now",
    "generate_invoice_number",
    "generate_order_number",
    "filter_clients",
    "filter_products",
    "pending_first",
    "status_counts",
]
