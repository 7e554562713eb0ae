# ==============================================================================
# HELPER UTILITIES
# ==============================================================================
# Common utility functions used across the application
# ==============================================================================

from __future__ import annotations

import random
import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from bizdash.core.constants import BillingConstants

_WHITESPACE = re.compile(r"\s+")


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def epoch_millis(now: Optional[datetime] = None) -> int:
    """Milliseconds since the Unix epoch for ``now`` (defaults to current time)."""
    now = now or utc_now()
    return int(now.timestamp() * 1000)


def add_days(moment: datetime, days: int) -> datetime:
    """Return ``moment`` shifted by a number of days."""
    return moment + timedelta(days=days)


def generate_invoice_number(
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Generate a human-friendly invoice number.

    Format is ``INV-<last 8 digits of epoch millis>-<000..999>``. The number
    is not guaranteed unique and must never be used as a key.

    Args:
        now: Moment to derive the timestamp part from
        rng: Random source for the suffix

    Returns:
        Invoice number (e.g., INV-12345678-042)
    """
    rng = rng or random
    millis = str(epoch_millis(now))[-BillingConstants.INVOICE_TIMESTAMP_DIGITS:]
    suffix = str(rng.randint(0, 999)).zfill(BillingConstants.INVOICE_SUFFIX_DIGITS)
    return f"{BillingConstants.INVOICE_PREFIX}-{millis}-{suffix}"


def generate_order_number(now: Optional[datetime] = None) -> str:
    """Default order number, ``ORD-<epoch millis>``."""
    return f"{BillingConstants.ORDER_PREFIX}-{epoch_millis(now)}"


def sanitize_string(value: Optional[str], max_length: int = 255) -> str:
    """
    Collapse internal whitespace, trim and truncate.

    Args:
        value: Input string
        max_length: Maximum allowed length

    Returns:
        Sanitized string
    """
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip()[:max_length]


def normalize_reference(value: Optional[str], max_length: int = 50) -> str:
    """Remove all whitespace, uppercase and truncate a product reference."""
    if not value:
        return ""
    return _WHITESPACE.sub("", value).upper()[:max_length]


def dedupe_preserving_order(values: Iterable[str]) -> List[str]:
    """Drop empty values and repeats, keeping first occurrences in order."""
    seen = set()
    result = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result
