# ==============================================================================
# ORDER LOCKS - In-Flight Fulfillment Guard
# ==============================================================================
# One fulfillment per order at a time within this process
# Cross-process duplicates are stopped by the unique index on invoices.order_id
# ==============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict
from uuid import uuid4

from bizdash.core.exceptions import OrderInFlightError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LockToken:
    """Proof of holding the fulfillment lock for one order."""

    order_id: str
    token: str = field(default_factory=lambda: uuid4().hex)


class OrderLockRegistry:
    """
    Registry of orders currently being fulfilled.

    Acquire and release run without awaiting, so they are atomic with
    respect to other coroutines on the same event loop.

    Example:
        >>> locks = OrderLockRegistry()
        >>> async with locks.hold("order-1") as token:
        ...     await fulfill(...)
    """

    def __init__(self) -> None:
        self._held: Dict[str, LockToken] = {}

    def acquire(self, order_id: str) -> LockToken:
        """
        Take the lock for an order.

        Raises:
            OrderInFlightError: If the order is already locked
        """
        if order_id in self._held:
            raise OrderInFlightError(order_id)
        token = LockToken(order_id=order_id)
        self._held[order_id] = token
        return token

    def release(self, token: LockToken) -> None:
        """Release a lock. Stale tokens are ignored."""
        if self._held.get(token.order_id) == token:
            del self._held[token.order_id]
        else:
            logger.warning(f"Ignoring stale lock token for order {token.order_id}")

    def is_locked(self, order_id: str) -> bool:
        return order_id in self._held

    @asynccontextmanager
    async def hold(self, order_id: str) -> AsyncIterator[LockToken]:
        """Hold the lock for the duration of the block, released on error too."""
        token = self.acquire(order_id)
        try:
            yield token
        finally:
            self.release(token)
