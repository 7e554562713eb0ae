# ==============================================================================
# BUSINESS REPOSITORIES - Clients, Products, Orders, Invoices
# ==============================================================================
# One repository per top-level collection
# Records reference each other by id only; nothing cascades
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from bizdash.core.constants import DatabaseConstants, InvoiceStatus, OrderStatus
from bizdash.database.adapters.base_adapter import Document
from bizdash.database.repositories.base_repository import BaseRepository


class ClientRepository(BaseRepository):
    """Client documents."""

    collection_name = DatabaseConstants.CLIENTS_COLLECTION

    async def list_newest_first(self) -> List[Document]:
        """All clients ordered by creation time, newest first."""
        return await self.list(sort_by="created_at", sort_order="desc")


class ProductRepository(BaseRepository):
    """Product documents."""

    collection_name = DatabaseConstants.PRODUCTS_COLLECTION


class OrderRepository(BaseRepository):
    """Order documents with embedded line items."""

    collection_name = DatabaseConstants.ORDERS_COLLECTION

    async def list_for_client(self, client_id: str) -> List[Document]:
        """A client's orders, newest first."""
        return await self.list(
            filters={"client_id": client_id},
            sort_by="created_at",
            sort_order="desc",
        )

    async def count_pending_for_client(self, client_id: str) -> int:
        """Number of Pending orders placed by a client."""
        return await self.count(
            {"client_id": client_id, "status": OrderStatus.PENDING.value}
        )


class InvoiceRepository(BaseRepository):
    """Invoice documents; ``order_id`` is unique."""

    collection_name = DatabaseConstants.INVOICES_COLLECTION

    async def get_by_order(self, order_id: str) -> Optional[Document]:
        """The invoice generated from an order, if any."""
        return await self.find_one({"order_id": order_id})

    async def list_paid(self) -> List[Document]:
        """Invoices whose status is Paid."""
        return await self.list(filters={"status": InvoiceStatus.PAID.value})
