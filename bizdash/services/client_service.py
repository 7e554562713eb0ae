# ==============================================================================
# CLIENT SERVICE - Customer Management and List View
# ==============================================================================
# Business logic for clients and their pending-order aggregation
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import List

from bizdash.core.constants import ClientFilter
from bizdash.database.adapters.base_adapter import Document
from bizdash.database.repositories import ClientRepository, OrderRepository
from bizdash.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from bizdash.schemas.dashboard import ListSummary
from bizdash.schemas.order import OrderResponse
from bizdash.services.base_service import BaseService
from bizdash.utils.filters import filter_clients, status_counts

logger = logging.getLogger(__name__)


class ClientService(BaseService[ClientCreate, ClientUpdate, ClientResponse]):
    """
    Client service.

    Besides CRUD, builds the client list view: every client joined with
    the number of its Pending orders.
    """

    resource_name = "Client"

    def __init__(
        self,
        clients: ClientRepository,
        orders: OrderRepository,
    ) -> None:
        super().__init__(clients)
        self._orders = orders

    def _to_response(self, document: Document) -> ClientResponse:
        return ClientResponse.model_validate(document)

    # ==========================================================================
    # LIST VIEW
    # ==========================================================================

    async def list_with_pending_counts(self) -> List[ClientResponse]:
        """
        All clients, newest first, each with ``pending_orders_count``.

        Issues one count query per client (N+1). The queries are sent
        together and joined, so the view is ready once the slowest
        count returns.
        """
        documents = await self._repository.list_newest_first()
        counts = await asyncio.gather(
            *(self._orders.count_pending_for_client(d["id"]) for d in documents)
        )
        logger.debug(f"Counted pending orders for {len(documents)} clients")
        return [
            self._to_response({**document, "pending_orders_count": count})
            for document, count in zip(documents, counts)
        ]

    async def list_view(
        self,
        status: str = ClientFilter.ALL.value,
        query: str = "",
    ) -> List[ClientResponse]:
        """Client list filtered by status and search text, pending first."""
        clients = await self.list_with_pending_counts()
        return filter_clients(clients, status=status, query=query)

    async def summary(self) -> ListSummary:
        """Total clients and the count behind each status filter."""
        clients = await self.list_with_pending_counts()
        return ListSummary(
            total=len(clients),
            counts=status_counts(clients, [f.value for f in ClientFilter]),
        )

    async def get_with_pending_count(self, client_id: str) -> ClientResponse:
        """Single client with its pending-order count."""
        document = await self.get_document(client_id)
        count = await self._orders.count_pending_for_client(client_id)
        return self._to_response({**document, "pending_orders_count": count})

    async def pending_count(self, client_id: str) -> int:
        return await self._orders.count_pending_for_client(client_id)

    async def get_orders(self, client_id: str) -> List[OrderResponse]:
        """
        A client's orders, newest first.

        Raises:
            NotFoundError: If the client does not exist
        """
        await self.get_document(client_id)
        documents = await self._orders.list_for_client(client_id)
        return [OrderResponse.model_validate(d) for d in documents]
