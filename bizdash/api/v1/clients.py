# ==============================================================================
# CLIENTS ENDPOINTS - Customer Routes
# ==============================================================================
# Client CRUD, the filtered client list view and per-client orders
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, status

from bizdash.api.dependencies import ClientServiceDep
from bizdash.core.constants import SuccessMessages
from bizdash.schemas.base import APIResponse
from bizdash.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from bizdash.schemas.dashboard import ListSummary
from bizdash.schemas.order import OrderResponse

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.post(
    "",
    response_model=APIResponse[ClientResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create client",
)
async def create_client(
    schema: ClientCreate,
    service: ClientServiceDep,
) -> APIResponse[ClientResponse]:
    """Create a new client."""
    client = await service.create(schema)
    return APIResponse.ok(data=client, message=SuccessMessages.CREATED)


@router.get(
    "",
    response_model=APIResponse[List[ClientResponse]],
    summary="List clients",
    description=(
        "Clients with their pending-order counts, filtered by status "
        "(All, Active, Inactive, PendingOrders) and search text. Clients "
        "with pending orders come first."
    ),
)
async def list_clients(
    service: ClientServiceDep,
    status_filter: str = Query(
        "All",
        alias="status",
        pattern="^(All|Active|Inactive|PendingOrders)$",
    ),
    q: str = Query("", max_length=200, description="Search text"),
) -> APIResponse[List[ClientResponse]]:
    clients = await service.list_view(status=status_filter, query=q)
    return APIResponse.ok(data=clients)


@router.get(
    "/summary",
    response_model=APIResponse[ListSummary],
    summary="Client list summary",
    description="Total clients and the number each status filter would show.",
)
async def client_summary(service: ClientServiceDep) -> APIResponse[ListSummary]:
    summary = await service.summary()
    return APIResponse.ok(data=summary)


@router.get(
    "/{client_id}",
    response_model=APIResponse[ClientResponse],
    summary="Get client",
)
async def get_client(
    client_id: str,
    service: ClientServiceDep,
) -> APIResponse[ClientResponse]:
    client = await service.get_with_pending_count(client_id)
    return APIResponse.ok(data=client)


@router.patch(
    "/{client_id}",
    response_model=APIResponse[ClientResponse],
    summary="Update client",
)
async def update_client(
    client_id: str,
    schema: ClientUpdate,
    service: ClientServiceDep,
) -> APIResponse[ClientResponse]:
    client = await service.update(client_id, schema)
    return APIResponse.ok(data=client, message=SuccessMessages.UPDATED)


@router.delete(
    "/{client_id}",
    response_model=APIResponse[None],
    summary="Delete client",
    description="Delete a client. Its orders and invoices are kept.",
)
async def delete_client(
    client_id: str,
    service: ClientServiceDep,
) -> APIResponse[None]:
    await service.delete(client_id)
    return APIResponse.ok(data=None, message=SuccessMessages.DELETED)


@router.get(
    "/{client_id}/orders",
    response_model=APIResponse[List[OrderResponse]],
    summary="List client orders",
)
async def list_client_orders(
    client_id: str,
    service: ClientServiceDep,
) -> APIResponse[List[OrderResponse]]:
    orders = await service.get_orders(client_id)
    return APIResponse.ok(data=orders)
