# ==============================================================================
# ORDERS ENDPOINTS - Order Intake and Fulfillment Routes
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from bizdash.api.dependencies import FulfillmentServiceDep, OrderServiceDep
from bizdash.core.constants import SuccessMessages
from bizdash.schemas.base import APIResponse
from bizdash.schemas.invoice import FulfillmentResult
from bizdash.schemas.order import OrderCreate, OrderResponse

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=APIResponse[OrderResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description=(
        "Create a Pending order. Every item must reference an existing "
        "product with enough stock; prices are taken from the catalog."
    ),
)
async def create_order(
    schema: OrderCreate,
    service: OrderServiceDep,
) -> APIResponse[OrderResponse]:
    order = await service.create_order(schema)
    return APIResponse.ok(data=order, message=SuccessMessages.ORDER_PLACED)


@router.get(
    "",
    response_model=APIResponse[List[OrderResponse]],
    summary="List orders",
)
async def list_orders(
    service: OrderServiceDep,
    client_id: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(
        None,
        alias="status",
        pattern="^(Pending|Processing|Completed|Cancelled)$",
    ),
) -> APIResponse[List[OrderResponse]]:
    orders = await service.list_orders(client_id=client_id, status=status_filter)
    return APIResponse.ok(data=orders)


@router.get(
    "/{order_id}",
    response_model=APIResponse[OrderResponse],
    summary="Get order",
)
async def get_order(
    order_id: str,
    service: OrderServiceDep,
) -> APIResponse[OrderResponse]:
    order = await service.get_by_id(order_id)
    return APIResponse.ok(data=order)


@router.post(
    "/{order_id}/fulfill",
    response_model=APIResponse[FulfillmentResult],
    summary="Fulfill order",
    description=(
        "Generate the invoice, mark the order Completed and record the "
        "sale in inventory. Inventory and document rendering are "
        "best-effort and reported in the result."
    ),
)
async def fulfill_order(
    order_id: str,
    service: FulfillmentServiceDep,
) -> APIResponse[FulfillmentResult]:
    result = await service.fulfill_order(order_id)
    return APIResponse.ok(data=result, message=SuccessMessages.ORDER_FULFILLED)
