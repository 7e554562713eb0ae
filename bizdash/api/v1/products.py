# ==============================================================================
# PRODUCTS ENDPOINTS - Catalog Routes
# ==============================================================================
# Product CRUD, filtered list and catalog statistics
# ==============================================================================

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, status

from bizdash.api.dependencies import ProductServiceDep
from bizdash.core.constants import SuccessMessages
from bizdash.schemas.base import APIResponse
from bizdash.schemas.dashboard import ListSummary, ProductStats
from bizdash.schemas.product import ProductCreate, ProductResponse, ProductUpdate

router = APIRouter(prefix="/products", tags=["Products"])


@router.post(
    "",
    response_model=APIResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(
    schema: ProductCreate,
    service: ProductServiceDep,
) -> APIResponse[ProductResponse]:
    """Create a new product."""
    product = await service.create(schema)
    return APIResponse.ok(data=product, message=SuccessMessages.CREATED)


@router.get(
    "",
    response_model=APIResponse[List[ProductResponse]],
    summary="List products",
    description="Products filtered by exact status and by name, reference or id.",
)
async def list_products(
    service: ProductServiceDep,
    status_filter: str = Query(
        "All",
        alias="status",
        pattern="^(All|In Stock|Low Stock|Out of Stock|Arriving Soon)$",
    ),
    q: str = Query("", max_length=200, description="Search text"),
) -> APIResponse[List[ProductResponse]]:
    products = await service.list_view(status=status_filter, query=q)
    return APIResponse.ok(data=products)


@router.get(
    "/stats",
    response_model=APIResponse[ProductStats],
    summary="Catalog statistics",
)
async def product_stats(service: ProductServiceDep) -> APIResponse[ProductStats]:
    stats = await service.get_stats()
    return APIResponse.ok(data=stats)


@router.get(
    "/summary",
    response_model=APIResponse[ListSummary],
    summary="Product list summary",
    description="Total products and the number each status filter would show.",
)
async def product_summary(service: ProductServiceDep) -> APIResponse[ListSummary]:
    summary = await service.summary()
    return APIResponse.ok(data=summary)


@router.get(
    "/{product_id}",
    response_model=APIResponse[ProductResponse],
    summary="Get product",
)
async def get_product(
    product_id: str,
    service: ProductServiceDep,
) -> APIResponse[ProductResponse]:
    product = await service.get_by_id(product_id)
    return APIResponse.ok(data=product)


@router.patch(
    "/{product_id}",
    response_model=APIResponse[ProductResponse],
    summary="Update product",
)
async def update_product(
    product_id: str,
    schema: ProductUpdate,
    service: ProductServiceDep,
) -> APIResponse[ProductResponse]:
    product = await service.update(product_id, schema)
    return APIResponse.ok(data=product, message=SuccessMessages.UPDATED)


@router.delete(
    "/{product_id}",
    response_model=APIResponse[None],
    summary="Delete product",
)
async def delete_product(
    product_id: str,
    service: ProductServiceDep,
) -> APIResponse[None]:
    await service.delete(product_id)
    return APIResponse.ok(data=None, message=SuccessMessages.DELETED)
