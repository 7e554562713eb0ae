# ==============================================================================
# DASHBOARD ENDPOINTS
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from bizdash.api.dependencies import DashboardServiceDep
from bizdash.schemas.base import APIResponse
from bizdash.schemas.dashboard import DashboardStats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "/stats",
    response_model=APIResponse[DashboardStats],
    summary="Dashboard statistics",
    description="Revenue from Paid invoices plus client, invoice and product counts.",
)
async def dashboard_stats(service: DashboardServiceDep) -> APIResponse[DashboardStats]:
    stats = await service.get_stats()
    return APIResponse.ok(data=stats)
