# ==============================================================================
# INVOICES ENDPOINTS - Billing Routes
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query
from fastapi.responses import HTMLResponse

from bizdash.api.dependencies import InvoiceServiceDep
from bizdash.core.constants import SuccessMessages
from bizdash.schemas.base import APIResponse
from bizdash.schemas.invoice import InvoiceResponse, InvoiceStatusUpdate

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.get(
    "",
    response_model=APIResponse[List[InvoiceResponse]],
    summary="List invoices",
)
async def list_invoices(
    service: InvoiceServiceDep,
    status_filter: Optional[str] = Query(
        None,
        alias="status",
        pattern="^(Paid|Pending|Overdue)$",
    ),
    client_id: Optional[str] = Query(None),
) -> APIResponse[List[InvoiceResponse]]:
    invoices = await service.list_invoices(status=status_filter, client_id=client_id)
    return APIResponse.ok(data=invoices)


@router.get(
    "/{invoice_id}",
    response_model=APIResponse[InvoiceResponse],
    summary="Get invoice",
)
async def get_invoice(
    invoice_id: str,
    service: InvoiceServiceDep,
) -> APIResponse[InvoiceResponse]:
    invoice = await service.get_by_id(invoice_id)
    return APIResponse.ok(data=invoice)


@router.patch(
    "/{invoice_id}",
    response_model=APIResponse[InvoiceResponse],
    summary="Update invoice status",
)
async def update_invoice_status(
    invoice_id: str,
    schema: InvoiceStatusUpdate,
    service: InvoiceServiceDep,
) -> APIResponse[InvoiceResponse]:
    invoice = await service.update_status(invoice_id, schema)
    return APIResponse.ok(data=invoice, message=SuccessMessages.INVOICE_UPDATED)


@router.get(
    "/{invoice_id}/document",
    response_class=HTMLResponse,
    summary="Invoice document",
    description="Printable HTML rendering of the invoice.",
)
async def get_invoice_document(
    invoice_id: str,
    service: InvoiceServiceDep,
) -> HTMLResponse:
    document = await service.render_document(invoice_id)
    return HTMLResponse(
        content=document.content,
        headers={"Content-Disposition": f'inline; filename="{document.filename}"'},
    )
