# ==============================================================================
# INVOICE SERVICE - Billing Documents
# ==============================================================================
# Invoice lookup, payment status changes and on-demand documents
# Invoices are created only by order fulfillment
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from bizdash.database.adapters.base_adapter import Document
from bizdash.database.repositories import InvoiceRepository
from bizdash.schemas.invoice import InvoiceResponse, InvoiceStatusUpdate
from bizdash.services.base_service import BaseService
from bizdash.services.rendering import InvoiceRenderer, RenderedDocument

logger = logging.getLogger(__name__)


class InvoiceService(BaseService[InvoiceStatusUpdate, InvoiceStatusUpdate, InvoiceResponse]):
    """Invoice service."""

    resource_name = "Invoice"

    def __init__(
        self,
        invoices: InvoiceRepository,
        renderer: InvoiceRenderer,
    ) -> None:
        super().__init__(invoices)
        self._renderer = renderer

    def _to_response(self, document: Document) -> InvoiceResponse:
        return InvoiceResponse.model_validate(document)

    async def list_invoices(
        self,
        status: Optional[str] = None,
        client_id: Optional[str] = None,
    ) -> List[InvoiceResponse]:
        """Invoices filtered by status and/or client, newest first."""
        filters: Dict[str, Any] = {}
        if status:
            filters["status"] = status
        if client_id:
            filters["client_id"] = client_id
        return await self.get_all(filters=filters or None)

    async def update_status(
        self,
        invoice_id: str,
        schema: InvoiceStatusUpdate,
    ) -> InvoiceResponse:
        """Mark an invoice Paid, Pending or Overdue."""
        invoice = await self.update(invoice_id, schema)
        logger.info(f"Invoice {invoice.invoice_number} is now {invoice.status}")
        return invoice

    async def render_document(self, invoice_id: str) -> RenderedDocument:
        """Render the invoice document on demand."""
        invoice = await self.get_by_id(invoice_id)
        return await self._renderer.render(invoice)
