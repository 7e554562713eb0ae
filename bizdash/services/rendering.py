# ==============================================================================
# INVOICE RENDERING - Document Collaborator
# ==============================================================================
# Turns an invoice into a printable document
# The HTML renderer uses a Jinja2 template and can export to a directory
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from bizdash.schemas.invoice import InvoiceResponse

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class RenderedDocument:
    """Rendered invoice; ``path`` is set when the document was written to disk."""

    filename: str
    media_type: str
    content: str
    path: Optional[str] = None


class InvoiceRenderer(ABC):
    """Produces a document for an invoice."""

    @abstractmethod
    async def render(self, invoice: InvoiceResponse) -> RenderedDocument:
        """
        Render an invoice.

        Args:
            invoice: Invoice to render

        Returns:
            The rendered document
        """


class HtmlInvoiceRenderer(InvoiceRenderer):
    """
    Render invoices to HTML through ``templates/invoice.html``.

    When ``export_dir`` is set the document is also written there as
    ``<invoice_number>.html``.

    Example:
        >>> renderer = HtmlInvoiceRenderer(currency="DT")
        >>> document = await renderer.render(invoice)
        >>> document.media_type
        'text/html'
    """

    def __init__(
        self,
        export_dir: Optional[str] = None,
        currency: str = "DT",
        company_name: str = "",
        templates_dir: Optional[Path] = None,
    ) -> None:
        self._export_dir = Path(export_dir) if export_dir else None
        self._currency = currency
        self._company_name = company_name
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self._env.filters["money"] = lambda value: f"{float(value):.2f}"

    def render_html(self, invoice: InvoiceResponse) -> str:
        tpl = self._env.get_template("invoice.html")
        return tpl.render(
            invoice=invoice,
            tax_percent=float(invoice.tax_rate) * 100,
            currency=self._currency,
            company={"name": self._company_name},
        )

    async def render(self, invoice: InvoiceResponse) -> RenderedDocument:
        content = self.render_html(invoice)
        filename = f"{_UNSAFE_FILENAME.sub('_', invoice.invoice_number)}.html"

        path = None
        if self._export_dir is not None:
            target = self._export_dir / filename
            await asyncio.to_thread(self._write, target, content)
            path = str(target)
            logger.info(f"Invoice document written to {path}")

        return RenderedDocument(
            filename=filename,
            media_type="text/html",
            content=content,
            path=path,
        )

    @staticmethod
    def _write(target: Path, content: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
