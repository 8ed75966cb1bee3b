"""RenderInvoice Use Case

Writes the PDF of a numbered invoice to its deterministic path.
"""

import logging
from pathlib import Path
from typing import Union
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.student_repository import StudentRepository
from src.app.repositories.settings_repository import SettingsRepository
from src.app.services.pdf_service import PdfService
from .dtos import RenderedInvoiceDTO

logger = logging.getLogger(__name__)


def invoice_pdf_path(base_dir: Union[str, Path], year: int, month: int, number: str) -> Path:
    """PDF location of an invoice: <base>/<YYYY>/<MM>/<number>.pdf"""
    return Path(base_dir).expanduser().resolve() / f"{year:04d}" / f"{month:02d}" / f"{number}.pdf"


class RenderInvoice:
    """
    Use Case: Render an issued invoice to PDF

    Business Rules:
    1. Only numbered invoices can be rendered
    2. Rendering never changes invoice state, so it can be repeated
       after a failure
    3. Output path depends only on base dir, period and number
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        student_repo: StudentRepository,
        settings_repo: SettingsRepository,
        pdf_service: PdfService,
        output_dir: Union[str, Path],
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.student_repo = student_repo
        self.settings_repo = settings_repo
        self.pdf_service = pdf_service
        self.output_dir = output_dir

    async def execute(self, invoice_id: int) -> Result[RenderedInvoiceDTO]:
        """
        Execute invoice rendering

        Args:
            invoice_id: Issued invoice ID

        Returns:
            Result[RenderedInvoiceDTO]: PDF path or error
        """
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)

            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            if not invoice.number:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_ISSUED",
                        message=f"Invoice {invoice_id} has no number, issue it first",
                        reason=f"status={invoice.status.value}",
                    )
                )

            student = await self.student_repo.get_by_id(invoice.student_id)
            if not student:
                return Return.err(
                    Error(
                        code="STUDENT_NOT_FOUND",
                        message=f"Student {invoice.student_id} of invoice {invoice_id} not found",
                    )
                )

            settings = await self.settings_repo.get()
            if not settings:
                return Return.err(
                    Error(
                        code="SETTINGS_NOT_FOUND",
                        message="Billing settings are not initialized",
                        reason="The settings row holds the organisation shown on the PDF",
                    )
                )

            lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)

            pdf_bytes = self.pdf_service.render_invoice(
                invoice=invoice,
                invoice_lines=lines,
                student=student,
                settings=settings,
            )

            path = invoice_pdf_path(
                self.output_dir, invoice.period_year, invoice.period_month, invoice.number
            )
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(pdf_bytes)

            logger.info(f"Rendered invoice {invoice.number} to {path}")

            return Return.ok(
                RenderedInvoiceDTO(invoice_id=invoice.id, number=invoice.number, path=str(path))
            )

        except Exception as e:
            logger.error(f"Rendering invoice {invoice_id} failed: {e}")
            return Return.err(
                Error(
                    code="RENDER_INVOICE_FAILED",
                    message=f"Failed to render invoice {invoice_id}",
                    reason=str(e),
                )
            )
