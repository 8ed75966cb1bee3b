"""ListInvoices Use Case

Lists the invoices of a billing month with student names and line counts.
"""

import logging
from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.student_repository import StudentRepository
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceListItemDTO
from .period import validate_period

logger = logging.getLogger(__name__)


class ListInvoices:
    """
    Use Case: List invoices of a period

    Optional status filter; drafts are the usual review list before issuing.
    Student names and line counts are loaded in batch, not per invoice.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        student_repo: StudentRepository,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.student_repo = student_repo

    async def execute(
        self, year: int, month: int, status: Optional[InvoiceStatus] = None
    ) -> Result[List[InvoiceListItemDTO]]:
        period_error = validate_period(year, month)
        if period_error:
            return Return.err(period_error)

        try:
            invoices = await self.invoice_repo.get_by_period(year, month, status)
            ids = [invoice.id for invoice in invoices]
            line_counts = await self.invoice_line_repo.count_by_invoice_ids(ids)
            students = await self.student_repo.get_by_ids(
                {invoice.student_id for invoice in invoices}
            )
        except Exception as e:
            logger.error(f"Listing invoices for {year:04d}-{month:02d} failed: {e}")
            return Return.err(
                Error(
                    code="LIST_INVOICES_FAILED",
                    message=f"Failed to list invoices for {year:04d}-{month:02d}",
                    reason=str(e),
                )
            )

        items = []
        for invoice in invoices:
            student = students.get(invoice.student_id)
            items.append(
                InvoiceListItemDTO(
                    id=invoice.id,
                    student_id=invoice.student_id,
                    student_name=student.full_name if student else "",
                    year=invoice.period_year,
                    month=invoice.period_month,
                    total=invoice.total_amount,
                    status=invoice.status.value,
                    lines_count=line_counts.get(invoice.id, 0),
                    number=invoice.number,
                )
            )

        return Return.ok(items)
