"""IssueAllInvoices Use Case

Issues and renders every draft of a billing month, one after another.
"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import IssueAllResultDTO
from .issue_invoice import IssueInvoice
from .period import validate_period
from .render_invoice import RenderInvoice

logger = logging.getLogger(__name__)


class IssueAllInvoices:
    """
    Use Case: Issue all drafts of a period

    Business Rules:
    1. Drafts are processed sequentially in ID order
    2. The run stops at the first issue or render failure
    3. The result always reports what was completed before the failure,
       together with the failing invoice and error
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        issue_invoice: IssueInvoice,
        render_invoice: RenderInvoice,
    ):
        self.invoice_repo = invoice_repo
        self.issue_invoice = issue_invoice
        self.render_invoice = render_invoice

    async def execute(self, year: int, month: int) -> Result[IssueAllResultDTO]:
        """
        Execute period issuing

        Args:
            year: Period year
            month: Period month

        Returns:
            Result[IssueAllResultDTO]: Count, paths and the first failure if any
        """
        period_error = validate_period(year, month)
        if period_error:
            return Return.err(period_error)

        try:
            drafts = await self.invoice_repo.get_by_period(year, month, InvoiceStatus.DRAFT)
        except Exception as e:
            return Return.err(
                Error(
                    code="ISSUE_ALL_FAILED",
                    message=f"Failed to list drafts for {year:04d}-{month:02d}",
                    reason=str(e),
                )
            )

        draft_ids = [draft.id for draft in drafts]
        result = IssueAllResultDTO(year=year, month=month)

        for invoice_id in draft_ids:
            issued = await self.issue_invoice.execute(invoice_id)
            if issued.is_err():
                result.failed_invoice_id = invoice_id
                result.error = issued.error
                break

            rendered = await self.render_invoice.execute(invoice_id)
            if rendered.is_err():
                result.failed_invoice_id = invoice_id
                result.error = rendered.error
                break

            result.paths.append(rendered.value.path)
            result.count += 1

        if result.error:
            logger.warning(
                f"Issuing {year:04d}-{month:02d} stopped at invoice {result.failed_invoice_id} "
                f"after {result.count} of {len(draft_ids)}: {result.error.message}"
            )
        else:
            logger.info(f"Issued {result.count} invoices for {year:04d}-{month:02d}")

        return Return.ok(result)
