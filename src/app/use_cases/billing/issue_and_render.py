"""IssueAndRenderInvoice Use Case

Numbers a draft and produces its PDF.
"""

import logging
from libs.result import Result, Return, Error
from .dtos import RenderedInvoiceDTO
from .issue_invoice import IssueInvoice
from .render_invoice import RenderInvoice

logger = logging.getLogger(__name__)


class IssueAndRenderInvoice:
    """
    Use Case: Issue one invoice, then render it

    A rendering failure is reported but the invoice stays issued with its
    number; RenderInvoice can be run again for it.
    """

    def __init__(self, issue_invoice: IssueInvoice, render_invoice: RenderInvoice):
        self.issue_invoice = issue_invoice
        self.render_invoice = render_invoice

    async def execute(self, invoice_id: int) -> Result[RenderedInvoiceDTO]:
        issued = await self.issue_invoice.execute(invoice_id)
        if issued.is_err():
            return issued

        rendered = await self.render_invoice.execute(invoice_id)
        if rendered.is_err():
            logger.warning(
                f"Invoice {invoice_id} issued as {issued.value.number} but not rendered: "
                f"{rendered.error.message}"
            )
            return Return.err(
                Error(
                    code="RENDER_INVOICE_FAILED",
                    message=f"Invoice issued as {issued.value.number} but the PDF was not produced",
                    reason=rendered.error.reason or rendered.error.message,
                )
            )

        return rendered
