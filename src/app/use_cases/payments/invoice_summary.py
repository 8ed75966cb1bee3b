"""GetInvoiceSummary Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.money import ZERO, round2
from .dtos import InvoiceSummaryDTO


class GetInvoiceSummary:
    """Use Case: Show how much of an invoice is paid"""

    def __init__(self, invoice_repo: InvoiceRepository, payment_repo: PaymentRepository):
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo

    async def execute(self, invoice_id: int) -> Result[InvoiceSummaryDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                )
            )

        total = round2(invoice.total_amount)
        paid = round2(await self.payment_repo.sum_for_invoice(invoice.id))

        return Return.ok(
            InvoiceSummaryDTO(
                invoice_id=invoice.id,
                number=invoice.number,
                total=total,
                paid=paid,
                remaining=max(ZERO, round2(total - paid)),
                status=invoice.status.value,
            )
        )
