"""Invoice status reconciliation after payment changes"""

import logging
from datetime import datetime
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.invoice import Invoice, InvoiceStatus

logger = logging.getLogger(__name__)


async def recompute_invoice_status(
    invoice: Invoice,
    invoice_repo: InvoiceRepository,
    payment_repo: PaymentRepository,
) -> Invoice:
    """
    Set an issued/paid invoice to paid or issued from its linked payments

    The caller holds the invoice row lock and commits. Drafts and canceled
    invoices are returned unchanged.
    """
    if not invoice.is_payable:
        return invoice

    paid = await payment_repo.sum_for_invoice(invoice.id)

    if paid >= invoice.total_amount:
        if invoice.status != InvoiceStatus.PAID:
            invoice.status = InvoiceStatus.PAID
            invoice.paid_at = datetime.utcnow()
            await invoice_repo.update(invoice)
            logger.info(f"Invoice {invoice.number} fully paid ({paid}/{invoice.total_amount})")
    elif invoice.status == InvoiceStatus.PAID:
        invoice.status = InvoiceStatus.ISSUED
        invoice.paid_at = None
        await invoice_repo.update(invoice)
        logger.info(f"Invoice {invoice.number} back to issued ({paid}/{invoice.total_amount})")

    return invoice
