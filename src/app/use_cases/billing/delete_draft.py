"""DeleteDraft Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice import InvoiceStatus

logger = logging.getLogger(__name__)


class DeleteDraft:
    """
    Use Case: Delete a draft invoice and its lines

    Issued, paid and canceled invoices are kept; their numbers are part of
    the sequence and must stay on record.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(self, invoice_id: int) -> Result[None]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)

            if not invoice:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            if invoice.status != InvoiceStatus.DRAFT:
                error = Error(
                    code="INVOICE_NOT_DRAFT",
                    message="Only draft invoices can be deleted",
                    reason=f"status={invoice.status.value}",
                )
                await self.uow.rollback()
                return Return.err(error)

            await self.invoice_line_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)
            await self.uow.commit()

            logger.info(f"Deleted draft invoice {invoice_id}")
            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Deleting draft {invoice_id} failed: {e}")
            return Return.err(
                Error(
                    code="DELETE_DRAFT_FAILED",
                    message=f"Failed to delete draft invoice {invoice_id}",
                    reason=str(e),
                )
            )
