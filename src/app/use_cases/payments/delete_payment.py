"""DeletePayment Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from .reconcile import recompute_invoice_status

logger = logging.getLogger(__name__)


class DeletePayment:
    """
    Use Case: Delete a payment

    The linked invoice (if any) is locked and recomputed in the same
    transaction, so removing the payment that settled it reverts it to
    issued.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo

    async def execute(self, payment_id: int) -> Result[None]:
        try:
            payment = await self.payment_repo.get_by_id(payment_id)
            if not payment:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="PAYMENT_NOT_FOUND",
                        message=f"Payment with ID {payment_id} not found",
                    )
                )

            invoice = None
            if payment.invoice_id is not None:
                invoice = await self.invoice_repo.get_by_id(payment.invoice_id, for_update=True)

            await self.payment_repo.delete(payment)

            if invoice:
                await recompute_invoice_status(invoice, self.invoice_repo, self.payment_repo)

            await self.uow.commit()

            logger.info(f"Deleted payment {payment_id}")
            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Deleting payment {payment_id} failed: {e}")
            return Return.err(
                Error(
                    code="DELETE_PAYMENT_FAILED",
                    message=f"Failed to delete payment {payment_id}",
                    reason=str(e),
                )
            )
