"""CreatePayment Use Case

Records a payment and reconciles the linked invoice.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.student_repository import StudentRepository
from src.domain.money import round2
from src.domain.payment import Payment
from .dtos import CreatePaymentCommandDTO, PaymentResponseDTO
from .reconcile import recompute_invoice_status

logger = logging.getLogger(__name__)


class CreatePayment:
    """
    Use Case: Record a payment

    Business Rules:
    1. Student must exist
    2. A linked invoice must exist, belong to the student and be issued
       or paid
    3. Amount is stored rounded to cents
    4. The linked invoice is locked and its status recomputed in the
       same transaction as the insert

    Flow:
    1. Validate student
    2. Lock and validate invoice (if linked)
    3. Insert payment
    4. Recompute invoice status
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        student_repo: StudentRepository,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.student_repo = student_repo
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo

    async def execute(self, command: CreatePaymentCommandDTO) -> Result[PaymentResponseDTO]:
        """
        Execute payment creation

        Args:
            command: Validated payment command

        Returns:
            Result[PaymentResponseDTO]: Stored payment or error
        """
        try:
            # Step 1: Validate student
            student = await self.student_repo.get_by_id(command.student_id)
            if not student:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="STUDENT_NOT_FOUND",
                        message=f"Student with ID {command.student_id} not found",
                    )
                )

            # Step 2: Lock and validate invoice
            invoice = None
            if command.invoice_id is not None:
                invoice = await self.invoice_repo.get_by_id(command.invoice_id, for_update=True)

                if not invoice:
                    await self.uow.rollback()
                    return Return.err(
                        Error(
                            code="INVOICE_NOT_FOUND",
                            message=f"Invoice with ID {command.invoice_id} not found",
                        )
                    )

                if invoice.student_id != student.id:
                    return await self._reject(
                        Error(
                            code="INVOICE_STUDENT_MISMATCH",
                            message=f"Invoice {invoice.id} does not belong to student {student.id}",
                            reason=f"invoice.student_id={invoice.student_id}",
                        )
                    )

                if not invoice.is_payable:
                    return await self._reject(
                        Error(
                            code="INVOICE_NOT_PAYABLE",
                            message=f"Invoice {invoice.id} is not issued",
                            reason=f"status={invoice.status.value}",
                        )
                    )

            # Step 3: Insert payment
            payment = await self.payment_repo.create(
                Payment(
                    student_id=student.id,
                    invoice_id=invoice.id if invoice else None,
                    paid_at=command.paid_at,
                    amount=round2(command.amount),
                    method=command.method,
                    note=command.note,
                )
            )

            # Step 4: Recompute invoice status
            if invoice:
                await recompute_invoice_status(invoice, self.invoice_repo, self.payment_repo)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Recorded {payment.method.value} payment {payment.id} of {payment.amount} "
                f"from student {student.id}"
                + (f" for invoice {invoice.id}" if invoice else "")
            )

            return Return.ok(
                PaymentResponseDTO(
                    id=payment.id,
                    student_id=payment.student_id,
                    invoice_id=payment.invoice_id,
                    amount=payment.amount,
                    method=payment.method.value,
                    paid_at=payment.paid_at,
                    note=payment.note,
                    invoice_status=invoice.status.value if invoice else None,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Recording payment for student {command.student_id} failed: {e}")
            return Return.err(
                Error(
                    code="CREATE_PAYMENT_FAILED",
                    message="Failed to record payment",
                    reason=str(e),
                )
            )

    async def _reject(self, error: Error) -> Result[PaymentResponseDTO]:
        """Roll back and fail; ``error`` is built before the rollback expires loaded rows"""
        await self.uow.rollback()
        return Return.err(error)
