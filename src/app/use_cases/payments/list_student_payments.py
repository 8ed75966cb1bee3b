"""ListStudentPayments Use Case"""

from typing import List
from libs.result import Result, Return, Error
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.student_repository import StudentRepository
from .dtos import PaymentResponseDTO


class ListStudentPayments:
    """Use Case: List a student's payments, most recent first"""

    def __init__(self, student_repo: StudentRepository, payment_repo: PaymentRepository):
        self.student_repo = student_repo
        self.payment_repo = payment_repo

    async def execute(self, student_id: int) -> Result[List[PaymentResponseDTO]]:
        student = await self.student_repo.get_by_id(student_id)
        if not student:
            return Return.err(
                Error(
                    code="STUDENT_NOT_FOUND",
                    message=f"Student with ID {student_id} not found",
                )
            )

        payments = await self.payment_repo.get_by_student_id(student_id)

        return Return.ok(
            [
                PaymentResponseDTO(
                    id=payment.id,
                    student_id=payment.student_id,
                    invoice_id=payment.invoice_id,
                    amount=payment.amount,
                    method=payment.method.value,
                    paid_at=payment.paid_at,
                    note=payment.note,
                )
                for payment in payments
            ]
        )
