"""GetStudentBalance Use Case

Aggregates what a student was invoiced against what they paid.
"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.student_repository import StudentRepository
from src.domain.invoice import PAYABLE_STATUSES
from src.domain.money import ZERO, round2
from src.domain.student import Student
from .dtos import StudentBalanceDTO


class GetStudentBalance:
    """
    Use Case: Compute a student's balance

    Business Rules:
    1. total_invoiced sums issued and paid invoices only; drafts and
       canceled invoices are not owed
    2. total_paid sums every payment, linked or not
    3. balance = total_paid - total_invoiced
    4. debt = max(0, -balance)
    """

    def __init__(
        self,
        student_repo: StudentRepository,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
    ):
        self.student_repo = student_repo
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo

    async def execute(self, student_id: int) -> Result[StudentBalanceDTO]:
        student = await self.student_repo.get_by_id(student_id)
        if not student:
            return Return.err(
                Error(
                    code="STUDENT_NOT_FOUND",
                    message=f"Student with ID {student_id} not found",
                )
            )

        return Return.ok(await self.balance_for(student))

    async def balance_for(self, student: Student) -> StudentBalanceDTO:
        """Balance of an already loaded student"""
        total_invoiced = round2(
            await self.invoice_repo.sum_totals_for_student(student.id, PAYABLE_STATUSES)
        )
        total_paid = round2(await self.payment_repo.sum_for_student(student.id))
        balance = round2(total_paid - total_invoiced)

        return StudentBalanceDTO(
            student_id=student.id,
            student_name=student.full_name,
            total_invoiced=total_invoiced,
            total_paid=total_paid,
            balance=balance,
            debt=max(ZERO, -balance),
        )
