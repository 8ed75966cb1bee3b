"""ListDebtors Use Case"""

from typing import List
from libs.result import Result, Return
from src.app.repositories.student_repository import StudentRepository
from src.domain.money import ZERO
from .dtos import DebtorDTO
from .student_balance import GetStudentBalance


class ListDebtors:
    """
    Use Case: List active students who owe money

    Sorted by debt, largest first. Inactive students are left out even if
    they still owe.
    """

    def __init__(self, student_repo: StudentRepository, student_balance: GetStudentBalance):
        self.student_repo = student_repo
        self.student_balance = student_balance

    async def execute(self) -> Result[List[DebtorDTO]]:
        debtors = []

        for student in await self.student_repo.get_active():
            balance = await self.student_balance.balance_for(student)
            if balance.debt > ZERO:
                debtors.append(
                    DebtorDTO(
                        student_id=student.id,
                        student_name=student.full_name,
                        total_invoiced=balance.total_invoiced,
                        total_paid=balance.total_paid,
                        debt=balance.debt,
                    )
                )

        debtors.sort(key=lambda debtor: debtor.debt, reverse=True)
        return Return.ok(debtors)
