"""Student account API Routes"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.payments.dtos import DebtorDTO, PaymentResponseDTO, StudentBalanceDTO
from src.app.use_cases.payments.list_debtors import ListDebtors
from src.app.use_cases.payments.list_student_payments import ListStudentPayments
from src.app.use_cases.payments.student_balance import GetStudentBalance
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.student_repository import SqlAlchemyStudentRepository
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/billing", tags=["Students"])


def build_student_balance(session: AsyncSession) -> GetStudentBalance:
    return GetStudentBalance(
        SqlAlchemyStudentRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
    )


@router.get(
    "/students/{student_id}/payments",
    response_model=List[PaymentResponseDTO],
    status_code=status.HTTP_200_OK,
)
async def list_student_payments(student_id: int, session: AsyncSession = Depends(get_session)):
    """Payments of a student, most recent first."""
    use_case = ListStudentPayments(
        SqlAlchemyStudentRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(student_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/students/{student_id}/balance",
    response_model=StudentBalanceDTO,
    status_code=status.HTTP_200_OK,
)
async def get_student_balance(student_id: int, session: AsyncSession = Depends(get_session)):
    """
    Invoiced vs. paid totals of a student.

    Only issued and paid invoices count as invoiced. A negative balance is
    debt.
    """
    result = await build_student_balance(session).execute(student_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/debtors",
    response_model=List[DebtorDTO],
    status_code=status.HTTP_200_OK,
)
async def list_debtors(session: AsyncSession = Depends(get_session)):
    """Active students with debt, largest debt first."""
    use_case = ListDebtors(SqlAlchemyStudentRepository(session), build_student_balance(session))
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value
