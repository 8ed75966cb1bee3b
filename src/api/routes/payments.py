"""Payment API Routes

FastAPI routes for recording and deleting payments.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.billing_request import PaymentRequestSchema, QuickCashRequestSchema
from src.app.use_cases.payments.create_payment import CreatePayment
from src.app.use_cases.payments.delete_payment import DeletePayment
from src.app.use_cases.payments.dtos import CreatePaymentCommandDTO, PaymentResponseDTO
from src.app.use_cases.payments.quick_cash import QuickCashPayment
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.student_repository import SqlAlchemyStudentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/billing/payments", tags=["Payments"])


def build_create_payment(session: AsyncSession) -> CreatePayment:
    return CreatePayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyStudentRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
    )


@router.post(
    "",
    response_model=PaymentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Invoice cannot take payments",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_NOT_PAYABLE",
                            "message": "Invoice 12 is not issued",
                            "reason": "status=draft"
                        }
                    }
                }
            }
        }
    }
)
async def create_payment(
    request: PaymentRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Record a payment.

    A payment linked to an invoice recomputes its status: the invoice turns
    paid once its linked payments cover the total.

    **Example request:**
    ```json
    {
      "student_id": 7,
      "invoice_id": 1,
      "amount": "216.00",
      "method": "bank",
      "paid_at": "2024-02-05",
      "note": "Transfer ref 4411"
    }
    ```

    **Returns:**
    - 201: Payment recorded
    - 404: Student or invoice not found
    - 409: Invoice belongs to another student or is not issued
    - 422: Invalid request parameters
    """
    command = CreatePaymentCommandDTO(
        student_id=request.student_id,
        invoice_id=request.invoice_id,
        amount=request.amount,
        method=request.method,
        paid_at=request.paid_at,
        note=request.note,
    )

    result = await build_create_payment(session).execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/quick-cash",
    response_model=PaymentResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def quick_cash_payment(
    request: QuickCashRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """Record cash received today, not linked to an invoice."""
    use_case = QuickCashPayment(build_create_payment(session))
    result = await use_case.execute(request.student_id, request.amount, request.note)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{payment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_payment(payment_id: int, session: AsyncSession = Depends(get_session)):
    """Delete a payment; its invoice reverts to issued if no longer covered."""
    use_case = DeletePayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(payment_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
