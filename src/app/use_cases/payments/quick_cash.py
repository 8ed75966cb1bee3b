"""QuickCashPayment Use Case"""

from datetime import date
from decimal import Decimal
from typing import Union
from pydantic import ValidationError
from libs.result import Result, Return, Error
from src.domain.payment import PaymentMethod
from .create_payment import CreatePayment
from .dtos import CreatePaymentCommandDTO, PaymentResponseDTO


class QuickCashPayment:
    """
    Use Case: Record cash handed over at the desk

    Unlinked cash payment dated today. It lowers the student's debt
    without settling a particular invoice.
    """

    def __init__(self, create_payment: CreatePayment):
        self.create_payment = create_payment

    async def execute(
        self, student_id: int, amount: Union[Decimal, str, int], note: str = ""
    ) -> Result[PaymentResponseDTO]:
        try:
            command = CreatePaymentCommandDTO(
                student_id=student_id,
                amount=amount,
                method=PaymentMethod.CASH,
                paid_at=date.today().isoformat(),
                note=note,
            )
        except ValidationError as e:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Invalid quick cash payment",
                    reason=str(e),
                )
            )

        return await self.create_payment.execute(command)
