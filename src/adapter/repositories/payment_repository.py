"""SQLAlchemy Payment Repository Implementation"""

from decimal import Decimal
from typing import List, Optional
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.money import ZERO, round2
from src.domain.payment import Payment


class SqlAlchemyPaymentRepository(PaymentRepository):
    """SQLAlchemy implementation of PaymentRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_by_id(self, payment_id: int) -> Optional[Payment]:
        stmt = select(Payment).where(Payment.id == payment_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, payment: Payment) -> None:
        await self.session.delete(payment)
        await self.session.flush()

    async def get_by_student_id(self, student_id: int) -> List[Payment]:
        stmt = (
            select(Payment)
            .where(Payment.student_id == student_id)
            .order_by(Payment.paid_at.desc(), Payment.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def sum_for_invoice(self, invoice_id: int) -> Decimal:
        stmt = select(func.coalesce(func.sum(Payment.amount), 0)).where(
            Payment.invoice_id == invoice_id
        )
        return await self._scalar_sum(stmt)

    async def sum_for_student(self, student_id: int) -> Decimal:
        stmt = select(func.coalesce(func.sum(Payment.amount), 0)).where(
            Payment.student_id == student_id
        )
        return await self._scalar_sum(stmt)

    async def _scalar_sum(self, stmt) -> Decimal:
        result = await self.session.execute(stmt)
        total = result.scalar_one()
        return round2(total) if total is not None else ZERO
