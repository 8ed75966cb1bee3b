"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.money import ZERO, round2


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE (ignored by SQLite)
    - Period lookups backed by the (student, year, month) unique index
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID with optional row-level locking

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        stmt = select(Invoice).where(Invoice.id == invoice_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_period(
        self, student_id: int, year: int, month: int, for_update: bool = False
    ) -> Optional[Invoice]:
        stmt = (
            select(Invoice)
            .where(Invoice.student_id == student_id)
            .where(Invoice.period_year == year)
            .where(Invoice.period_month == month)
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_period(
        self, year: int, month: int, status: Optional[InvoiceStatus] = None
    ) -> List[Invoice]:
        """
        Retrieve invoices of a period

        Args:
            year: Period year
            month: Period month
            status: Optional filter by status

        Returns:
            List of invoices ordered by ID
        """
        stmt = (
            select(Invoice)
            .where(Invoice.period_year == year)
            .where(Invoice.period_month == month)
        )

        if status:
            stmt = stmt.where(Invoice.status == status)

        stmt = stmt.order_by(Invoice.id)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def sum_totals_for_student(
        self, student_id: int, statuses: Iterable[InvoiceStatus]
    ) -> Decimal:
        stmt = (
            select(func.coalesce(func.sum(Invoice.total_amount), 0))
            .where(Invoice.student_id == student_id)
            .where(Invoice.status.in_(list(statuses)))
        )
        result = await self.session.execute(stmt)
        total = result.scalar_one()
        return round2(total) if total is not None else ZERO
