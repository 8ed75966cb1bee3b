"""SQLAlchemy Invoice Line Repository Implementation"""

from typing import Dict, Iterable, List
from sqlalchemy import delete
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice_line import InvoiceLine


class SqlAlchemyInvoiceLineRepository(InvoiceLineRepository):
    """SQLAlchemy implementation of InvoiceLineRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceLine]:
        """
        Retrieve all line items for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLine items ordered by ID
        """
        stmt = (
            select(InvoiceLine)
            .where(InvoiceLine.invoice_id == invoice_id)
            .order_by(InvoiceLine.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_many(self, invoice_lines: List[InvoiceLine]) -> List[InvoiceLine]:
        self.session.add_all(invoice_lines)
        await self.session.flush()
        return invoice_lines

    async def delete_by_invoice_id(self, invoice_id: int) -> int:
        stmt = delete(InvoiceLine).where(InvoiceLine.invoice_id == invoice_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def count_by_invoice_ids(self, invoice_ids: Iterable[int]) -> Dict[int, int]:
        ids = list(invoice_ids)
        if not ids:
            return {}
        stmt = (
            select(InvoiceLine.invoice_id, func.count(InvoiceLine.id))
            .where(InvoiceLine.invoice_id.in_(ids))
            .group_by(InvoiceLine.invoice_id)
        )
        result = await self.session.execute(stmt)
        return {invoice_id: count for invoice_id, count in result.all()}
