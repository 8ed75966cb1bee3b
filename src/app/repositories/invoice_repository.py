"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, List, Optional
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Methods taking ``for_update`` lock the invoice row (SELECT FOR UPDATE)
    so that draft rebuilds, issuing and payment reconciliation on the same
    invoice are serialized.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            for_update: If True, lock the row until the transaction ends

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_for_period(
        self, student_id: int, year: int, month: int, for_update: bool = False
    ) -> Optional[Invoice]:
        """
        Retrieve the invoice of a student for a period, whatever its status

        Args:
            student_id: Student ID
            year: Period year
            month: Period month
            for_update: If True, lock the row until the transaction ends

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_period(
        self, year: int, month: int, status: Optional[InvoiceStatus] = None
    ) -> List[Invoice]:
        """
        Retrieve invoices of a period, ordered by ID

        Args:
            year: Period year
            month: Period month
            status: Optional filter by status (None = all statuses)

        Returns:
            List of invoices
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        """Delete an invoice"""
        pass

    @abstractmethod
    async def sum_totals_for_student(
        self, student_id: int, statuses: Iterable[InvoiceStatus]
    ) -> Decimal:
        """
        Sum total_amount of a student's invoices in the given statuses

        Args:
            student_id: Student ID
            statuses: Statuses to include

        Returns:
            Sum of totals (0 if none)
        """
        pass
