"""Payment Repository Interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """Repository interface for Payment persistence"""

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: int) -> Optional[Payment]:
        """Retrieve payment by ID, None if not found"""
        pass

    @abstractmethod
    async def delete(self, payment: Payment) -> None:
        """Delete a payment"""
        pass

    @abstractmethod
    async def get_by_student_id(self, student_id: int) -> List[Payment]:
        """Retrieve a student's payments, most recent paid_at first"""
        pass

    @abstractmethod
    async def sum_for_invoice(self, invoice_id: int) -> Decimal:
        """Sum of payments linked to an invoice (0 if none)"""
        pass

    @abstractmethod
    async def sum_for_student(self, student_id: int) -> Decimal:
        """Sum of all payments of a student, linked or not (0 if none)"""
        pass
