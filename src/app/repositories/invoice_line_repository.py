"""Invoice Line Repository Interface

Defines the contract for invoice line persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List
from src.domain.invoice_line import InvoiceLine


class InvoiceLineRepository(ABC):
    """
    Repository interface for InvoiceLine persistence

    Provides access to invoice line items for billing operations.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceLine]:
        """
        Retrieve all line items for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLine items, ordered by ID
        """
        pass

    @abstractmethod
    async def create_many(self, invoice_lines: List[InvoiceLine]) -> List[InvoiceLine]:
        """
        Create several line items

        Args:
            invoice_lines: InvoiceLine entities to persist (invoice_id set)

        Returns:
            Created InvoiceLine items with generated IDs
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: int) -> int:
        """
        Delete every line of an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            Number of deleted lines
        """
        pass

    @abstractmethod
    async def count_by_invoice_ids(self, invoice_ids: Iterable[int]) -> Dict[int, int]:
        """
        Count lines per invoice in one query

        Args:
            invoice_ids: Invoice IDs

        Returns:
            Mapping of invoice ID to line count (invoices without lines are absent)
        """
        pass
