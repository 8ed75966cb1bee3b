"""PDF Generation Service Interface

Defines the contract for rendering issued invoices.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine
from src.domain.settings import BillingSettings
from src.domain.student import Student


class PdfService(ABC):
    """
    Service interface for PDF generation

    Receives a fully resolved, numbered invoice; never touches storage.
    """

    @abstractmethod
    def render_invoice(
        self,
        invoice: Invoice,
        invoice_lines: List[InvoiceLine],
        student: Student,
        settings: BillingSettings,
    ) -> bytes:
        """
        Render an issued invoice

        Args:
            invoice: Numbered invoice
            invoice_lines: Line items of the invoice
            student: Billed student
            settings: Organization name, address, currency and locale

        Returns:
            PDF document as bytes
        """
        pass
