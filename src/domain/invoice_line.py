"""Invoice Line Domain Entity

Tracks individual line items within an invoice.
"""

from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, IdType


class InvoiceLine(BaseModel, table=True):
    """
    Invoice Line - One billed enrollment within an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - amount = round2(qty * unit_price)
    - Replaced as a whole on every draft rebuild, never patched
    """

    __tablename__ = "invoice_lines"
    __table_args__ = (
        Index("ix_invoice_lines_invoice_id", "invoice_id"),
        Index("ix_invoice_lines_enrollment_id", "enrollment_id"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    enrollment_id: int = Field(
        sa_column=Column(IdType, ForeignKey("enrollments.id"), nullable=False),
        description="Enrollment this line bills"
    )

    description: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Line item description (e.g., 'Lessons: English B1 (01.2024)')"
    )

    qty: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Lessons attended, or 1 for a subscription"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Resolved price per unit"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="round2(qty * unit_price)"
    )
