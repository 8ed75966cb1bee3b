"""Invoice Domain Entity

One invoice per student per billing month.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, IdType


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    ISSUED = "issued"
    PAID = "paid"
    CANCELED = "canceled"


PAYABLE_STATUSES = (InvoiceStatus.ISSUED, InvoiceStatus.PAID)


def format_invoice_number(prefix: str, year: int, month: int, seq: int) -> str:
    """
    Build an invoice number: PREFIX-YYYYMM-SEQ

    SEQ is zero-padded to three digits and widens past 999.

    Example:
        format_invoice_number("LS", 2024, 1, 1)  # "LS-202401-001"
    """
    return f"{prefix}-{year:04d}{month:02d}-{seq:03d}"


class Invoice(BaseModel, table=True):
    """
    Invoice - Monthly bill for one student

    Domain Rules:
    - Unique per (student_id, period_year, period_month), whatever the status
    - number is set exactly once, when the draft is issued, and never reused
    - Status transitions: draft -> issued <-> paid; canceled is terminal
    - total_amount equals the sum of invoice_lines.amount
    - Lines are only rebuilt while the invoice is a draft
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index(
            "ix_invoices_student_period",
            "student_id", "period_year", "period_month",
            unique=True,
        ),
        Index("ix_invoices_period_status", "period_year", "period_month", "status"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    student_id: int = Field(
        sa_column=Column(IdType, ForeignKey("students.id"), nullable=False),
        description="Billed student"
    )

    period_year: int = Field(sa_column=Column(Integer, nullable=False))

    period_month: int = Field(sa_column=Column(Integer, nullable=False))

    total_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Sum of line amounts"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, issued, paid, canceled)"
    )

    number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True, unique=True),
        description="Invoice number, set on issue (e.g., LS-202401-001)"
    )

    issued_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="Timestamp when invoice was issued"
    )

    paid_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="Timestamp when invoice became fully paid"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Last update timestamp"
    )

    @property
    def is_draft(self) -> bool:
        return self.status == InvoiceStatus.DRAFT

    @property
    def is_payable(self) -> bool:
        return self.status in PAYABLE_STATUSES
