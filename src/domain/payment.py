"""Payment Domain Entity

Money received from a student, optionally linked to one invoice.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Numeric, String
from src.domain.base import BaseModel, IdType


class PaymentMethod(str, Enum):
    """Payment methods"""
    CASH = "cash"
    BANK = "bank"


class Payment(BaseModel, table=True):
    """
    Payment - Amount paid by a student

    Domain Rules:
    - amount > 0, stored rounded to cents
    - invoice_id is optional (unlinked "quick cash" payments)
    - A linked invoice must be issued or paid when the payment is recorded
    - Creating or deleting a linked payment recomputes the invoice status
    """

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="payment_amount_positive"),
        Index("ix_payments_student_paid_at", "student_id", "paid_at"),
        Index("ix_payments_invoice_id", "invoice_id"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    student_id: int = Field(
        sa_column=Column(IdType, ForeignKey("students.id"), nullable=False),
    )

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("invoices.id"), nullable=True),
    )

    paid_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
    )

    amount: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    method: PaymentMethod = Field(description="cash or bank")

    note: str = Field(default="", sa_column=Column(String(500), nullable=False, default=""))

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Record creation timestamp"
    )
