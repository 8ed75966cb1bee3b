"""Data Transfer Objects for Payment Use Cases"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.money import round2
from src.domain.payment import PaymentMethod


def parse_paid_at(value):
    """Accept a date, a YYYY-MM-DD string or an ISO-8601 timestamp"""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        value = value.strip()
        if len(value) == 10:
            return datetime.combine(date.fromisoformat(value), time.min)
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value


def round_amount(value: Decimal) -> Decimal:
    """Round a payment amount to cents; it must stay positive"""
    value = round2(value)
    if value <= 0:
        raise ValueError("amount must be at least 0.01 after rounding to cents")
    return value


class CreatePaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a payment

    Used as input to CreatePayment use case.

    ``paid_at`` accepts a plain date (YYYY-MM-DD, taken as midnight) or a
    full ISO-8601 timestamp.
    """

    student_id: int = Field(..., gt=0, description="Paying student")
    invoice_id: Optional[int] = Field(
        default=None,
        gt=0,
        description="Invoice the payment settles (None = unlinked)"
    )
    amount: Decimal = Field(..., gt=0, description="Amount received (must be positive)")
    method: PaymentMethod = Field(..., description="cash or bank")
    paid_at: datetime = Field(..., description="Payment date or timestamp")
    note: str = Field(default="", max_length=500)

    @field_validator("paid_at", mode="before")
    @classmethod
    def check_paid_at(cls, value):
        return parse_paid_at(value)

    @field_validator("amount")
    @classmethod
    def check_amount(cls, value):
        return round_amount(value)

    class Config:
        json_schema_extra = {
            "example": {
                "student_id": 7,
                "invoice_id": 1,
                "amount": "216.00",
                "method": "bank",
                "paid_at": "2024-02-05",
                "note": "Transfer ref 4411"
            }
        }


class PaymentResponseDTO(BaseModel):
    """Response DTO for a stored payment"""

    id: int = Field(..., description="Payment ID")
    student_id: int
    invoice_id: Optional[int] = None
    amount: Decimal
    method: str = Field(..., description="cash or bank")
    paid_at: datetime
    note: str = ""
    invoice_status: Optional[str] = Field(
        default=None,
        description="Linked invoice status after reconciliation"
    )


class StudentBalanceDTO(BaseModel):
    """
    Response DTO for a student's account balance

    balance = total_paid - total_invoiced; debt = max(0, -balance)
    """

    student_id: int
    student_name: str = ""
    total_invoiced: Decimal = Field(..., description="Sum of issued and paid invoices")
    total_paid: Decimal = Field(..., description="Sum of all payments")
    balance: Decimal = Field(..., description="Positive when the student is in credit")
    debt: Decimal = Field(..., description="Outstanding amount, never negative")

    class Config:
        json_schema_extra = {
            "example": {
                "student_id": 7,
                "student_name": "Anna Berzina",
                "total_invoiced": "216.00",
                "total_paid": "100.00",
                "balance": "-116.00",
                "debt": "116.00"
            }
        }


class DebtorDTO(BaseModel):
    """A student who owes money"""

    student_id: int
    student_name: str
    total_invoiced: Decimal
    total_paid: Decimal
    debt: Decimal


class InvoiceSummaryDTO(BaseModel):
    """Payment progress of one invoice"""

    invoice_id: int
    number: Optional[str] = None
    total: Decimal
    paid: Decimal
    remaining: Decimal = Field(..., description="max(0, total - paid)")
    status: str
