"""Request schemas for Billing API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.app.use_cases.payments.dtos import parse_paid_at, round_amount
from src.domain.payment import PaymentMethod


class PaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /billing/payments endpoint.
    """

    student_id: int = Field(..., gt=0, description="Paying student")

    invoice_id: Optional[int] = Field(
        default=None,
        gt=0,
        description="Invoice the payment settles (omit for an unlinked payment)"
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount received (must be > 0)"
    )

    method: PaymentMethod = Field(..., description="cash or bank")

    paid_at: datetime = Field(
        ...,
        description="Payment date (YYYY-MM-DD) or ISO-8601 timestamp"
    )

    note: str = Field(default="", max_length=500)

    @field_validator("paid_at", mode="before")
    @classmethod
    def check_paid_at(cls, value):
        return parse_paid_at(value)

    @field_validator("amount")
    @classmethod
    def check_amount(cls, value):
        return round_amount(value)


class QuickCashRequestSchema(BaseModel):
    """
    Request schema for a desk cash payment

    Used for POST /billing/payments/quick-cash endpoint.
    """

    student_id: int = Field(..., gt=0)
    amount: Decimal = Field(..., gt=0)
    note: str = Field(default="", max_length=500)

    @field_validator("amount")
    @classmethod
    def check_amount(cls, value):
        return round_amount(value)


class PriceOverrideRequestSchema(BaseModel):
    """
    Request schema for adding a price override

    Used for POST /billing/enrollments/{enrollment_id}/price-overrides endpoint.
    """

    valid_from: date = Field(..., description="First day the override applies")
    valid_to: Optional[date] = Field(default=None, description="Last day (omit for open-ended)")
    lesson_price: Optional[Decimal] = Field(default=None, ge=0)
    subscription_price: Optional[Decimal] = Field(default=None, ge=0)
