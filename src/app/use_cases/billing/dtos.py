"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator
from libs.result import Error


class GenerateDraftsResultDTO(BaseModel):
    """
    Response DTO for draft generation

    Returned by GenerateDrafts use case.
    """

    year: int = Field(..., description="Period year")
    month: int = Field(..., description="Period month")

    created: int = Field(
        default=0,
        description="New draft invoices created"
    )

    updated: int = Field(
        default=0,
        description="Existing drafts rebuilt"
    )

    skipped_has_invoice: int = Field(
        default=0,
        description="Students skipped because their invoice is issued, paid or canceled"
    )

    skipped_no_lines: int = Field(
        default=0,
        description="Students skipped because no enrollment produced a line"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "year": 2024,
                "month": 1,
                "created": 12,
                "updated": 3,
                "skipped_has_invoice": 1,
                "skipped_no_lines": 2
            }
        }


class InvoiceLineDTO(BaseModel):
    """Single line item within an invoice"""

    enrollment_id: int = Field(..., description="Billed enrollment")
    description: str = Field(..., description="Line item description")
    qty: int = Field(..., description="Quantity (lessons or 1 for a subscription)")
    unit_price: Decimal = Field(..., description="Price per unit")
    amount: Decimal = Field(..., description="Line total")


class InvoiceListItemDTO(BaseModel):
    """Invoice summary row for list views"""

    id: int = Field(..., description="Invoice ID")
    student_id: int = Field(..., description="Student ID")
    student_name: str = Field(default="", description="Student's full name")
    year: int = Field(..., description="Period year")
    month: int = Field(..., description="Period month")
    total: Decimal = Field(..., description="Invoice total")
    status: str = Field(..., description="draft, issued, paid or canceled")
    lines_count: int = Field(default=0, description="Number of line items")
    number: Optional[str] = Field(default=None, description="Invoice number (None for drafts)")


class InvoiceDetailDTO(InvoiceListItemDTO):
    """Invoice with all of its line items"""

    issued_at: Optional[datetime] = Field(default=None)
    paid_at: Optional[datetime] = Field(default=None)
    lines: List[InvoiceLineDTO] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "student_id": 7,
                "student_name": "Anna Berzina",
                "year": 2024,
                "month": 1,
                "total": "216.00",
                "status": "issued",
                "lines_count": 2,
                "number": "LS-202401-001",
                "lines": [
                    {
                        "enrollment_id": 3,
                        "description": "Lessons: English B1 (01.2024)",
                        "qty": 8,
                        "unit_price": "12.00",
                        "amount": "96.00"
                    },
                    {
                        "enrollment_id": 4,
                        "description": "Subscription: German A2 (01.2024)",
                        "qty": 1,
                        "unit_price": "120.00",
                        "amount": "120.00"
                    }
                ]
            }
        }


class IssuedInvoiceDTO(BaseModel):
    """Response DTO for assigning an invoice number"""

    invoice_id: int = Field(..., description="Invoice ID")
    number: str = Field(..., description="Assigned invoice number")
    already_issued: bool = Field(
        default=False,
        description="True if the invoice was numbered by an earlier call"
    )


class RenderedInvoiceDTO(BaseModel):
    """Response DTO for invoice rendering and issuing"""

    invoice_id: int = Field(..., description="Invoice ID")
    number: str = Field(..., description="Invoice number")
    path: str = Field(..., description="Path of the generated PDF")

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "number": "LS-202401-001",
                "path": "/srv/invoices/2024/01/LS-202401-001.pdf"
            }
        }


class IssueAllResultDTO(BaseModel):
    """
    Response DTO for issuing every draft of a period

    When ``error`` is set, the run stopped at ``failed_invoice_id``; the
    count and paths cover the invoices finished before it.
    """

    year: int = Field(..., description="Period year")
    month: int = Field(..., description="Period month")
    count: int = Field(default=0, description="Invoices issued and rendered")
    paths: List[str] = Field(default_factory=list, description="Generated PDF paths")
    failed_invoice_id: Optional[int] = Field(default=None)
    error: Optional[Error] = Field(default=None)


class CreatePriceOverrideCommandDTO(BaseModel):
    """
    Command DTO for adding a price override to an enrollment

    Used as input to CreatePriceOverride use case.
    """

    enrollment_id: int = Field(..., gt=0, description="Enrollment ID")
    valid_from: date = Field(..., description="First day the override applies")
    valid_to: Optional[date] = Field(default=None, description="Last day (None = open-ended)")
    lesson_price: Optional[Decimal] = Field(default=None, ge=0)
    subscription_price: Optional[Decimal] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_window_and_prices(self):
        if self.valid_to is not None and self.valid_to < self.valid_from:
            raise ValueError("valid_to must not be before valid_from")
        if self.lesson_price is None and self.subscription_price is None:
            raise ValueError("at least one of lesson_price or subscription_price is required")
        return self


class PriceOverrideResponseDTO(BaseModel):
    """Response DTO for a stored price override"""

    id: int
    enrollment_id: int
    valid_from: date
    valid_to: Optional[date] = None
    lesson_price: Optional[Decimal] = None
    subscription_price: Optional[Decimal] = None


class MonthlyBillingResultDTO(BaseModel):
    """
    Result DTO for one monthly billing worker run

    ``issued`` is only set when the settings enable auto_issue.
    """

    year: int
    month: int
    drafts: Optional[GenerateDraftsResultDTO] = Field(default=None)
    issued: Optional[IssueAllResultDTO] = Field(default=None)
    error: Optional[Error] = Field(default=None)
    execution_time_ms: int = Field(default=0)
