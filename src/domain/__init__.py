from .base import BaseModel
from .student import Student
from .course import Course, CourseType
from .enrollment import Enrollment, BillingMode
from .price_override import PriceOverride
from .attendance_month import AttendanceMonth
from .invoice import Invoice, InvoiceStatus, format_invoice_number
from .invoice_line import InvoiceLine
from .payment import Payment, PaymentMethod
from .settings import BillingSettings

__all__ = [
    "BaseModel",
    "Student",
    "Course",
    "CourseType",
    "Enrollment",
    "BillingMode",
    "PriceOverride",
    "AttendanceMonth",
    "Invoice",
    "InvoiceStatus",
    "format_invoice_number",
    "InvoiceLine",
    "Payment",
    "PaymentMethod",
    "BillingSettings",
]
