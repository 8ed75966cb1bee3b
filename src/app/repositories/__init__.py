from .student_repository import StudentRepository
from .course_repository import CourseRepository
from .enrollment_repository import EnrollmentRepository
from .price_override_repository import PriceOverrideRepository
from .attendance_repository import AttendanceRepository
from .invoice_repository import InvoiceRepository
from .invoice_line_repository import InvoiceLineRepository
from .payment_repository import PaymentRepository
from .settings_repository import SettingsRepository

__all__ = [
    "StudentRepository",
    "CourseRepository",
    "EnrollmentRepository",
    "PriceOverrideRepository",
    "AttendanceRepository",
    "InvoiceRepository",
    "InvoiceLineRepository",
    "PaymentRepository",
    "SettingsRepository",
]
