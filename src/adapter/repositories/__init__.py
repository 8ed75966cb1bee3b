from .student_repository import SqlAlchemyStudentRepository
from .course_repository import SqlAlchemyCourseRepository
from .enrollment_repository import SqlAlchemyEnrollmentRepository
from .price_override_repository import SqlAlchemyPriceOverrideRepository
from .attendance_repository import SqlAlchemyAttendanceRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_repository import SqlAlchemyInvoiceLineRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .settings_repository import SqlAlchemySettingsRepository

__all__ = [
    "SqlAlchemyStudentRepository",
    "SqlAlchemyCourseRepository",
    "SqlAlchemyEnrollmentRepository",
    "SqlAlchemyPriceOverrideRepository",
    "SqlAlchemyAttendanceRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemySettingsRepository",
]
