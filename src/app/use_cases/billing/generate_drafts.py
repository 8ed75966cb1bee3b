"""GenerateDrafts Use Case

Builds one draft invoice per student for a billing month from enrollments,
resolved prices and attendance.
"""

import logging
from typing import List
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.student_repository import StudentRepository
from src.app.repositories.enrollment_repository import EnrollmentRepository
from src.app.repositories.attendance_repository import AttendanceRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.enrollment import BillingMode, Enrollment
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLine
from src.domain.money import round2
from src.domain.student import Student
from .dtos import GenerateDraftsResultDTO
from .period import validate_period
from .resolve_prices import PriceResolver

logger = logging.getLogger(__name__)


class GenerateDrafts:
    """
    Use Case: Generate or rebuild draft invoices for a period

    Business Rules:
    1. Active students are billed; if none is active and
       bill_all_when_none_active is set, every student is billed
    2. per_lesson: qty = attended lessons (0 without attendance record),
       a line is always emitted
    3. subscription: one line of qty 1, skipped when the price is <= 0
    4. Students without lines keep their invoice untouched
    5. Existing drafts are rebuilt from scratch (lines deleted and
       recreated, total replaced); issued, paid and canceled invoices
       are never touched
    6. Each student is committed in its own transaction

    Flow (per student):
    1. Load enrollments (skip student if none)
    2. Resolve prices and build lines
    3. Lock the period invoice, if any
    4. Create, rebuild or skip
    5. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        student_repo: StudentRepository,
        enrollment_repo: EnrollmentRepository,
        attendance_repo: AttendanceRepository,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        price_resolver: PriceResolver,
        bill_all_when_none_active: bool = True,
    ):
        self.uow = uow
        self.student_repo = student_repo
        self.enrollment_repo = enrollment_repo
        self.attendance_repo = attendance_repo
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.price_resolver = price_resolver
        self.bill_all_when_none_active = bill_all_when_none_active

    async def execute(self, year: int, month: int) -> Result[GenerateDraftsResultDTO]:
        """
        Execute draft generation

        Args:
            year: Period year
            month: Period month (1-12)

        Returns:
            Result[GenerateDraftsResultDTO]: Counters per outcome or error
        """
        period_error = validate_period(year, month)
        if period_error:
            return Return.err(period_error)

        result = GenerateDraftsResultDTO(year=year, month=month)

        try:
            students = await self._students_to_bill()
            logger.info(f"Generating drafts for {year:04d}-{month:02d}: {len(students)} students")

            for student in students:
                enrollments = await self.enrollment_repo.get_by_student_id(student.id)
                if not enrollments:
                    continue

                lines = await self._build_lines(enrollments, year, month)
                if not lines:
                    result.skipped_no_lines += 1
                    continue

                total = round2(sum(line.amount for line in lines))

                existing = await self.invoice_repo.get_for_period(
                    student.id, year, month, for_update=True
                )

                if existing is None:
                    invoice = await self.invoice_repo.create(
                        Invoice(
                            student_id=student.id,
                            period_year=year,
                            period_month=month,
                            status=InvoiceStatus.DRAFT,
                            total_amount=total,
                        )
                    )
                    await self._attach_lines(invoice.id, lines)
                    result.created += 1

                elif existing.status == InvoiceStatus.DRAFT:
                    await self.invoice_line_repo.delete_by_invoice_id(existing.id)
                    await self._attach_lines(existing.id, lines)
                    existing.total_amount = total
                    await self.invoice_repo.update(existing)
                    result.updated += 1

                else:
                    result.skipped_has_invoice += 1

                await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Draft generation for {year:04d}-{month:02d} failed: {e}")
            return Return.err(
                Error(
                    code="GENERATE_DRAFTS_FAILED",
                    message=f"Failed to generate drafts for {year:04d}-{month:02d}",
                    reason=str(e),
                )
            )

        logger.info(
            f"Drafts {year:04d}-{month:02d}: created={result.created} updated={result.updated} "
            f"skipped_has_invoice={result.skipped_has_invoice} "
            f"skipped_no_lines={result.skipped_no_lines}"
        )
        return Return.ok(result)

    async def _students_to_bill(self) -> List[Student]:
        students = await self.student_repo.get_active()
        if not students and self.bill_all_when_none_active:
            # Legacy data may never have set the flag; this can also pull in
            # deactivated students.
            students = await self.student_repo.get_all()
            if students:
                logger.warning(
                    f"No active students found, billing all {len(students)} students"
                )
        return students

    async def _build_lines(
        self, enrollments: List[Enrollment], year: int, month: int
    ) -> List[InvoiceLine]:
        lines: List[InvoiceLine] = []

        for enrollment in enrollments:
            prices = await self.price_resolver.resolve(enrollment, year, month)
            if prices is None:
                continue

            if enrollment.billing_mode == BillingMode.PER_LESSON:
                attendance = await self.attendance_repo.get_for_period(
                    enrollment.student_id, enrollment.course_id, year, month
                )
                qty = attendance.lessons_count if attendance else 0
                lines.append(
                    self._make_line(
                        enrollment,
                        f"Lessons: {prices.course_name} ({month:02d}.{year:04d})",
                        qty,
                        prices.lesson_price,
                    )
                )

            elif enrollment.billing_mode == BillingMode.SUBSCRIPTION:
                if prices.subscription_price <= 0:
                    continue
                lines.append(
                    self._make_line(
                        enrollment,
                        f"Subscription: {prices.course_name} ({month:02d}.{year:04d})",
                        1,
                        prices.subscription_price,
                    )
                )

            else:
                logger.warning(
                    f"Unexpected billing mode {enrollment.billing_mode!r} "
                    f"on enrollment {enrollment.id}, skipped"
                )

        return lines

    @staticmethod
    def _make_line(enrollment: Enrollment, description: str, qty: int, unit_price) -> InvoiceLine:
        unit_price = round2(unit_price)
        return InvoiceLine(
            enrollment_id=enrollment.id,
            description=description,
            qty=qty,
            unit_price=unit_price,
            amount=round2(qty * unit_price),
        )

    async def _attach_lines(self, invoice_id: int, lines: List[InvoiceLine]) -> None:
        for line in lines:
            line.invoice_id = invoice_id
        await self.invoice_line_repo.create_many(lines)
