"""Monthly Billing Background Worker

Generates draft invoices for the previous month and, when the settings
enable auto_issue, issues and renders them.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
import time
from datetime import datetime
from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.attendance_repository import SqlAlchemyAttendanceRepository
from src.adapter.repositories.course_repository import SqlAlchemyCourseRepository
from src.adapter.repositories.enrollment_repository import SqlAlchemyEnrollmentRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.price_override_repository import SqlAlchemyPriceOverrideRepository
from src.adapter.repositories.settings_repository import SqlAlchemySettingsRepository
from src.adapter.repositories.student_repository import SqlAlchemyStudentRepository
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.pdf_service import PdfService
from src.app.use_cases.billing import (
    GenerateDrafts,
    IssueAllInvoices,
    IssueInvoice,
    MonthlyBillingResultDTO,
    PriceResolver,
    RenderInvoice,
)
from src.app.use_cases.billing.period import previous_period

logger = logging.getLogger(__name__)


class MonthlyBillingWorker:
    """
    Background worker for monthly billing

    Features:
    - Bills the previous month by default
    - Re-running is safe: drafts are rebuilt, issued invoices are skipped
    - Issues right after generation when settings.auto_issue is set
    - Can run once or continuously

    Usage:
        # Run once for specific month
        worker = MonthlyBillingWorker()
        result = await worker.run_once(year=2024, month=1)

        # Run for previous month (typical cron usage)
        result = await worker.run_once()

        # Run continuously (checks daily whether the billing day was reached)
        await worker.run_forever()
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        output_dir: Optional[str] = None,
        pdf_service: Optional[PdfService] = None,
        bill_all_when_none_active: Optional[bool] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            output_dir: PDF output directory (defaults to ApplicationConfig.INVOICE_OUTPUT_DIR)
            pdf_service: PDF renderer (defaults to ReportLabPdfService)
            bill_all_when_none_active: Draft generation fallback policy
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.output_dir = output_dir or ApplicationConfig.INVOICE_OUTPUT_DIR
        self.pdf_service = pdf_service or ReportLabPdfService()
        self.bill_all_when_none_active = (
            ApplicationConfig.BILL_ALL_STUDENTS_WHEN_NONE_ACTIVE
            if bill_all_when_none_active is None
            else bill_all_when_none_active
        )

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("MonthlyBillingWorker initialized")

    def _get_billing_period(
        self, year: Optional[int] = None, month: Optional[int] = None
    ) -> Tuple[int, int]:
        """
        Billing period to run

        If year/month not provided, uses previous month.
        """
        if year is None or month is None:
            return previous_period(datetime.utcnow().date())
        return year, month

    async def run_once(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> MonthlyBillingResultDTO:
        """
        Run billing once for the specified period

        Args:
            year: Year (optional, defaults to previous month)
            month: Month (optional, defaults to previous month)

        Returns:
            MonthlyBillingResultDTO with summary
        """
        start_time = time.time()
        year, month = self._get_billing_period(year, month)
        result = MonthlyBillingResultDTO(year=year, month=month)

        logger.info(f"Starting monthly billing for {year:04d}-{month:02d}")

        async with self.async_session_factory() as session:
            uow = SqlAlchemyUnitOfWork(session)
            invoice_repo = SqlAlchemyInvoiceRepository(session)
            invoice_line_repo = SqlAlchemyInvoiceLineRepository(session)
            student_repo = SqlAlchemyStudentRepository(session)
            settings_repo = SqlAlchemySettingsRepository(session)

            # Step 1: Generate drafts
            generate_uc = GenerateDrafts(
                uow=uow,
                student_repo=student_repo,
                enrollment_repo=SqlAlchemyEnrollmentRepository(session),
                attendance_repo=SqlAlchemyAttendanceRepository(session),
                invoice_repo=invoice_repo,
                invoice_line_repo=invoice_line_repo,
                price_resolver=PriceResolver(
                    SqlAlchemyCourseRepository(session),
                    SqlAlchemyPriceOverrideRepository(session),
                ),
                bill_all_when_none_active=self.bill_all_when_none_active,
            )

            drafts_result = await generate_uc.execute(year, month)

            if drafts_result.is_err():
                logger.error(
                    f"Draft generation for {year:04d}-{month:02d} failed: "
                    f"{drafts_result.error.message}"
                )
                result.error = drafts_result.error
            else:
                result.drafts = drafts_result.value

                # Step 2: Issue when enabled
                settings = await settings_repo.get_or_create()
                await uow.commit()

                if settings.auto_issue:
                    issue_all_uc = IssueAllInvoices(
                        invoice_repo=invoice_repo,
                        issue_invoice=IssueInvoice(uow, invoice_repo, settings_repo),
                        render_invoice=RenderInvoice(
                            invoice_repo,
                            invoice_line_repo,
                            student_repo,
                            settings_repo,
                            self.pdf_service,
                            self.output_dir,
                        ),
                    )
                    issue_result = await issue_all_uc.execute(year, month)

                    if issue_result.is_err():
                        result.error = issue_result.error
                    else:
                        result.issued = issue_result.value
                        result.error = issue_result.value.error

        result.execution_time_ms = int((time.time() - start_time) * 1000)

        logger.info(
            f"Monthly billing {year:04d}-{month:02d} complete: "
            f"drafts={result.drafts.model_dump() if result.drafts else None}, "
            f"issued={result.issued.count if result.issued else 0}, "
            f"{result.execution_time_ms}ms"
        )

        return result

    async def _billing_day(self) -> int:
        async with self.async_session_factory() as session:
            settings = await SqlAlchemySettingsRepository(session).get_or_create()
            await session.commit()
            return settings.invoice_day_of_month

    async def run_forever(self, check_interval_seconds: Optional[int] = None):
        """
        Run billing continuously, once per month

        The previous month is billed on the first check on or after
        settings.invoice_day_of_month.

        Args:
            check_interval_seconds: Seconds between checks (default from config, 24 hours)
        """
        interval = check_interval_seconds or ApplicationConfig.MONTHLY_BILLING_CHECK_INTERVAL_SECONDS
        logger.info(f"Starting continuous monthly billing with {interval}s interval")

        last_processed_month = None

        while True:
            try:
                today = datetime.utcnow()
                current_month = (today.year, today.month)
                billing_day = await self._billing_day()

                if today.day >= billing_day and last_processed_month != current_month:
                    result = await self.run_once()
                    last_processed_month = current_month
                    logger.info(
                        f"Processed monthly billing for {result.year:04d}-{result.month:02d}"
                    )
                else:
                    logger.debug("Skipping billing check - before billing day or already processed")

            except Exception as e:
                logger.error(f"Billing cycle failed: {e}")

            await asyncio.sleep(interval)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("MonthlyBillingWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run for previous month
        python -m src.worker.monthly_billing

        # Run for specific month
        python -m src.worker.monthly_billing --year 2024 --month 1

        # Run continuously
        python -m src.worker.monthly_billing --continuous
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Monthly Billing Worker")
    parser.add_argument("--year", type=int, help="Year to bill")
    parser.add_argument("--month", type=int, help="Month to bill")
    parser.add_argument(
        "--continuous", action="store_true", help="Run continuously"
    )
    args = parser.parse_args()

    if args.continuous and not ApplicationConfig.MONTHLY_BILLING_ENABLED:
        logger.warning("Monthly billing is disabled (MONTHLY_BILLING_ENABLED)")
        return

    worker = MonthlyBillingWorker()

    try:
        if args.continuous:
            await worker.run_forever()
        else:
            result = await worker.run_once(year=args.year, month=args.month)
            print(f"Billing complete for {result.year:04d}-{result.month:02d}:")
            if result.drafts:
                print(f"  Drafts created: {result.drafts.created}")
                print(f"  Drafts updated: {result.drafts.updated}")
                print(f"  Skipped (already issued): {result.drafts.skipped_has_invoice}")
                print(f"  Skipped (no lines): {result.drafts.skipped_no_lines}")
            if result.issued:
                print(f"  Invoices issued: {result.issued.count}")
            if result.error:
                print(f"  Error: {result.error.code} {result.error.message}")
            print(f"  Execution time: {result.execution_time_ms}ms")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
