"""Unit tests for GenerateDrafts use case

Tests cover:
- Per-lesson and subscription lines
- Draft creation, rebuild and skip rules
- Active-student fallback
- Period validation and rollback on failure
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing.generate_drafts import GenerateDrafts
from src.app.use_cases.billing.resolve_prices import ResolvedPrices
from src.domain.attendance_month import AttendanceMonth
from src.domain.enrollment import BillingMode, Enrollment
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.student import Student


@pytest.fixture
def student():
    return Student(id=1, full_name="Anna Berzina", is_active=True)


@pytest.fixture
def enrollments():
    return [
        Enrollment(id=3, student_id=1, course_id=10, billing_mode=BillingMode.PER_LESSON),
        Enrollment(id=4, student_id=1, course_id=11, billing_mode=BillingMode.SUBSCRIPTION),
    ]


@pytest.fixture
def mock_student_repo(student):
    repo = MagicMock()
    repo.get_active = AsyncMock(return_value=[student])
    repo.get_all = AsyncMock(return_value=[student])
    return repo


@pytest.fixture
def mock_enrollment_repo(enrollments):
    repo = MagicMock()
    repo.get_by_student_id = AsyncMock(return_value=enrollments)
    return repo


@pytest.fixture
def mock_attendance_repo():
    repo = MagicMock()
    repo.get_for_period = AsyncMock(
        return_value=AttendanceMonth(student_id=1, course_id=10, year=2024, month=1, lessons_count=8)
    )
    return repo


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.get_for_period = AsyncMock(return_value=None)

    async def create(invoice):
        invoice.id = 100
        return invoice

    repo.create = AsyncMock(side_effect=create)
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.fixture
def mock_invoice_line_repo():
    repo = MagicMock()
    repo.create_many = AsyncMock(side_effect=lambda lines: lines)
    repo.delete_by_invoice_id = AsyncMock(return_value=2)
    return repo


@pytest.fixture
def mock_price_resolver():
    resolver = MagicMock()

    async def resolve(enrollment, year, month):
        if enrollment.billing_mode == BillingMode.PER_LESSON:
            return ResolvedPrices(Decimal("12.00"), Decimal("0.00"), "English B1")
        return ResolvedPrices(Decimal("0.00"), Decimal("120.00"), "German A2")

    resolver.resolve = AsyncMock(side_effect=resolve)
    return resolver


@pytest.fixture
def generate_drafts(
    mock_uow,
    mock_student_repo,
    mock_enrollment_repo,
    mock_attendance_repo,
    mock_invoice_repo,
    mock_invoice_line_repo,
    mock_price_resolver,
):
    return GenerateDrafts(
        uow=mock_uow,
        student_repo=mock_student_repo,
        enrollment_repo=mock_enrollment_repo,
        attendance_repo=mock_attendance_repo,
        invoice_repo=mock_invoice_repo,
        invoice_line_repo=mock_invoice_line_repo,
        price_resolver=mock_price_resolver,
    )


@pytest.mark.asyncio
class TestGenerateDraftsCreate:
    """Test draft creation"""

    async def test_creates_draft_with_lesson_and_subscription_lines(
        self, generate_drafts, mock_invoice_repo, mock_invoice_line_repo, mock_uow
    ):
        """
        Given: 8 lessons at 12.00 and a 120.00 subscription
        When: Drafts are generated
        Then: One draft with total 216.00 and two lines is created
        """
        # Act
        result = await generate_drafts.execute(2024, 1)

        # Assert
        assert result.is_ok()
        assert result.value.created == 1
        assert result.value.updated == 0

        invoice = mock_invoice_repo.create.call_args[0][0]
        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.total_amount == Decimal("216.00")
        assert invoice.period_year == 2024
        assert invoice.period_month == 1

        lines = mock_invoice_line_repo.create_many.call_args[0][0]
        assert [(line.qty, line.unit_price, line.amount) for line in lines] == [
            (8, Decimal("12.00"), Decimal("96.00")),
            (1, Decimal("120.00"), Decimal("120.00")),
        ]
        assert lines[0].description == "Lessons: English B1 (01.2024)"
        assert lines[1].description == "Subscription: German A2 (01.2024)"
        assert all(line.invoice_id == 100 for line in lines)
        mock_uow.commit.assert_called_once()

    async def test_missing_attendance_gives_zero_quantity_line(
        self, generate_drafts, mock_attendance_repo, mock_invoice_line_repo
    ):
        # Arrange
        mock_attendance_repo.get_for_period = AsyncMock(return_value=None)

        # Act
        result = await generate_drafts.execute(2024, 1)

        # Assert
        assert result.is_ok()
        lines = mock_invoice_line_repo.create_many.call_args[0][0]
        assert lines[0].qty == 0
        assert lines[0].amount == Decimal("0.00")

    async def test_free_subscription_has_no_line(
        self, generate_drafts, mock_enrollment_repo, mock_price_resolver, mock_invoice_repo
    ):
        """
        Given: Only a subscription enrollment priced 0
        When: Drafts are generated
        Then: No invoice is created and the student counts as skipped_no_lines
        """
        # Arrange
        mock_enrollment_repo.get_by_student_id = AsyncMock(
            return_value=[
                Enrollment(id=4, student_id=1, course_id=11, billing_mode=BillingMode.SUBSCRIPTION)
            ]
        )
        mock_price_resolver.resolve = AsyncMock(
            return_value=ResolvedPrices(Decimal("0.00"), Decimal("0.00"), "Free club")
        )

        # Act
        result = await generate_drafts.execute(2024, 1)

        # Assert
        assert result.is_ok()
        assert result.value.skipped_no_lines == 1
        assert result.value.created == 0
        mock_invoice_repo.create.assert_not_called()

    async def test_student_without_enrollments_is_not_counted(
        self, generate_drafts, mock_enrollment_repo, mock_invoice_repo
    ):
        # Arrange
        mock_enrollment_repo.get_by_student_id = AsyncMock(return_value=[])

        # Act
        result = await generate_drafts.execute(2024, 1)

        # Assert
        value = result.value
        assert (value.created, value.updated, value.skipped_has_invoice, value.skipped_no_lines) == (0, 0, 0, 0)
        mock_invoice_repo.get_for_period.assert_not_called()

    async def test_unresolved_enrollment_contributes_no_line(
        self, generate_drafts, mock_price_resolver, mock_invoice_line_repo
    ):
        # Arrange
        async def resolve(enrollment, year, month):
            if enrollment.id == 3:
                return None
            return ResolvedPrices(Decimal("0.00"), Decimal("120.00"), "German A2")

        mock_price_resolver.resolve = AsyncMock(side_effect=resolve)

        # Act
        result = await generate_drafts.execute(2024, 1)

        # Assert
        assert result.value.created == 1
        lines = mock_invoice_line_repo.create_many.call_args[0][0]
        assert len(lines) == 1
        assert lines[0].enrollment_id == 4


@pytest.mark.asyncio
class TestGenerateDraftsExisting:
    """Test handling of existing invoices"""

    async def test_rebuilds_existing_draft(
        self, generate_drafts, mock_invoice_repo, mock_invoice_line_repo
    ):
        """
        Given: A draft already exists for the period
        When: Drafts are generated again
        Then: Lines are replaced and the total updated in place
        """
        # Arrange
        existing = Invoice(
            id=55,
            student_id=1,
            period_year=2024,
            period_month=1,
            status=InvoiceStatus.DRAFT,
            total_amount=Decimal("50.00"),
        )
        mock_invoice_repo.get_for_period = AsyncMock(return_value=existing)

        # Act
        result = await generate_drafts.execute(2024, 1)

        # Assert
        assert result.value.updated == 1
        assert result.value.created == 0
        mock_invoice_repo.get_for_period.assert_called_once_with(1, 2024, 1, for_update=True)
        mock_invoice_line_repo.delete_by_invoice_id.assert_called_once_with(55)
        mock_invoice_repo.update.assert_called_once()
        assert existing.total_amount == Decimal("216.00")
        assert all(line.invoice_id == 55 for line in mock_invoice_line_repo.create_many.call_args[0][0])
        mock_invoice_repo.create.assert_not_called()

    @pytest.mark.parametrize(
        "status", [InvoiceStatus.ISSUED, InvoiceStatus.PAID, InvoiceStatus.CANCELED]
    )
    async def test_does_not_touch_non_draft_invoice(
        self, generate_drafts, mock_invoice_repo, mock_invoice_line_repo, status
    ):
        # Arrange
        existing = Invoice(
            id=55,
            student_id=1,
            period_year=2024,
            period_month=1,
            status=status,
            total_amount=Decimal("50.00"),
            number="LS-202401-001",
        )
        mock_invoice_repo.get_for_period = AsyncMock(return_value=existing)

        # Act
        result = await generate_drafts.execute(2024, 1)

        # Assert
        assert result.value.skipped_has_invoice == 1
        assert existing.total_amount == Decimal("50.00")
        mock_invoice_line_repo.delete_by_invoice_id.assert_not_called()
        mock_invoice_line_repo.create_many.assert_not_called()
        mock_invoice_repo.update.assert_not_called()


@pytest.mark.asyncio
class TestGenerateDraftsStudents:
    """Test student selection"""

    async def test_falls_back_to_all_students_when_none_active(
        self, generate_drafts, mock_student_repo, student
    ):
        # Arrange
        mock_student_repo.get_active = AsyncMock(return_value=[])
        mock_student_repo.get_all = AsyncMock(return_value=[student])

        # Act
        result = await generate_drafts.execute(2024, 1)

        # Assert
        assert result.value.created == 1
        mock_student_repo.get_all.assert_called_once()

    async def test_fallback_can_be_disabled(
        self, generate_drafts, mock_student_repo, mock_invoice_repo
    ):
        # Arrange
        generate_drafts.bill_all_when_none_active = False
        mock_student_repo.get_active = AsyncMock(return_value=[])

        # Act
        result = await generate_drafts.execute(2024, 1)

        # Assert
        assert result.value.created == 0
        mock_student_repo.get_all.assert_not_called()
        mock_invoice_repo.create.assert_not_called()


@pytest.mark.asyncio
class TestGenerateDraftsErrors:
    """Test validation and failure handling"""

    @pytest.mark.parametrize("year,month", [(2024, 0), (2024, 13), (0, 5)])
    async def test_rejects_invalid_period(self, generate_drafts, mock_student_repo, year, month):
        # Act
        result = await generate_drafts.execute(year, month)

        # Assert
        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        mock_student_repo.get_active.assert_not_called()

    async def test_storage_failure_rolls_back(self, generate_drafts, mock_invoice_repo, mock_uow):
        # Arrange
        mock_invoice_repo.create = AsyncMock(side_effect=Exception("Database error"))

        # Act
        result = await generate_drafts.execute(2024, 1)

        # Assert
        assert result.is_err()
        assert result.error.code == "GENERATE_DRAFTS_FAILED"
        assert "Database error" in result.error.reason
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
