"""Unit tests for CreatePayment, DeletePayment and QuickCashPayment

Tests cover:
- Validation of the command
- Student / invoice checks
- Invoice status recomputation (paid <-> issued)
- Rollback on failure
"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from pydantic import ValidationError

from src.app.use_cases.payments.create_payment import CreatePayment
from src.app.use_cases.payments.delete_payment import DeletePayment
from src.app.use_cases.payments.dtos import CreatePaymentCommandDTO
from src.app.use_cases.payments.quick_cash import QuickCashPayment
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.payment import Payment, PaymentMethod
from src.domain.student import Student


@pytest.fixture
def invoice():
    return Invoice(
        id=1,
        student_id=7,
        period_year=2024,
        period_month=1,
        status=InvoiceStatus.ISSUED,
        number="LS-202401-001",
        total_amount=Decimal("216.00"),
    )


@pytest.fixture
def mock_student_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=Student(id=7, full_name="Anna Berzina"))
    return repo


@pytest.fixture
def mock_invoice_repo(invoice):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=invoice)
    repo.update = AsyncMock(side_effect=lambda i: i)
    return repo


@pytest.fixture
def mock_payment_repo():
    repo = MagicMock()

    async def create(payment):
        payment.id = 50
        return payment

    repo.create = AsyncMock(side_effect=create)
    repo.sum_for_invoice = AsyncMock(return_value=Decimal("0.00"))
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def create_payment(mock_uow, mock_student_repo, mock_invoice_repo, mock_payment_repo):
    return CreatePayment(mock_uow, mock_student_repo, mock_invoice_repo, mock_payment_repo)


def make_command(**overrides):
    data = dict(
        student_id=7,
        invoice_id=1,
        amount=Decimal("216.00"),
        method=PaymentMethod.BANK,
        paid_at="2024-02-05",
    )
    data.update(overrides)
    return CreatePaymentCommandDTO(**data)


class TestCreatePaymentCommand:
    """Test command parsing and validation"""

    def test_parses_plain_date_as_midnight(self):
        command = make_command(paid_at="2024-02-05")
        assert command.paid_at == datetime(2024, 2, 5, 0, 0)

    def test_parses_iso_timestamp(self):
        command = make_command(paid_at="2024-02-05T14:30:00")
        assert command.paid_at == datetime(2024, 2, 5, 14, 30)

    def test_accepts_date_object(self):
        command = make_command(paid_at=date(2024, 2, 5))
        assert command.paid_at == datetime(2024, 2, 5)

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    def test_rejects_non_positive_amount(self, amount):
        with pytest.raises(ValidationError):
            make_command(amount=amount)

    def test_rejects_amount_that_rounds_to_zero(self):
        """
        Given: An amount below half a cent
        When: The command is built
        Then: It is rejected instead of being stored as 0.00
        """
        with pytest.raises(ValidationError):
            make_command(amount=Decimal("0.004"))

    def test_amount_is_rounded_half_up_to_cents(self):
        command = make_command(amount=Decimal("10.005"))
        assert command.amount == Decimal("10.01")

    def test_rejects_unknown_method(self):
        with pytest.raises(ValidationError):
            make_command(method="card")

    def test_rejects_malformed_date(self):
        with pytest.raises(ValidationError):
            make_command(paid_at="05.02.2024")


@pytest.mark.asyncio
class TestCreatePayment:
    """Test payment recording"""

    async def test_full_payment_marks_invoice_paid(
        self, create_payment, invoice, mock_payment_repo, mock_invoice_repo, mock_uow
    ):
        """
        Given: Issued invoice of 216.00
        When: 216.00 is paid against it
        Then: The invoice becomes paid in the same transaction
        """
        # Arrange
        mock_payment_repo.sum_for_invoice = AsyncMock(return_value=Decimal("216.00"))

        # Act
        result = await create_payment.execute(make_command())

        # Assert
        assert result.is_ok()
        assert result.value.id == 50
        assert result.value.invoice_status == "paid"
        assert invoice.status == InvoiceStatus.PAID
        assert invoice.paid_at is not None
        mock_invoice_repo.get_by_id.assert_called_once_with(1, for_update=True)
        mock_uow.commit.assert_called_once()

    async def test_one_cent_short_keeps_invoice_issued(
        self, create_payment, invoice, mock_payment_repo, mock_invoice_repo
    ):
        # Arrange
        mock_payment_repo.sum_for_invoice = AsyncMock(return_value=Decimal("215.99"))

        # Act
        result = await create_payment.execute(make_command(amount=Decimal("215.99")))

        # Assert
        assert result.is_ok()
        assert invoice.status == InvoiceStatus.ISSUED
        mock_invoice_repo.update.assert_not_called()

    async def test_amount_is_rounded(self, create_payment, mock_payment_repo):
        # Act
        await create_payment.execute(make_command(amount=Decimal("10.005"), invoice_id=None))

        # Assert
        stored = mock_payment_repo.create.call_args[0][0]
        assert stored.amount == Decimal("10.01")

    async def test_unlinked_payment_skips_invoice(
        self, create_payment, mock_invoice_repo, mock_payment_repo
    ):
        # Act
        result = await create_payment.execute(make_command(invoice_id=None))

        # Assert
        assert result.is_ok()
        assert result.value.invoice_id is None
        assert result.value.invoice_status is None
        mock_invoice_repo.get_by_id.assert_not_called()
        mock_payment_repo.sum_for_invoice.assert_not_called()

    async def test_student_not_found(self, create_payment, mock_student_repo, mock_payment_repo):
        # Arrange
        mock_student_repo.get_by_id = AsyncMock(return_value=None)

        # Act
        result = await create_payment.execute(make_command())

        # Assert
        assert result.error.code == "STUDENT_NOT_FOUND"
        mock_payment_repo.create.assert_not_called()

    async def test_invoice_not_found(self, create_payment, mock_invoice_repo):
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        # Act
        result = await create_payment.execute(make_command())

        # Assert
        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_invoice_of_other_student(self, create_payment, invoice, mock_payment_repo):
        # Arrange
        invoice.student_id = 8

        # Act
        result = await create_payment.execute(make_command())

        # Assert
        assert result.error.code == "INVOICE_STUDENT_MISMATCH"
        mock_payment_repo.create.assert_not_called()

    @pytest.mark.parametrize("status", [InvoiceStatus.DRAFT, InvoiceStatus.CANCELED])
    async def test_invoice_not_payable(self, create_payment, invoice, mock_payment_repo, status):
        # Arrange
        invoice.status = status

        # Act
        result = await create_payment.execute(make_command())

        # Assert
        assert result.error.code == "INVOICE_NOT_PAYABLE"
        mock_payment_repo.create.assert_not_called()

    async def test_failure_rolls_back(self, create_payment, mock_payment_repo, mock_uow):
        # Arrange
        mock_payment_repo.create = AsyncMock(side_effect=Exception("Database error"))

        # Act
        result = await create_payment.execute(make_command())

        # Assert
        assert result.error.code == "CREATE_PAYMENT_FAILED"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestDeletePayment:
    """Test payment deletion"""

    async def test_deleting_settling_payment_reverts_to_issued(
        self, mock_uow, mock_invoice_repo, mock_payment_repo, invoice
    ):
        """
        Given: Paid invoice settled by one payment
        When: That payment is deleted
        Then: The invoice goes back to issued and paid_at is cleared
        """
        # Arrange
        invoice.status = InvoiceStatus.PAID
        invoice.paid_at = datetime(2024, 2, 5)
        payment = Payment(
            id=50, student_id=7, invoice_id=1, amount=Decimal("216.00"), method=PaymentMethod.BANK
        )
        mock_payment_repo.get_by_id = AsyncMock(return_value=payment)
        mock_payment_repo.sum_for_invoice = AsyncMock(return_value=Decimal("0.00"))
        use_case = DeletePayment(mock_uow, mock_invoice_repo, mock_payment_repo)

        # Act
        result = await use_case.execute(50)

        # Assert
        assert result.is_ok()
        mock_payment_repo.delete.assert_called_once_with(payment)
        assert invoice.status == InvoiceStatus.ISSUED
        assert invoice.paid_at is None
        mock_uow.commit.assert_called_once()

    async def test_payment_not_found(self, mock_uow, mock_invoice_repo, mock_payment_repo):
        # Arrange
        mock_payment_repo.get_by_id = AsyncMock(return_value=None)
        use_case = DeletePayment(mock_uow, mock_invoice_repo, mock_payment_repo)

        # Act
        result = await use_case.execute(50)

        # Assert
        assert result.error.code == "PAYMENT_NOT_FOUND"
        mock_payment_repo.delete.assert_not_called()

    async def test_canceled_invoice_is_left_alone(
        self, mock_uow, mock_invoice_repo, mock_payment_repo, invoice
    ):
        # Arrange
        invoice.status = InvoiceStatus.CANCELED
        mock_payment_repo.get_by_id = AsyncMock(
            return_value=Payment(
                id=50, student_id=7, invoice_id=1, amount=Decimal("10.00"), method=PaymentMethod.CASH
            )
        )
        use_case = DeletePayment(mock_uow, mock_invoice_repo, mock_payment_repo)

        # Act
        result = await use_case.execute(50)

        # Assert
        assert result.is_ok()
        assert invoice.status == InvoiceStatus.CANCELED
        mock_invoice_repo.update.assert_not_called()

    async def test_failure_rolls_back(self, mock_uow, mock_invoice_repo, mock_payment_repo):
        # Arrange
        mock_payment_repo.get_by_id = AsyncMock(
            return_value=Payment(
                id=50, student_id=7, invoice_id=None, amount=Decimal("10.00"), method=PaymentMethod.CASH
            )
        )
        mock_payment_repo.delete = AsyncMock(side_effect=Exception("Database error"))
        use_case = DeletePayment(mock_uow, mock_invoice_repo, mock_payment_repo)

        # Act
        result = await use_case.execute(50)

        # Assert
        assert result.error.code == "DELETE_PAYMENT_FAILED"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestQuickCashPayment:
    """Test desk cash payments"""

    async def test_records_unlinked_cash_payment_dated_today(self, create_payment, mock_payment_repo):
        # Arrange
        use_case = QuickCashPayment(create_payment)

        # Act
        result = await use_case.execute(7, Decimal("20.00"), "desk")

        # Assert
        assert result.is_ok()
        stored = mock_payment_repo.create.call_args[0][0]
        assert stored.method == PaymentMethod.CASH
        assert stored.invoice_id is None
        assert stored.paid_at.date() == date.today()
        assert stored.note == "desk"

    async def test_rejects_non_positive_amount(self, create_payment, mock_payment_repo):
        # Arrange
        use_case = QuickCashPayment(create_payment)

        # Act
        result = await use_case.execute(7, Decimal("0"))

        # Assert
        assert result.error.code == "VALIDATION_ERROR"
        mock_payment_repo.create.assert_not_called()

    async def test_rejects_amount_below_one_cent(self, create_payment, mock_payment_repo):
        # Arrange
        use_case = QuickCashPayment(create_payment)

        # Act
        result = await use_case.execute(7, Decimal("0.004"))

        # Assert
        assert result.error.code == "VALIDATION_ERROR"
        mock_payment_repo.create.assert_not_called()
