"""Integration tests for Billing API endpoints"""

import pytest
import pytest_asyncio
from decimal import Decimal
from httpx import AsyncClient

from src.domain.enrollment import BillingMode

API = "/api/billing"


@pytest_asyncio.fixture
async def january_data(seed):
    """Anna: 8 lessons at 15.00 -20% plus a 120.00 subscription in January 2024"""
    student = await seed.student("Anna Berzina")
    english = await seed.course("English B1", lesson_price="15.00")
    german = await seed.course("German A2", subscription_price="120.00")
    lessons = await seed.enrollment(student, english, BillingMode.PER_LESSON, discount_pct="20")
    await seed.enrollment(student, german, BillingMode.SUBSCRIPTION)
    await seed.attendance(student, english, 2024, 1, 8)
    return {"student": student, "lessons_enrollment": lessons}


async def generate_and_issue(client: AsyncClient) -> dict:
    await client.post(f"{API}/invoices/drafts/2024/1")
    invoices = (await client.get(f"{API}/invoices", params={"year": 2024, "month": 1})).json()
    response = await client.post(f"{API}/invoices/{invoices[0]['id']}/issue")
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
class TestInvoiceAPIIntegration:
    """Integration test suite for invoice endpoints"""

    async def test_generate_drafts_and_list(self, client: AsyncClient, january_data):
        # Act
        response = await client.post(f"{API}/invoices/drafts/2024/1")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["created"] == 1
        assert data["updated"] == 0

        listing = await client.get(f"{API}/invoices", params={"year": 2024, "month": 1, "status": "draft"})
        assert listing.status_code == 200
        rows = listing.json()
        assert len(rows) == 1
        assert rows[0]["student_name"] == "Anna Berzina"
        assert rows[0]["lines_count"] == 2
        assert Decimal(rows[0]["total"]) == Decimal("216.00")
        assert rows[0]["number"] is None

    async def test_invalid_period_returns_422(self, client: AsyncClient):
        response = await client.post(f"{API}/invoices/drafts/2024/13")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_invalid_status_filter_returns_422(self, client: AsyncClient):
        response = await client.get(f"{API}/invoices", params={"year": 2024, "month": 1, "status": "late"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_get_invoice_detail(self, client: AsyncClient, january_data):
        # Arrange
        await client.post(f"{API}/invoices/drafts/2024/1")
        invoice_id = (await client.get(f"{API}/invoices", params={"year": 2024, "month": 1})).json()[0]["id"]

        # Act
        response = await client.get(f"{API}/invoices/{invoice_id}")

        # Assert
        assert response.status_code == 200
        lines = response.json()["lines"]
        assert lines[0]["description"] == "Lessons: English B1 (01.2024)"
        assert lines[0]["qty"] == 8
        assert Decimal(lines[0]["unit_price"]) == Decimal("12.00")
        assert lines[1]["description"] == "Subscription: German A2 (01.2024)"

    async def test_unknown_invoice_returns_404(self, client: AsyncClient):
        response = await client.get(f"{API}/invoices/999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "INVOICE_NOT_FOUND"

    async def test_issue_renders_pdf(self, client: AsyncClient, january_data, tmp_path):
        # Act
        issued = await generate_and_issue(client)

        # Assert
        assert issued["number"] == "LS-202401-001"
        assert issued["path"].endswith("2024/01/LS-202401-001.pdf")
        assert (tmp_path / "invoices" / "2024" / "01" / "LS-202401-001.pdf").exists()

        pdf = await client.get(f"{API}/invoices/{issued['invoice_id']}/pdf")
        assert pdf.status_code == 200
        assert pdf.headers["content-type"] == "application/pdf"
        assert pdf.content.startswith(b"%PDF")

    async def test_issued_invoice_cannot_be_deleted(self, client: AsyncClient, january_data):
        # Arrange
        issued = await generate_and_issue(client)

        # Act
        response = await client.delete(f"{API}/invoices/{issued['invoice_id']}")

        # Assert
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVOICE_NOT_DRAFT"

    async def test_delete_draft(self, client: AsyncClient, january_data):
        # Arrange
        await client.post(f"{API}/invoices/drafts/2024/1")
        invoice_id = (await client.get(f"{API}/invoices", params={"year": 2024, "month": 1})).json()[0]["id"]

        # Act
        response = await client.delete(f"{API}/invoices/{invoice_id}")

        # Assert
        assert response.status_code == 204
        assert (await client.get(f"{API}/invoices/{invoice_id}")).status_code == 404

    async def test_issue_month(self, client: AsyncClient, january_data):
        # Arrange
        await client.post(f"{API}/invoices/drafts/2024/1")

        # Act
        response = await client.post(f"{API}/invoices/issue/2024/1")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["failed_invoice_id"] is None


@pytest.mark.asyncio
class TestPaymentAPIIntegration:
    """Integration test suite for payment and balance endpoints"""

    async def test_payment_settles_invoice(self, client: AsyncClient, january_data):
        # Arrange
        issued = await generate_and_issue(client)
        payload = {
            "student_id": january_data["student"].id,
            "invoice_id": issued["invoice_id"],
            "amount": "216.00",
            "method": "bank",
            "paid_at": "2024-02-05",
        }

        # Act
        response = await client.post(f"{API}/payments", json=payload)

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["invoice_status"] == "paid"

        summary = (await client.get(f"{API}/invoices/{issued['invoice_id']}/summary")).json()
        assert Decimal(summary["remaining"]) == Decimal("0.00")

        deleted = await client.delete(f"{API}/payments/{data['id']}")
        assert deleted.status_code == 204
        summary = (await client.get(f"{API}/invoices/{issued['invoice_id']}/summary")).json()
        assert summary["status"] == "issued"
        assert Decimal(summary["remaining"]) == Decimal("216.00")

    async def test_payment_on_draft_returns_409(self, client: AsyncClient, january_data):
        # Arrange
        await client.post(f"{API}/invoices/drafts/2024/1")
        invoice_id = (await client.get(f"{API}/invoices", params={"year": 2024, "month": 1})).json()[0]["id"]

        # Act
        response = await client.post(
            f"{API}/payments",
            json={
                "student_id": january_data["student"].id,
                "invoice_id": invoice_id,
                "amount": "10.00",
                "method": "cash",
                "paid_at": "2024-02-05",
            },
        )

        # Assert
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVOICE_NOT_PAYABLE"

    @pytest.mark.parametrize(
        "override",
        [{"amount": "0"}, {"amount": "0.004"}, {"method": "card"}, {"paid_at": "05.02.2024"}],
    )
    async def test_invalid_payment_returns_422(self, client: AsyncClient, override):
        payload = {"student_id": 1, "amount": "10.00", "method": "cash", "paid_at": "2024-02-05"}
        payload.update(override)

        response = await client.post(f"{API}/payments", json=payload)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_balance_payments_and_debtors(self, client: AsyncClient, january_data):
        # Arrange
        student_id = january_data["student"].id
        await generate_and_issue(client)
        cash = await client.post(
            f"{API}/payments/quick-cash",
            json={"student_id": student_id, "amount": "16.00", "note": "desk"},
        )

        # Act
        balance = await client.get(f"{API}/students/{student_id}/balance")
        payments = await client.get(f"{API}/students/{student_id}/payments")
        debtors = await client.get(f"{API}/debtors")

        # Assert
        assert cash.status_code == 201
        assert cash.json()["method"] == "cash"
        assert Decimal(balance.json()["debt"]) == Decimal("200.00")
        assert [p["id"] for p in payments.json()] == [cash.json()["id"]]
        assert debtors.json() == [
            {
                "student_id": student_id,
                "student_name": "Anna Berzina",
                "total_invoiced": "216.00",
                "total_paid": "16.00",
                "debt": "200.00",
            }
        ]

    async def test_unknown_student_balance_returns_404(self, client: AsyncClient):
        response = await client.get(f"{API}/students/999/balance")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "STUDENT_NOT_FOUND"


@pytest.mark.asyncio
class TestPriceOverrideAPIIntegration:
    """Integration test suite for price override endpoint"""

    async def test_create_and_reject_overlap(self, client: AsyncClient, january_data):
        # Arrange
        enrollment_id = january_data["lessons_enrollment"].id
        url = f"{API}/enrollments/{enrollment_id}/price-overrides"

        # Act
        created = await client.post(url, json={"valid_from": "2024-01-01", "lesson_price": "10.00"})
        overlap = await client.post(url, json={"valid_from": "2024-06-01", "lesson_price": "11.00"})

        # Assert
        assert created.status_code == 201
        assert Decimal(created.json()["lesson_price"]) == Decimal("10.00")
        assert overlap.status_code == 409
        assert overlap.json()["error"]["code"] == "OVERLAPPING_PRICE_OVERRIDE"

    async def test_override_without_prices_returns_422(self, client: AsyncClient, january_data):
        enrollment_id = january_data["lessons_enrollment"].id

        response = await client.post(
            f"{API}/enrollments/{enrollment_id}/price-overrides",
            json={"valid_from": "2024-01-01"},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
