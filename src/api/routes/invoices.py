"""Invoice API Routes

FastAPI routes for draft generation, issuing, rendering and invoice queries.
"""

from pathlib import Path
from typing import List
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.billing.dtos import (
    GenerateDraftsResultDTO,
    InvoiceDetailDTO,
    InvoiceListItemDTO,
    IssueAllResultDTO,
    RenderedInvoiceDTO,
)
from src.app.use_cases.billing.delete_draft import DeleteDraft
from src.app.use_cases.billing.generate_drafts import GenerateDrafts
from src.app.use_cases.billing.get_invoice import GetInvoice
from src.app.use_cases.billing.issue_all import IssueAllInvoices
from src.app.use_cases.billing.issue_and_render import IssueAndRenderInvoice
from src.app.use_cases.billing.issue_invoice import IssueInvoice
from src.app.use_cases.billing.list_invoices import ListInvoices
from src.app.use_cases.billing.render_invoice import RenderInvoice
from src.app.use_cases.billing.resolve_prices import PriceResolver
from src.app.use_cases.payments.dtos import InvoiceSummaryDTO
from src.app.use_cases.payments.invoice_summary import GetInvoiceSummary
from src.app.services.pdf_service import PdfService
from src.adapter.repositories.attendance_repository import SqlAlchemyAttendanceRepository
from src.adapter.repositories.course_repository import SqlAlchemyCourseRepository
from src.adapter.repositories.enrollment_repository import SqlAlchemyEnrollmentRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.price_override_repository import SqlAlchemyPriceOverrideRepository
from src.adapter.repositories.settings_repository import SqlAlchemySettingsRepository
from src.adapter.repositories.student_repository import SqlAlchemyStudentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.invoice import InvoiceStatus
from src.depends import (
    get_bill_all_when_none_active,
    get_invoice_output_dir,
    get_pdf_service,
    get_session,
)
from src.api.error import ClientError

router = APIRouter(prefix="/billing/invoices", tags=["Invoices"])

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Invoice not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "INVOICE_NOT_FOUND",
                        "message": "Invoice with ID 123 not found"
                    }
                }
            }
        }
    }
}


def build_render_invoice(session: AsyncSession, pdf_service: PdfService, output_dir: str) -> RenderInvoice:
    return RenderInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyStudentRepository(session),
        SqlAlchemySettingsRepository(session),
        pdf_service,
        output_dir,
    )


def build_issue_invoice(session: AsyncSession) -> IssueInvoice:
    return IssueInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemySettingsRepository(session),
    )


@router.post(
    "/drafts/{year}/{month}",
    response_model=GenerateDraftsResultDTO,
    status_code=status.HTTP_200_OK,
)
async def generate_drafts(
    year: int,
    month: int,
    session: AsyncSession = Depends(get_session),
    bill_all_when_none_active: bool = Depends(get_bill_all_when_none_active),
):
    """
    Generate or rebuild draft invoices for a month.

    Existing drafts are rebuilt from current enrollments, prices and
    attendance. Issued, paid and canceled invoices are left untouched.

    **Example response:**
    ```json
    {"year": 2024, "month": 1, "created": 12, "updated": 3,
     "skipped_has_invoice": 1, "skipped_no_lines": 2}
    ```
    """
    price_resolver = PriceResolver(
        SqlAlchemyCourseRepository(session),
        SqlAlchemyPriceOverrideRepository(session),
    )
    use_case = GenerateDrafts(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyStudentRepository(session),
        SqlAlchemyEnrollmentRepository(session),
        SqlAlchemyAttendanceRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        price_resolver,
        bill_all_when_none_active=bill_all_when_none_active,
    )
    result = await use_case.execute(year, month)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "",
    response_model=List[InvoiceListItemDTO],
    status_code=status.HTTP_200_OK,
)
async def list_invoices(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    invoice_status: str = Query(
        "all",
        alias="status",
        pattern="^(draft|issued|paid|canceled|all)$",
        description="Filter by status, 'all' for every invoice",
    ),
    session: AsyncSession = Depends(get_session),
):
    """
    List invoices of a month.

    **Query parameters:**
    - `year`, `month` (required): Billing period
    - `status` (optional): draft, issued, paid, canceled or all (default)
    """
    status_filter = None if invoice_status == "all" else InvoiceStatus(invoice_status)

    use_case = ListInvoices(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyStudentRepository(session),
    )
    result = await use_case.execute(year, month, status_filter)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDetailDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def get_invoice(invoice_id: int, session: AsyncSession = Depends(get_session)):
    """Get one invoice with its line items."""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyStudentRepository(session),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        **NOT_FOUND_RESPONSE,
        409: {
            "description": "Invoice is not a draft",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_NOT_DRAFT",
                            "message": "Only draft invoices can be deleted",
                            "reason": "status=issued"
                        }
                    }
                }
            }
        }
    }
)
async def delete_draft(invoice_id: int, session: AsyncSession = Depends(get_session)):
    """Delete a draft invoice and its lines."""
    use_case = DeleteDraft(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{invoice_id}/issue",
    response_model=RenderedInvoiceDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def issue_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    output_dir: str = Depends(get_invoice_output_dir),
):
    """
    Issue a draft invoice and render its PDF.

    The invoice gets the next number (e.g. `LS-202401-001`). Calling this
    again for an issued invoice keeps its number and re-renders the PDF.

    **Returns:**
    - 200: Invoice issued and rendered
    - 404: Invoice not found
    - 409: Invoice is canceled without a number
    - 500: Issuing or rendering failed (a numbered invoice stays issued)
    """
    use_case = IssueAndRenderInvoice(
        build_issue_invoice(session),
        build_render_invoice(session, pdf_service, output_dir),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/issue/{year}/{month}",
    response_model=IssueAllResultDTO,
    status_code=status.HTTP_200_OK,
)
async def issue_all_invoices(
    year: int,
    month: int,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    output_dir: str = Depends(get_invoice_output_dir),
):
    """
    Issue and render every draft of a month.

    Stops at the first failure; `count` and `paths` then cover the invoices
    finished before it, and `failed_invoice_id` / `error` describe it.
    """
    use_case = IssueAllInvoices(
        SqlAlchemyInvoiceRepository(session),
        build_issue_invoice(session),
        build_render_invoice(session, pdf_service, output_dir),
    )
    result = await use_case.execute(year, month)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{invoice_id}/render",
    response_model=RenderedInvoiceDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def render_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    output_dir: str = Depends(get_invoice_output_dir),
):
    """Render (or re-render) the PDF of a numbered invoice."""
    result = await build_render_invoice(session, pdf_service, output_dir).execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        **NOT_FOUND_RESPONSE,
    }
)
async def download_invoice_pdf(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    output_dir: str = Depends(get_invoice_output_dir),
):
    """
    Download the PDF of a numbered invoice.

    The file is rendered to its output path first, so the download and the
    stored copy are identical.
    """
    result = await build_render_invoice(session, pdf_service, output_dir).execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(
        content=Path(result.value.path).read_bytes(),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={result.value.number}.pdf"
        }
    )


@router.get(
    "/{invoice_id}/summary",
    response_model=InvoiceSummaryDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def get_invoice_summary(invoice_id: int, session: AsyncSession = Depends(get_session)):
    """Total, paid and remaining amount of an invoice."""
    use_case = GetInvoiceSummary(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
