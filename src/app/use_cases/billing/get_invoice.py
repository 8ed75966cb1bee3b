"""GetInvoice Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.student_repository import StudentRepository
from .dtos import InvoiceDetailDTO, InvoiceLineDTO


class GetInvoice:
    """Use Case: Load one invoice with its lines"""

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        student_repo: StudentRepository,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.student_repo = student_repo

    async def execute(self, invoice_id: int) -> Result[InvoiceDetailDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                )
            )

        lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)
        student = await self.student_repo.get_by_id(invoice.student_id)

        return Return.ok(
            InvoiceDetailDTO(
                id=invoice.id,
                student_id=invoice.student_id,
                student_name=student.full_name if student else "",
                year=invoice.period_year,
                month=invoice.period_month,
                total=invoice.total_amount,
                status=invoice.status.value,
                lines_count=len(lines),
                number=invoice.number,
                issued_at=invoice.issued_at,
                paid_at=invoice.paid_at,
                lines=[
                    InvoiceLineDTO(
                        enrollment_id=line.enrollment_id,
                        description=line.description,
                        qty=line.qty,
                        unit_price=line.unit_price,
                        amount=line.amount,
                    )
                    for line in lines
                ],
            )
        )
