"""IssueInvoice Use Case

Assigns the next invoice number to a draft and marks it issued.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.settings_repository import SettingsRepository
from src.domain.invoice import InvoiceStatus, format_invoice_number
from .dtos import IssuedInvoiceDTO

logger = logging.getLogger(__name__)


class IssueInvoice:
    """
    Use Case: Number and issue a draft invoice

    Business Rules:
    1. Only drafts get a number; an already numbered invoice returns its
       existing number unchanged
    2. number = PREFIX-YYYYMM-SEQ from the settings row, then next_seq + 1
    3. Invoice and counter change in a single transaction with both rows
       locked (SELECT FOR UPDATE), so concurrent issues never share a SEQ
    4. Any failure rolls back both; the counter is not consumed

    Flow:
    1. Lock invoice, check status
    2. Lock settings, format number
    3. Increment counter
    4. Set number, status=issued, issued_at
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        settings_repo: SettingsRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.settings_repo = settings_repo

    async def execute(self, invoice_id: int) -> Result[IssuedInvoiceDTO]:
        """
        Execute invoice issuing

        Args:
            invoice_id: Draft invoice ID

        Returns:
            Result[IssuedInvoiceDTO]: Assigned (or existing) number or error
        """
        try:
            # Step 1: Lock invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)

            if not invoice:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            if invoice.status != InvoiceStatus.DRAFT:
                # Rollback expires the instance; read it first
                if invoice.number:
                    result = Return.ok(
                        IssuedInvoiceDTO(
                            invoice_id=invoice.id,
                            number=invoice.number,
                            already_issued=True,
                        )
                    )
                else:
                    result = Return.err(
                        Error(
                            code="INVOICE_NOT_DRAFT",
                            message=f"Invoice {invoice_id} is not draft",
                            reason=f"status={invoice.status.value}",
                        )
                    )
                await self.uow.rollback()
                return result

            # Step 2: Lock settings row and build the number
            settings = await self.settings_repo.get(for_update=True)

            if not settings:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="SETTINGS_NOT_FOUND",
                        message="Billing settings are not initialized",
                        reason="The settings row holds the invoice counter",
                    )
                )

            number = format_invoice_number(
                settings.effective_prefix,
                invoice.period_year,
                invoice.period_month,
                settings.next_seq,
            )

            # Step 3: Increment the counter
            settings.next_seq = settings.next_seq + 1
            await self.settings_repo.update(settings)

            # Step 4: Number the invoice
            invoice.number = number
            invoice.status = InvoiceStatus.ISSUED
            invoice.issued_at = datetime.utcnow()
            await self.invoice_repo.update(invoice)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(f"Issued invoice {invoice_id} as {number}")

            return Return.ok(IssuedInvoiceDTO(invoice_id=invoice.id, number=number))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Issuing invoice {invoice_id} failed: {e}")
            return Return.err(
                Error(
                    code="ISSUE_INVOICE_FAILED",
                    message=f"Failed to issue invoice {invoice_id}",
                    reason=str(e),
                )
            )
