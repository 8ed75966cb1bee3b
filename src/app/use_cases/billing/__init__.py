"""Billing domain use cases"""
from .resolve_prices import PriceResolver, ResolvedPrices
from .generate_drafts import GenerateDrafts
from .issue_invoice import IssueInvoice
from .render_invoice import RenderInvoice, invoice_pdf_path
from .issue_and_render import IssueAndRenderInvoice
from .issue_all import IssueAllInvoices
from .list_invoices import ListInvoices
from .get_invoice import GetInvoice
from .delete_draft import DeleteDraft
from .create_price_override import CreatePriceOverride
from .dtos import (
    GenerateDraftsResultDTO,
    InvoiceLineDTO,
    InvoiceListItemDTO,
    InvoiceDetailDTO,
    IssuedInvoiceDTO,
    RenderedInvoiceDTO,
    IssueAllResultDTO,
    MonthlyBillingResultDTO,
    CreatePriceOverrideCommandDTO,
    PriceOverrideResponseDTO,
)

__all__ = [
    "PriceResolver",
    "ResolvedPrices",
    "GenerateDrafts",
    "IssueInvoice",
    "RenderInvoice",
    "invoice_pdf_path",
    "IssueAndRenderInvoice",
    "IssueAllInvoices",
    "ListInvoices",
    "GetInvoice",
    "DeleteDraft",
    "CreatePriceOverride",
    "GenerateDraftsResultDTO",
    "InvoiceLineDTO",
    "InvoiceListItemDTO",
    "InvoiceDetailDTO",
    "IssuedInvoiceDTO",
    "RenderedInvoiceDTO",
    "IssueAllResultDTO",
    "MonthlyBillingResultDTO",
    "CreatePriceOverrideCommandDTO",
    "PriceOverrideResponseDTO",
]
