"""ReportLab PDF Generation Service Implementation

Implements invoice rendering using ReportLab library.
"""

from io import BytesIO
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine
from src.domain.settings import BillingSettings
from src.domain.student import Student

COLUMN_WIDTHS = [85 * mm, 20 * mm, 30 * mm, 35 * mm]


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Produces a one-page A4 invoice: organization header, invoice details,
    the billed student, line items and the total.
    """

    def render_invoice(
        self,
        invoice: Invoice,
        invoice_lines: List[InvoiceLine],
        student: Student,
        settings: BillingSettings,
    ) -> bytes:
        """
        Render an issued invoice

        Args:
            invoice: Numbered invoice
            invoice_lines: Line items of the invoice
            student: Billed student
            settings: Organization details and currency

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.number}",
        )

        styles = getSampleStyleSheet()
        elements = []
        currency = settings.currency

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=20,
            spaceAfter=6,
            textColor=colors.HexColor("#2C3E50"),
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        # Organization header
        if settings.org_name:
            elements.append(Paragraph(escape(settings.org_name), title_style))
        if settings.address:
            elements.append(Paragraph(escape(settings.address), header_style))
        elements.append(Spacer(1, 10 * mm))
        elements.append(Paragraph(f"INVOICE {escape(invoice.number or '')}", styles["Heading2"]))

        # Invoice details
        invoice_info = [
            ["Invoice Number:", invoice.number or ""],
            ["Period:", f"{invoice.period_month:02d}.{invoice.period_year:04d}"],
            ["Status:", invoice.status.value.upper()],
        ]
        if invoice.issued_at:
            invoice_info.append(["Issued:", invoice.issued_at.strftime("%Y-%m-%d")])

        invoice_table = Table(invoice_info, colWidths=[40 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(invoice_table)
        elements.append(Spacer(1, 8 * mm))

        # Billed student
        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(escape(student.full_name), normal_style))
        for contact in (student.email, student.phone):
            if contact:
                elements.append(Paragraph(escape(contact), normal_style))
        elements.append(Spacer(1, 8 * mm))

        # Line items
        line_data = [["Description", "Qty", "Unit Price", "Amount"]]
        for line in invoice_lines:
            line_data.append(
                [
                    Paragraph(escape(line.description), normal_style),
                    str(line.qty),
                    f"{line.unit_price:,.2f} {currency}",
                    f"{line.amount:,.2f} {currency}",
                ]
            )

        line_table = Table(line_data, colWidths=COLUMN_WIDTHS, repeatRows=1)
        line_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Total
        total_table = Table(
            [["", "", "Total:", f"{invoice.total_amount:,.2f} {currency}"]],
            colWidths=COLUMN_WIDTHS,
        )
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (2, 0), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 11),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (2, 0), (-1, 0), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 8),
                ]
            )
        )
        elements.append(total_table)

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
