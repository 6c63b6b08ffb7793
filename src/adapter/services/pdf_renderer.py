"""ReportLab Invoice Renderer Implementation

Renders invoices to PDF with ReportLab and stores them as artifacts.
"""

import asyncio
import logging
import re
from io import BytesIO
from decimal import Decimal
from typing import Optional
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

from src.app.services.artifact_storage import ArtifactStorage
from src.app.services.errors import RenderError
from src.app.services.invoice_renderer import InvoiceRenderer, InvoiceSnapshot, RenderedArtifact
from src.domain.invoice import Invoice
from src.domain.totals import round_money

logger = logging.getLogger(__name__)

UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def format_quantity(quantity: Decimal) -> str:
    return f"{quantity:,.6f}".rstrip("0").rstrip(".")


def format_rate(rate: Decimal) -> str:
    return f"{Decimal(rate).normalize():f}"


class ReportLabInvoiceRenderer(InvoiceRenderer):
    """
    ReportLab implementation of InvoiceRenderer

    Totals printed on the document are the stored invoice totals, never
    recomputed from the items, so the artifact matches the totals preview.
    """

    def __init__(self, storage: ArtifactStorage, default_business_name: str = "Marketplace Seller"):
        self.storage = storage
        self.default_business_name = default_business_name

    def artifact_key(self, invoice: Invoice) -> str:
        number = UNSAFE_KEY_CHARS.sub("_", invoice.invoice_number)
        return f"invoices/{invoice.id}/Invoice-{number}.pdf"

    async def render(self, snapshot: InvoiceSnapshot) -> RenderedArtifact:
        invoice = snapshot.invoice
        try:
            pdf_bytes = await asyncio.to_thread(self.build_pdf, snapshot)
            url = await self.storage.save(self.artifact_key(invoice), pdf_bytes)
        except Exception as e:
            logger.error(f"Failed to render invoice {invoice.id}: {e}")
            raise RenderError(
                f"Failed to render invoice {invoice.invoice_number}", reason=str(e)
            ) from e

        logger.info(f"Rendered invoice {invoice.id} to {url}")
        return RenderedArtifact(artifact_url=url)

    async def load(self, invoice: Invoice) -> Optional[bytes]:
        return await self.storage.load(self.artifact_key(invoice))

    def build_pdf(self, snapshot: InvoiceSnapshot) -> bytes:
        """
        Build the invoice PDF

        Args:
            snapshot: Invoice, ordered items and the issuer's settings

        Returns:
            PDF document as bytes
        """
        invoice = snapshot.invoice
        settings = snapshot.settings
        currency = invoice.currency

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.invoice_number}",
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=6,
            textColor=colors.HexColor("#2C3E50"),
        )
        label_style = ParagraphStyle(
            "LabelStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#3B82F6"),
            spaceAfter=14,
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

        # Header - issuer details
        business_name = (settings.business_name if settings else None) or self.default_business_name
        elements.append(Paragraph(escape(business_name), title_style))
        if settings:
            for line in (settings.address, settings.email, settings.phone, settings.website):
                if line:
                    elements.append(Paragraph(escape(line), header_style))
            if settings.tax_number:
                elements.append(Paragraph(escape(f"Tax No: {settings.tax_number}"), header_style))
        elements.append(Spacer(1, 8 * mm))
        elements.append(Paragraph("INVOICE", label_style))

        invoice_info = [
            ["Invoice Number:", invoice.invoice_number],
            ["Status:", str(getattr(invoice.status, "value", invoice.status)).upper()],
            ["Issue Date:", invoice.issue_date.strftime("%Y-%m-%d")],
            ["Due Date:", invoice.due_date.strftime("%Y-%m-%d")],
        ]
        if invoice.reference:
            invoice_info.append(["Reference:", invoice.reference])

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

        # Recipient
        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(escape(invoice.recipient_name or "Client"), normal_style))
        elements.append(Paragraph(escape(invoice.recipient_email), normal_style))
        if invoice.recipient_address:
            elements.append(Paragraph(escape(invoice.recipient_address), normal_style))
        elements.append(Spacer(1, 8 * mm))

        if invoice.title:
            elements.append(Paragraph(escape(invoice.title), bold_style))
        if invoice.description:
            elements.append(Paragraph(escape(invoice.description), normal_style))
        elements.append(Spacer(1, 4 * mm))

        # Line items in ledger order
        line_data = [["Description", "Quantity", "Unit Price", "Amount"]]
        for item in snapshot.items:
            line_data.append(
                [
                    Paragraph(escape(item.description), normal_style),
                    format_quantity(item.quantity),
                    f"{currency} {round_money(item.unit_price):,.2f}",
                    f"{currency} {round_money(item.amount):,.2f}",
                ]
            )

        line_table = Table(
            line_data, colWidths=[80 * mm, 25 * mm, 30 * mm, 35 * mm], repeatRows=1
        )
        line_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
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

        # Totals (stored values)
        total_data = [
            ["", "", "Subtotal:", f"{currency} {round_money(invoice.amount):,.2f}"],
            ["", "", f"Tax ({format_rate(invoice.tax_rate)}%):", f"{currency} {round_money(invoice.tax_amount):,.2f}"],
            ["", "", "Total:", f"{currency} {round_money(invoice.total_amount):,.2f}"],
        ]
        total_table = Table(total_data, colWidths=[80 * mm, 25 * mm, 30 * mm, 35 * mm])
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (2, 0), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("FONTSIZE", (0, -1), (-1, -1), 11),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (2, -1), (-1, -1), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(total_table)
        elements.append(Spacer(1, 10 * mm))

        if invoice.notes:
            elements.append(Paragraph("Notes:", bold_style))
            elements.append(Paragraph(escape(invoice.notes), normal_style))
            elements.append(Spacer(1, 5 * mm))

        if settings and settings.terms:
            elements.append(Paragraph("Terms and Conditions:", bold_style))
            elements.append(Paragraph(escape(settings.terms), normal_style))
            elements.append(Spacer(1, 5 * mm))

        elements.append(
            Paragraph(
                "<i>Thank you for your business!</i>",
                ParagraphStyle(
                    "FooterNote",
                    parent=styles["Normal"],
                    fontSize=9,
                    alignment=1,
                    textColor=colors.HexColor("#95A5A6"),
                ),
            )
        )

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
