"""Entity to DTO mapping for invoicing use cases"""

from typing import List
from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem
from src.domain.invoice_settings import InvoiceSettings
from .dtos import (
    InvoiceItemDTO,
    InvoiceResponseDTO,
    InvoiceSummaryDTO,
    InvoiceSettingsDTO,
)


def _enum_value(value) -> str:
    return getattr(value, "value", value)


def to_item_dto(item: InvoiceItem) -> InvoiceItemDTO:
    return InvoiceItemDTO(
        id=item.id,
        position=item.position,
        description=item.description,
        quantity=item.quantity,
        unit_price=item.unit_price,
        amount=item.amount,
    )


def to_invoice_response(invoice: Invoice, items: List[InvoiceItem]) -> InvoiceResponseDTO:
    return InvoiceResponseDTO(
        invoice_id=invoice.id,
        user_id=invoice.user_id,
        invoice_number=invoice.invoice_number,
        status=_enum_value(invoice.status),
        type=_enum_value(invoice.type),
        title=invoice.title,
        description=invoice.description,
        recipient_email=invoice.recipient_email,
        recipient_name=invoice.recipient_name,
        recipient_address=invoice.recipient_address,
        listing_id=invoice.listing_id,
        currency=invoice.currency,
        amount=invoice.amount,
        tax_rate=invoice.tax_rate,
        tax_amount=invoice.tax_amount,
        total_amount=invoice.total_amount,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        notes=invoice.notes,
        reference=invoice.reference,
        pdf_url=invoice.pdf_url,
        sent_at=invoice.sent_at,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
        items=[to_item_dto(item) for item in sorted(items, key=lambda i: i.position)],
    )


def to_invoice_summary(invoice: Invoice) -> InvoiceSummaryDTO:
    return InvoiceSummaryDTO(
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        title=invoice.title,
        recipient_email=invoice.recipient_email,
        type=_enum_value(invoice.type),
        status=_enum_value(invoice.status),
        currency=invoice.currency,
        total_amount=invoice.total_amount,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        pdf_url=invoice.pdf_url,
        created_at=invoice.created_at,
    )


def to_settings_dto(settings: InvoiceSettings) -> InvoiceSettingsDTO:
    return InvoiceSettingsDTO(
        user_id=settings.user_id,
        business_name=settings.business_name,
        address=settings.address,
        phone=settings.phone,
        email=settings.email,
        website=settings.website,
        tax_number=settings.tax_number,
        terms=settings.terms,
        notes=settings.notes,
        invoice_prefix=settings.invoice_prefix,
        next_invoice_number=settings.next_invoice_number,
        updated_at=settings.updated_at,
    )
