"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from src.domain.invoice import InvoiceStatus, InvoiceType

SortField = Literal["created_at", "issue_date", "due_date", "total_amount", "invoice_number"]
DateRange = Literal["all", "last30", "last90", "this_year"]


class LineItemInputDTO(BaseModel):
    """
    Line item as submitted by the caller

    Fields are lenient on purpose; CreateInvoice reports per-item errors.
    """

    description: Optional[str] = None
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    Used as input to CreateInvoice use case.
    """

    user_id: str = Field(..., description="Issuer identifier")
    recipient_email: Optional[str] = None
    recipient_name: Optional[str] = None
    recipient_address: Optional[str] = None
    listing_id: Optional[int] = Field(
        default=None,
        description="Listing to seed the first line item from"
    )
    type: Optional[InvoiceType] = None
    title: Optional[str] = None
    description: Optional[str] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    items: List[LineItemInputDTO] = Field(default_factory=list)
    tax_rate: Decimal = Decimal("0")
    notes: Optional[str] = None
    reference: Optional[str] = None
    render: bool = Field(
        default=True,
        description="Render the artifact right after creation (best-effort)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "user_abc123",
                "recipient_email": "buyer@example.com",
                "recipient_name": "Jane Buyer",
                "title": "Widget order",
                "type": "product",
                "items": [{"description": "Widget", "quantity": "3", "unit_price": "10.00"}],
                "tax_rate": "10",
            }
        }


class UpdateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for editing an invoice

    Only fields explicitly set are applied.
    """

    invoice_id: int
    user_id: str
    recipient_email: Optional[str] = None
    recipient_name: Optional[str] = None
    recipient_address: Optional[str] = None
    type: Optional[InvoiceType] = None
    title: Optional[str] = None
    description: Optional[str] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    items: Optional[List[LineItemInputDTO]] = None
    tax_rate: Optional[Decimal] = None
    notes: Optional[str] = None
    reference: Optional[str] = None


class UpdateInvoiceStatusCommandDTO(BaseModel):
    invoice_id: int
    user_id: str
    status: InvoiceStatus


class SendInvoiceCommandDTO(BaseModel):
    invoice_id: int
    user_id: str
    message: Optional[str] = None


class ListInvoicesQueryDTO(BaseModel):
    """Filters, sorting and pagination for ListInvoices"""

    user_id: str
    status: Optional[InvoiceStatus] = None
    type: Optional[InvoiceType] = None
    search: Optional[str] = None
    date_range: DateRange = "all"
    sort_by: SortField = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=100)


class InvoiceItemDTO(BaseModel):
    id: Optional[int] = None
    position: int
    description: str
    quantity: Decimal
    unit_price: Decimal
    amount: Decimal


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by CreateInvoice, GetInvoice, UpdateInvoice, etc.
    """

    invoice_id: int
    user_id: str
    invoice_number: str
    status: str
    type: str
    title: str
    description: Optional[str] = None
    recipient_email: str
    recipient_name: Optional[str] = None
    recipient_address: Optional[str] = None
    listing_id: Optional[int] = None
    currency: str
    amount: Decimal = Field(..., description="Subtotal")
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    issue_date: date
    due_date: date
    notes: Optional[str] = None
    reference: Optional[str] = None
    pdf_url: Optional[str] = None
    sent_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    items: List[InvoiceItemDTO] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "user_id": "user_abc123",
                "invoice_number": "INV-1001",
                "status": "draft",
                "type": "product",
                "title": "Widget order",
                "recipient_email": "buyer@example.com",
                "currency": "USD",
                "amount": "30.000000",
                "tax_rate": "10.000000",
                "tax_amount": "3.000000",
                "total_amount": "33.000000",
                "issue_date": "2024-01-01",
                "due_date": "2024-01-15",
                "pdf_url": "http://localhost:8000/artifacts/invoices/1/Invoice-INV-1001.pdf",
                "items": [
                    {
                        "id": 1,
                        "position": 0,
                        "description": "Widget",
                        "quantity": "3.000000",
                        "unit_price": "10.000000",
                        "amount": "30.000000",
                    }
                ],
            }
        }


class InvoiceSummaryDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    title: str
    recipient_email: str
    type: str
    status: str
    currency: str
    total_amount: Decimal
    issue_date: date
    due_date: date
    pdf_url: Optional[str] = None
    created_at: datetime


class ListInvoicesResponseDTO(BaseModel):
    invoices: List[InvoiceSummaryDTO]
    total: int
    page: int
    page_size: int
    total_pages: int


class InvoiceTotalsResponseDTO(BaseModel):
    """Stored totals and per-item breakdown, as printed on the artifact"""

    invoice_id: int
    invoice_number: str
    currency: str
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    items: List[InvoiceItemDTO]


class SendInvoiceResponseDTO(BaseModel):
    success: bool
    invoice_id: int
    status: str
    recipient_email: str
    pdf_url: str
    message: str


class ArtifactResponseDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    pdf_url: str


class ArtifactContentDTO(BaseModel):
    invoice_id: int
    filename: str
    content: bytes


class InvoiceSettingsDTO(BaseModel):
    user_id: str
    business_name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    tax_number: Optional[str] = None
    terms: Optional[str] = None
    notes: Optional[str] = None
    invoice_prefix: str
    next_invoice_number: int
    updated_at: datetime


class UpsertInvoiceSettingsCommandDTO(BaseModel):
    user_id: str
    business_name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    tax_number: Optional[str] = None
    terms: Optional[str] = None
    notes: Optional[str] = None
    invoice_prefix: Optional[str] = Field(default=None, max_length=20)
    next_invoice_number: Optional[int] = Field(default=None, ge=1)
