"""Invoice Domain Entity

Invoice document issued by a marketplace user to a recipient.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Numeric, String, Date, Text
from src.domain.base import BaseModel, IdentifierType, timestamp_column, utc_now


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    PENDING = "pending"
    PAID = "paid"
    VOID = "void"


class InvoiceType(str, Enum):
    """What the invoice charges for"""
    SALE = "sale"
    RENT = "rent"
    SERVICE = "service"
    PRODUCT = "product"


ALLOWED_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.PENDING, InvoiceStatus.VOID},
    InvoiceStatus.PENDING: {InvoiceStatus.PENDING, InvoiceStatus.PAID, InvoiceStatus.VOID},
    InvoiceStatus.PAID: set(),
    InvoiceStatus.VOID: set(),
}


class Invoice(BaseModel, table=True):
    """
    Invoice - Document combining recipient, dates, line items and totals

    Domain Rules:
    - invoice_number is unique per issuer (user_id)
    - amount/tax_amount/total_amount are computed once from the line items
      and stored; they are the single source for previews and artifacts
    - Status transitions: draft -> pending -> paid (draft/pending -> void)
    - Once pdf_url is set the invoice is issued: only notes may change
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_user_id', 'user_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_user_invoice_number', 'user_id', 'invoice_number', unique=True),
    )

    id: int = Field(
        sa_column=Column(IdentifierType, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    user_id: str = Field(
        description="Issuer who owns the invoice"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Invoice number, unique per issuer (e.g., INV-1001)"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, pending, paid, void)"
    )

    type: InvoiceType = Field(
        default=InvoiceType.SALE,
        description="Invoice type (sale, rent, service, product)"
    )

    title: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Invoice title"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    recipient_email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Recipient email address"
    )

    recipient_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    recipient_address: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    listing_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, nullable=True),
        description="Listing the invoice was created from (snapshot, not a live link)"
    )

    currency: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Subtotal of all line items"
    )

    tax_rate: Decimal = Field(
        sa_column=Column(Numeric(9, 6), nullable=False, default=0),
        description="Tax rate in percent (0-100)"
    )

    tax_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="subtotal * tax_rate / 100"
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="subtotal + tax_amount"
    )

    issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    reference: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    pdf_url: Optional[str] = Field(
        default=None,
        sa_column=Column(String(1024), nullable=True),
        description="Rendered artifact URL; set once the invoice is issued"
    )

    sent_at: Optional[datetime] = Field(
        default=None,
        sa_column=timestamp_column(nullable=True),
        description="Timestamp of the last successful delivery"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=timestamp_column(),
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=timestamp_column(),
        description="Last update timestamp"
    )

    @property
    def is_issued(self) -> bool:
        return self.pdf_url is not None

    def can_transition_to(self, status: InvoiceStatus) -> bool:
        return status in ALLOWED_TRANSITIONS[InvoiceStatus(self.status)]

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "user_id": "user_abc123",
                "invoice_number": "INV-1001",
                "status": "draft",
                "type": "sale",
                "title": "Invoice for 3 bedroom house",
                "recipient_email": "buyer@example.com",
                "amount": "30.000000",
                "tax_rate": "10.000000",
                "tax_amount": "3.000000",
                "total_amount": "33.000000",
                "issue_date": "2024-01-01",
                "due_date": "2024-01-15",
                "pdf_url": None,
            }
        }
