"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests. Business-level
checks (email format, item values, tax range) are done by the use cases so
that all field errors come back together as VALIDATION_ERROR.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.invoice import InvoiceStatus, InvoiceType


class LineItemRequestSchema(BaseModel):
    description: Optional[str] = None
    quantity: Decimal = Field(default=Decimal("1"), description="Units billed")
    unit_price: Decimal = Field(default=Decimal("0"), description="Price per unit")


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    user_id: str = Field(
        ...,
        min_length=1,
        description="Issuer identifier (required, non-empty)"
    )

    recipient_email: Optional[str] = Field(default=None, description="Recipient email")
    recipient_name: Optional[str] = None
    recipient_address: Optional[str] = None

    listing_id: Optional[int] = Field(
        default=None,
        description="Listing whose title and price become the first line item"
    )

    type: Optional[InvoiceType] = None
    title: Optional[str] = None
    description: Optional[str] = None
    issue_date: Optional[date] = Field(default=None, description="Defaults to today")
    due_date: Optional[date] = Field(default=None, description="Defaults to issue date + 14 days")
    items: List[LineItemRequestSchema] = Field(default_factory=list)
    tax_rate: Decimal = Field(default=Decimal("0"), description="Tax percentage (0-100)")
    notes: Optional[str] = None
    reference: Optional[str] = None
    render: bool = Field(default=True, description="Render the PDF right away")


class UpdateInvoiceRequestSchema(BaseModel):
    """
    Request schema for editing an invoice

    Used for PATCH /invoices/{invoice_id}. Omitted fields are left unchanged.
    """

    user_id: str = Field(..., min_length=1)
    recipient_email: Optional[str] = None
    recipient_name: Optional[str] = None
    recipient_address: Optional[str] = None
    type: Optional[InvoiceType] = None
    title: Optional[str] = None
    description: Optional[str] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    items: Optional[List[LineItemRequestSchema]] = None
    tax_rate: Optional[Decimal] = None
    notes: Optional[str] = None
    reference: Optional[str] = None


class UpdateInvoiceStatusRequestSchema(BaseModel):
    user_id: str = Field(..., min_length=1)
    status: InvoiceStatus = Field(..., description="Target status (paid or void)")


class InvoiceOwnerRequestSchema(BaseModel):
    """Body for owner-scoped actions without parameters (render)"""

    user_id: str = Field(..., min_length=1)


class SendInvoiceRequestSchema(BaseModel):
    user_id: str = Field(..., min_length=1)
    message: Optional[str] = Field(
        default=None,
        description="Custom message placed above the invoice summary"
    )


class InvoiceSettingsRequestSchema(BaseModel):
    """
    Request schema for saving invoice settings

    Used for PUT /invoice-settings/{user_id}.
    """

    business_name: str = Field(..., min_length=1)
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    tax_number: Optional[str] = None
    terms: Optional[str] = None
    notes: Optional[str] = None
    invoice_prefix: Optional[str] = Field(default=None, max_length=20)
    next_invoice_number: Optional[int] = Field(default=None, ge=1)
