"""Invoice Settings Domain Entity

Per-issuer business profile and invoice numbering.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Integer, String, Text
from src.domain.base import BaseModel, IdentifierType, timestamp_column, utc_now

DEFAULT_INVOICE_PREFIX = "INV-"
DEFAULT_NEXT_INVOICE_NUMBER = 1001


class InvoiceSettings(BaseModel, table=True):
    """
    Invoice Settings - Business details printed on the issuer's invoices

    Domain Rules:
    - One settings row per issuer (user_id is unique)
    - next_invoice_number only moves forward; it is bumped in the same
      unit of work that creates the invoice using it
    """

    __tablename__ = "invoice_settings"

    id: int = Field(
        sa_column=Column(IdentifierType, primary_key=True, autoincrement=True),
    )

    user_id: str = Field(
        index=True,
        unique=True,
        description="Issuer (one settings row per user)"
    )

    business_name: str = Field(
        sa_column=Column(String(255), nullable=False),
    )

    address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    website: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    tax_number: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    terms: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    invoice_prefix: str = Field(
        default=DEFAULT_INVOICE_PREFIX,
        sa_column=Column(String(20), nullable=False, default=DEFAULT_INVOICE_PREFIX),
    )

    next_invoice_number: int = Field(
        default=DEFAULT_NEXT_INVOICE_NUMBER,
        sa_column=Column(Integer, nullable=False, default=DEFAULT_NEXT_INVOICE_NUMBER),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_column=timestamp_column())
    updated_at: datetime = Field(default_factory=utc_now, sa_column=timestamp_column())

    def take_invoice_number(self) -> str:
        """Return the next invoice number and advance the counter"""
        number = f"{self.invoice_prefix}{self.next_invoice_number}"
        self.next_invoice_number += 1
        return number
