"""Listing Domain Entity

Marketplace listing. Invoicing only reads a title/price snapshot from it.
"""

from datetime import datetime
from decimal import Decimal
from sqlmodel import Field, Column
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, IdentifierType, timestamp_column, utc_now
from src.domain.invoice import InvoiceType

CATEGORY_INVOICE_TYPES = {
    "real_estate": InvoiceType.SALE,
    "services": InvoiceType.SERVICE,
}


class Listing(BaseModel, table=True):
    __tablename__ = "listings"

    id: int = Field(
        sa_column=Column(IdentifierType, primary_key=True, autoincrement=True),
    )

    user_id: str = Field(index=True)

    title: str = Field(sa_column=Column(String(255), nullable=False))

    price: Decimal = Field(sa_column=Column(Numeric(18, 6), nullable=False))

    category: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="real_estate, automotive, products, services, ..."
    )

    created_at: datetime = Field(default_factory=utc_now, sa_column=timestamp_column())


def invoice_type_for_category(category: str) -> InvoiceType:
    return CATEGORY_INVOICE_TYPES.get(category, InvoiceType.PRODUCT)
