"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple
from datetime import date
from sqlalchemy import or_
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utc_now
from src.domain.invoice import Invoice, InvoiceStatus, InvoiceType


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so search text matches literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


SORTABLE_COLUMNS = {
    "created_at": Invoice.created_at,
    "issue_date": Invoice.issue_date,
    "due_date": Invoice.due_date,
    "total_amount": Invoice.total_amount,
    "invoice_number": Invoice.invoice_number,
}


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        statement = select(Invoice).where(Invoice.id == invoice_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_for_owner(self, invoice_id: int, user_id: str) -> Optional[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .where(Invoice.user_id == user_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_user(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        invoice_type: Optional[InvoiceType] = None,
        search: Optional[str] = None,
        issued_from: Optional[date] = None,
        sort_by: str = "created_at",
        descending: bool = True,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        conditions = [Invoice.user_id == user_id]

        if status:
            conditions.append(Invoice.status == status)
        if invoice_type:
            conditions.append(Invoice.type == invoice_type)
        if search:
            pattern = f"%{escape_like(search)}%"
            conditions.append(
                or_(
                    Invoice.title.ilike(pattern, escape="\\"),
                    Invoice.recipient_email.ilike(pattern, escape="\\"),
                    Invoice.invoice_number.ilike(pattern, escape="\\"),
                )
            )
        if issued_from:
            conditions.append(Invoice.issue_date >= issued_from)

        count_statement = select(func.count()).select_from(Invoice).where(*conditions)
        total = (await self.session.execute(count_statement)).scalar_one()

        column = SORTABLE_COLUMNS.get(sort_by, Invoice.created_at)
        order = column.desc() if descending else column.asc()
        statement = (
            select(Invoice)
            .where(*conditions)
            .order_by(order, Invoice.id.desc() if descending else Invoice.id.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = utc_now()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def generate_invoice_number(self, user_id: str) -> str:
        """
        Generate the next invoice number for an issuer

        Format: INV-YYYY-NNNNNN (e.g., INV-2024-000001)
        """
        year = utc_now().year
        prefix = f"INV-{year}-"

        # Highest number this issuer used this year; longer strings are larger numbers
        statement = (
            select(Invoice.invoice_number)
            .where(Invoice.user_id == user_id)
            .where(Invoice.invoice_number.like(f"{prefix}%"))
            .order_by(func.length(Invoice.invoice_number).desc(), Invoice.invoice_number.desc())
            .limit(1)
        )
        result = await self.session.execute(statement)
        max_number = result.scalars().first()

        if max_number:
            sequence = int(max_number.split("-")[-1]) + 1
        else:
            sequence = 1

        return f"{prefix}{sequence:06d}"
