"""ListInvoices Use Case

Lists an issuer's invoices with filters, sorting and pagination.
"""

import math
from datetime import date, timedelta
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import ListInvoicesQueryDTO, ListInvoicesResponseDTO
from .mappers import to_invoice_summary


def issued_from_for_range(date_range: str, today: Optional[date] = None) -> Optional[date]:
    """Translate a named date range into the earliest issue date"""
    today = today or date.today()
    if date_range == "last30":
        return today - timedelta(days=30)
    if date_range == "last90":
        return today - timedelta(days=90)
    if date_range == "this_year":
        return date(today.year, 1, 1)
    return None


class ListInvoices:
    """
    Use Case: List invoices

    Business Rules:
    1. Only the issuer's own invoices are listed
    2. Search matches title, recipient email or invoice number (case-insensitive)
    3. Pages are 1-based
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, query: ListInvoicesQueryDTO) -> Result[ListInvoicesResponseDTO]:
        try:
            search = query.search.strip() if query.search else None
            invoices, total = await self.invoice_repo.list_by_user(
                user_id=query.user_id,
                status=query.status,
                invoice_type=query.type,
                search=search or None,
                issued_from=issued_from_for_range(query.date_range),
                sort_by=query.sort_by,
                descending=query.sort_order == "desc",
                limit=query.page_size,
                offset=(query.page - 1) * query.page_size,
            )

            return Return.ok(
                ListInvoicesResponseDTO(
                    invoices=[to_invoice_summary(invoice) for invoice in invoices],
                    total=total,
                    page=query.page,
                    page_size=query.page_size,
                    total_pages=math.ceil(total / query.page_size) if total else 0,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_INVOICES_FAILED",
                    message="Failed to list invoices",
                    reason=str(e),
                )
            )
