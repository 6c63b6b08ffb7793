"""GetInvoice Use Case

Retrieves a single invoice with its line items.
"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from .dtos import InvoiceResponseDTO
from .mappers import to_invoice_response


class GetInvoice:
    """
    Use Case: Get invoice details

    Business Rules:
    1. Only the owner can read an invoice
    2. Items are returned in display order
    """

    def __init__(self, invoice_repo: InvoiceRepository, item_repo: InvoiceItemRepository):
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo

    async def execute(self, invoice_id: int, user_id: str) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist or belongs to another user",
                    )
                )

            items = await self.item_repo.get_by_invoice_id(invoice.id)
            return Return.ok(to_invoice_response(invoice, items))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_FAILED",
                    message="Failed to retrieve invoice",
                    reason=str(e),
                )
            )
