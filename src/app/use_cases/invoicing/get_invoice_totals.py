"""GetInvoiceTotals Use Case

Returns the stored totals of an invoice with its per-item breakdown.
"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from .dtos import InvoiceTotalsResponseDTO
from .mappers import to_item_dto


class GetInvoiceTotals:
    """
    Use Case: View invoice totals

    Business Rules:
    1. Only the owner can view totals
    2. Values are the stored ones, never recomputed from items, so they
       match what the rendered artifact shows
    """

    def __init__(self, invoice_repo: InvoiceRepository, item_repo: InvoiceItemRepository):
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo

    async def execute(self, invoice_id: int, user_id: str) -> Result[InvoiceTotalsResponseDTO]:
        """
        Execute totals retrieval

        Args:
            invoice_id: Invoice ID
            user_id: Requesting issuer

        Returns:
            Result[InvoiceTotalsResponseDTO]: Success with totals or error
        """
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

            return Return.ok(
                InvoiceTotalsResponseDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    currency=invoice.currency,
                    subtotal=invoice.amount,
                    tax_rate=invoice.tax_rate,
                    tax_amount=invoice.tax_amount,
                    total=invoice.total_amount,
                    items=[to_item_dto(item) for item in sorted(items, key=lambda i: i.position)],
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_TOTALS_FAILED",
                    message="Failed to retrieve invoice totals",
                    reason=str(e),
                )
            )
