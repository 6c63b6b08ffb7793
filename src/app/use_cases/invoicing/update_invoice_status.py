"""UpdateInvoiceStatus Use Case

Owner-driven status changes: mark as paid, or void.
"""

import logging
from libs.result import Result, Return, Error
from src.domain.base import utc_now
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.invoice import InvoiceStatus
from .dtos import UpdateInvoiceStatusCommandDTO, InvoiceResponseDTO
from .mappers import to_invoice_response

logger = logging.getLogger(__name__)

OWNER_TARGET_STATUSES = (InvoiceStatus.PAID, InvoiceStatus.VOID)


class UpdateInvoiceStatus:
    """
    Use Case: Update invoice status

    Business Rules:
    1. Only the owner can change the status
    2. Allowed here: pending -> paid, draft -> void, pending -> void
    3. draft -> pending only happens through SendInvoice
    4. paid and void are terminal
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo

    async def execute(self, command: UpdateInvoiceStatusCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_for_owner(command.invoice_id, command.user_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {command.invoice_id} not found",
                        reason="Invoice does not exist or belongs to another user",
                    )
                )

            current = InvoiceStatus(invoice.status)
            if command.status not in OWNER_TARGET_STATUSES or not invoice.can_transition_to(command.status):
                return Return.err(
                    Error(
                        code="INVALID_STATUS_TRANSITION",
                        message=f"Cannot change status from {current.value} to {command.status.value}",
                        reason="Transition not allowed",
                    )
                )

            invoice.status = command.status
            invoice.updated_at = utc_now()
            invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(
                f"Invoice {invoice.invoice_number} status {current.value} -> {command.status.value}"
            )

            items = await self.item_repo.get_by_invoice_id(invoice.id)
            return Return.ok(to_invoice_response(invoice, items))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_STATUS_FAILED",
                    message="Failed to update invoice status",
                    reason=str(e),
                )
            )
