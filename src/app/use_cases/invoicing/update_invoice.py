"""UpdateInvoice Use Case

Edits a draft invoice. Issued invoices only accept note changes.
"""

import logging
from typing import Dict
from libs.result import Result, Return, Error
from src.domain.base import utc_now
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_item import InvoiceItem
from src.domain.ledger import LineItem, LineItemLedger
from .dtos import UpdateInvoiceCommandDTO, InvoiceResponseDTO
from .mappers import to_invoice_response
from .validation import (
    build_line_items,
    check_items_present,
    validate_recipient_email,
    validate_tax,
    validate_title,
    validation_error,
)

logger = logging.getLogger(__name__)

HEADER_FIELDS = (
    "recipient_email",
    "recipient_name",
    "recipient_address",
    "type",
    "title",
    "description",
    "issue_date",
    "due_date",
    "notes",
    "reference",
)
ISSUED_EDITABLE_FIELDS = {"notes"}


class UpdateInvoice:
    """
    Use Case: Update invoice

    Business Rules:
    1. Only the owner can edit an invoice
    2. Draft invoices without an artifact accept any editable field
    3. Issued or non-draft invoices accept only notes (INVOICE_ISSUED otherwise)
    4. Item or tax rate changes recompute the stored totals
    5. New items replace the old ones in the same unit of work

    Flow:
    1. Retrieve invoice scoped to owner
    2. Check which fields may change
    3. Validate new values
    4. Apply header fields, replace items, recompute totals
    5. Commit
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

    async def execute(self, command: UpdateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
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

            changed = command.model_fields_set - {"invoice_id", "user_id"}

            locked = invoice.is_issued or invoice.status != InvoiceStatus.DRAFT
            if locked and changed - ISSUED_EDITABLE_FIELDS:
                return Return.err(
                    Error(
                        code="INVOICE_ISSUED",
                        message=f"Invoice {invoice.invoice_number} has been issued; only notes can be changed",
                        reason=", ".join(sorted(changed - ISSUED_EDITABLE_FIELDS)),
                    )
                )

            errors: Dict[str, str] = {}
            if "recipient_email" in changed:
                validate_recipient_email(command.recipient_email, errors)
            if "title" in changed:
                validate_title(command.title, errors)
            tax_rate = invoice.tax_rate
            if "tax_rate" in changed:
                tax_rate = validate_tax(command.tax_rate, errors)
            new_items = None
            if "items" in changed:
                new_items = build_line_items(command.items or [], errors)
                check_items_present(new_items, errors)
            issue_date = command.issue_date if "issue_date" in changed else invoice.issue_date
            due_date = command.due_date if "due_date" in changed else invoice.due_date
            for field in ("issue_date", "due_date", "type"):
                if field in changed and getattr(command, field) is None:
                    errors[field] = f"{field} cannot be empty"
            if issue_date and due_date and due_date < issue_date:
                errors["due_date"] = "Due date cannot be before issue date"

            if errors:
                return Return.err(validation_error(errors))

            for field in HEADER_FIELDS:
                if field in changed:
                    value = getattr(command, field)
                    if isinstance(value, str) and field in ("recipient_email", "title"):
                        value = value.strip()
                    setattr(invoice, field, value)

            items = await self.item_repo.get_by_invoice_id(invoice.id)

            if new_items is not None or "tax_rate" in changed:
                if new_items is None:
                    ledger = LineItemLedger(
                        [
                            LineItem(
                                description=item.description,
                                quantity=item.quantity,
                                unit_price=item.unit_price,
                            )
                            for item in items
                        ]
                    )
                else:
                    ledger = LineItemLedger(new_items)
                    await self.item_repo.delete_by_invoice_id(invoice.id)
                    items = await self.item_repo.create_many(
                        [
                            InvoiceItem(
                                invoice_id=invoice.id,
                                position=position,
                                description=item.description,
                                quantity=item.quantity,
                                unit_price=item.unit_price,
                                amount=item.amount,
                            )
                            for position, item in enumerate(ledger.items)
                        ]
                    )

                totals = ledger.totals(tax_rate)
                invoice.amount = totals.subtotal
                invoice.tax_rate = totals.tax_rate
                invoice.tax_amount = totals.tax_amount
                invoice.total_amount = totals.total

            invoice.updated_at = utc_now()
            invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Updated invoice {invoice.invoice_number}: {', '.join(sorted(changed))}")
            return Return.ok(to_invoice_response(invoice, items))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )
