"""CreateInvoice Use Case

Composes a draft invoice from recipient details, line items and an optional
listing snapshot, then persists it with its items in one unit of work.
"""

import logging
from datetime import date, timedelta
from typing import Dict, Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.errors import RenderError
from src.app.services.listing_snapshot_source import ListingSnapshotSource
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_settings_repository import InvoiceSettingsRepository
from src.domain.invoice import Invoice, InvoiceStatus, InvoiceType
from src.domain.invoice_item import InvoiceItem
from src.domain.ledger import LineItemLedger
from src.domain.listing import invoice_type_for_category
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO
from .mappers import to_invoice_response
from .render_invoice import RenderInvoice
from .validation import (
    build_line_items,
    check_items_present,
    validate_recipient_email,
    validate_tax,
    validate_title,
    validation_error,
)

logger = logging.getLogger(__name__)

DEFAULT_DUE_DAYS = 14


class CreateInvoice:
    """
    Use Case: Create draft invoice

    Business Rules:
    1. recipient_email, title and at least one valid line item are required
    2. All field errors are reported together; nothing is persisted on error
    3. A listing snapshot becomes the first line item
    4. Invoice number comes from the issuer's settings counter when present,
       otherwise INV-YYYY-NNNNNN per issuer
    5. Invoice, items and settings counter are committed atomically
    6. Rendering after creation is best-effort

    Flow:
    1. Load listing snapshot (if listing_id)
    2. Build ledger and validate
    3. Compute totals and default dates
    4. Assign invoice number
    5. Persist invoice + items, commit
    6. Render artifact (optional, failures logged)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
        settings_repo: InvoiceSettingsRepository,
        listing_source: ListingSnapshotSource,
        render_invoice: Optional[RenderInvoice] = None,
        default_due_days: int = DEFAULT_DUE_DAYS,
        currency: str = "USD",
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo
        self.settings_repo = settings_repo
        self.listing_source = listing_source
        self.render_invoice = render_invoice
        self.default_due_days = default_due_days
        self.currency = currency

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with recipient, items and tax rate

        Returns:
            Result[InvoiceResponseDTO]: Success with the draft invoice or error
        """
        try:
            # Step 1: Listing snapshot
            listing = None
            if command.listing_id is not None:
                listing = await self.listing_source.get_snapshot(command.listing_id)
                if not listing:
                    return Return.err(
                        Error(
                            code="LISTING_NOT_FOUND",
                            message=f"Listing with ID {command.listing_id} not found",
                            reason="Listing does not exist",
                        )
                    )

            title = command.title
            description = command.description
            invoice_type = command.type
            ledger = None
            if listing:
                title = title or f"Invoice for {listing.title}"
                description = description or f"Payment for {listing.title}"
                invoice_type = invoice_type or invoice_type_for_category(listing.category)
                ledger = LineItemLedger.from_listing(listing.title, listing.price)

            # Step 2: Validate
            errors: Dict[str, str] = {}
            validate_recipient_email(command.recipient_email, errors)
            validate_title(title, errors)
            tax_rate = validate_tax(command.tax_rate, errors)
            submitted = build_line_items(
                command.items, errors, offset=len(ledger) if ledger is not None else 0
            )
            if ledger is None:
                check_items_present(submitted, errors)

            if errors:
                return Return.err(validation_error(errors))

            # Step 3: Totals and dates
            if ledger is None:
                ledger = LineItemLedger(submitted)
            else:
                for item in submitted:
                    ledger.append(item)
            totals = ledger.totals(tax_rate)
            issue_date = command.issue_date or date.today()
            due_date = command.due_date or issue_date + timedelta(days=self.default_due_days)

            if due_date < issue_date:
                return Return.err(
                    validation_error({"due_date": "Due date cannot be before issue date"})
                )

            # Step 4: Invoice number
            invoice_number = await self._assign_invoice_number(command.user_id)

            # Step 5: Persist
            invoice = Invoice(
                user_id=command.user_id,
                invoice_number=invoice_number,
                status=InvoiceStatus.DRAFT,
                type=invoice_type or InvoiceType.PRODUCT,
                title=title.strip(),
                description=description,
                recipient_email=command.recipient_email.strip(),
                recipient_name=command.recipient_name,
                recipient_address=command.recipient_address,
                listing_id=command.listing_id,
                currency=self.currency,
                amount=totals.subtotal,
                tax_rate=totals.tax_rate,
                tax_amount=totals.tax_amount,
                total_amount=totals.total,
                issue_date=issue_date,
                due_date=due_date,
                notes=command.notes,
                reference=command.reference,
            )
            created = await self.invoice_repo.create(invoice)

            items = await self.item_repo.create_many(
                [
                    InvoiceItem(
                        invoice_id=created.id,
                        position=position,
                        description=item.description,
                        quantity=item.quantity,
                        unit_price=item.unit_price,
                        amount=item.amount,
                    )
                    for position, item in enumerate(ledger.items)
                ]
            )

            await self.uow.commit()
            logger.info(f"Created invoice {created.invoice_number} for user {created.user_id}")
            response = to_invoice_response(created, items)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )

        # Step 6: Best-effort render
        if command.render and self.render_invoice:
            try:
                rendered = await self.render_invoice.render(created)
                response = response.model_copy(
                    update={"pdf_url": rendered.pdf_url, "updated_at": rendered.updated_at}
                )
            except RenderError as e:
                logger.warning(
                    f"Invoice {response.invoice_number} created without artifact: "
                    f"{e.message} ({e.reason})"
                )
            except Exception as e:
                logger.warning(f"Invoice {response.invoice_number} created without artifact: {e}")

        return Return.ok(response)

    async def _assign_invoice_number(self, user_id: str) -> str:
        settings = await self.settings_repo.get_by_user_id(user_id, for_update=True)
        if not settings:
            return await self.invoice_repo.generate_invoice_number(user_id)

        invoice_number = settings.take_invoice_number()
        await self.settings_repo.update(settings)
        return invoice_number
