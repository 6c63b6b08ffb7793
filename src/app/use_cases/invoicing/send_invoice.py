"""SendInvoice Use Case

Delivers an invoice to its recipient and moves it from draft to pending.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.domain.base import utc_now
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.errors import DeliveryError, RenderError
from src.app.services.mailer import Mailer
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_settings_repository import InvoiceSettingsRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.totals import round_money
from .dtos import SendInvoiceCommandDTO, SendInvoiceResponseDTO
from .render_invoice import RenderInvoice

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Please find your invoice attached. Thank you for your business."


def compose_message(invoice: Invoice, message: Optional[str] = None) -> str:
    return "\n".join(
        [
            (message or DEFAULT_MESSAGE).strip(),
            "",
            f"Invoice #: {invoice.invoice_number}",
            f"Amount due: {invoice.currency} {round_money(invoice.total_amount):,.2f}",
            f"Due date: {invoice.due_date.strftime('%Y-%m-%d')}",
        ]
    )


class SendInvoice:
    """
    Use Case: Send invoice to recipient

    Business Rules:
    1. Only the owner can send an invoice
    2. Paid and void invoices cannot be sent
    3. An invoice without artifact is rendered first; a render failure
       aborts the send before any delivery attempt
    4. Delivery failure leaves the status unchanged
    5. draft -> pending on success; resending a pending invoice only
       refreshes sent_at

    Flow:
    1. Retrieve invoice scoped to owner
    2. Validate status
    3. Render artifact if missing
    4. Deliver email with artifact link
    5. Update status and sent_at, commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        settings_repo: InvoiceSettingsRepository,
        render_invoice: RenderInvoice,
        mailer: Mailer,
        default_business_name: str = "Marketplace Seller",
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.settings_repo = settings_repo
        self.render_invoice = render_invoice
        self.mailer = mailer
        self.default_business_name = default_business_name

    async def execute(self, command: SendInvoiceCommandDTO) -> Result[SendInvoiceResponseDTO]:
        """
        Execute invoice delivery

        Args:
            command: SendInvoiceCommandDTO with invoice_id, user_id and optional message

        Returns:
            Result[SendInvoiceResponseDTO]: Success with new status or error
        """
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_for_owner(command.invoice_id, command.user_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {command.invoice_id} not found",
                        reason="Invoice does not exist or belongs to another user",
                    )
                )

            # Step 2: Validate status
            if invoice.status in (InvoiceStatus.PAID, InvoiceStatus.VOID):
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_STATUS",
                        message=f"Invoice cannot be sent. Current status: {invoice.status.value}",
                        reason="Only draft or pending invoices can be sent",
                    )
                )

            # Step 3: Render if needed
            if not invoice.pdf_url:
                try:
                    invoice = await self.render_invoice.render(invoice)
                except RenderError as e:
                    logger.error(f"Send aborted for invoice {invoice.id}: {e.message}")
                    return Return.err(
                        Error(code="RENDER_FAILED", message=e.message, reason=e.reason)
                    )

            # Step 4: Deliver
            settings = await self.settings_repo.get_by_user_id(invoice.user_id)
            sender_name = (settings.business_name if settings else None) or self.default_business_name
            subject = f"Invoice #{invoice.invoice_number} from {sender_name}"

            try:
                receipt = await self.mailer.send(
                    recipient_email=invoice.recipient_email,
                    artifact_url=invoice.pdf_url,
                    subject=subject,
                    message=compose_message(invoice, command.message),
                    sender_name=sender_name,
                    attachment_name=f"Invoice-{invoice.invoice_number}.pdf",
                )
                if not receipt.success:
                    raise DeliveryError("Email provider did not accept the message")
            except DeliveryError as e:
                logger.error(f"Failed to deliver invoice {invoice.id}: {e.message}")
                return Return.err(
                    Error(code="DELIVERY_FAILED", message=e.message, reason=e.reason)
                )

            # Step 5: Update status
            if invoice.status == InvoiceStatus.DRAFT:
                invoice.status = InvoiceStatus.PENDING
            invoice.sent_at = utc_now()
            invoice.updated_at = invoice.sent_at
            invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(f"Invoice {invoice.invoice_number} sent to {invoice.recipient_email}")

            return Return.ok(
                SendInvoiceResponseDTO(
                    success=True,
                    invoice_id=invoice.id,
                    status=invoice.status.value,
                    recipient_email=invoice.recipient_email,
                    pdf_url=invoice.pdf_url,
                    message=f"Invoice sent to {invoice.recipient_email}",
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SEND_INVOICE_FAILED",
                    message="Failed to send invoice",
                    reason=str(e),
                )
            )
