"""RenderInvoice Use Case

Produces the printable artifact for an invoice and records its URL.
"""

import logging
from libs.result import Result, Return, Error
from src.domain.base import utc_now
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.errors import RenderError
from src.app.services.invoice_renderer import InvoiceRenderer, InvoiceSnapshot
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_settings_repository import InvoiceSettingsRepository
from src.domain.invoice import Invoice
from .dtos import ArtifactResponseDTO

logger = logging.getLogger(__name__)


class RenderInvoice:
    """
    Use Case: Render invoice artifact

    Business Rules:
    1. Only the owner can render an invoice
    2. The artifact shows the stored totals and items in display order
    3. On failure the invoice is left untouched
    4. Re-rendering replaces the artifact at the same location

    Flow:
    1. Retrieve invoice scoped to owner
    2. Build snapshot (invoice, items, issuer settings)
    3. Render and store artifact
    4. Record pdf_url and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
        settings_repo: InvoiceSettingsRepository,
        renderer: InvoiceRenderer,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo
        self.settings_repo = settings_repo
        self.renderer = renderer

    async def render(self, invoice: Invoice) -> Invoice:
        """
        Render an already loaded invoice and persist its pdf_url

        Shared by CreateInvoice, SendInvoice and DownloadInvoiceArtifact.

        Raises:
            RenderError: If the artifact could not be produced or recorded
        """
        items = await self.item_repo.get_by_invoice_id(invoice.id)
        settings = await self.settings_repo.get_by_user_id(invoice.user_id)

        artifact = await self.renderer.render(
            InvoiceSnapshot(invoice=invoice, items=items, settings=settings)
        )

        invoice_id = invoice.id
        try:
            invoice.pdf_url = artifact.artifact_url
            invoice.updated_at = utc_now()
            invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            # rollback expires loaded state; reload it for the caller
            await self.invoice_repo.get_by_id(invoice_id)
            raise RenderError(
                f"Failed to record artifact for invoice {invoice_id}", reason=str(e)
            ) from e

        return invoice

    async def execute(self, invoice_id: int, user_id: str) -> Result[ArtifactResponseDTO]:
        """
        Execute invoice rendering

        Args:
            invoice_id: Invoice to render
            user_id: Requesting issuer

        Returns:
            Result[ArtifactResponseDTO]: Success with artifact URL or error
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

            try:
                invoice = await self.render(invoice)
            except RenderError as e:
                return Return.err(
                    Error(code="RENDER_FAILED", message=e.message, reason=e.reason)
                )

            return Return.ok(
                ArtifactResponseDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    pdf_url=invoice.pdf_url,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="RENDER_INVOICE_FAILED",
                    message="Failed to render invoice",
                    reason=str(e),
                )
            )
