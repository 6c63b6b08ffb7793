"""DownloadInvoiceArtifact Use Case

Hands out the invoice artifact, rendering it on first access.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.errors import RenderError
from src.app.services.invoice_renderer import InvoiceRenderer
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import ArtifactContentDTO, ArtifactResponseDTO
from .render_invoice import RenderInvoice

logger = logging.getLogger(__name__)


class DownloadInvoiceArtifact:
    """
    Use Case: Download invoice artifact

    Business Rules:
    1. Only the owner can download an invoice
    2. A missing artifact is rendered lazily
    3. If it still cannot be produced, ARTIFACT_NOT_READY is returned

    Flow:
    1. Retrieve invoice scoped to owner
    2. Render if there is no pdf_url (or the stored file is gone)
    3. Return URL (execute) or bytes (execute_content)
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        render_invoice: RenderInvoice,
        renderer: InvoiceRenderer,
    ):
        self.invoice_repo = invoice_repo
        self.render_invoice = render_invoice
        self.renderer = renderer

    async def execute(self, invoice_id: int, user_id: str) -> Result[ArtifactResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id)
            if not invoice:
                return self._not_found(invoice_id)

            if not invoice.pdf_url:
                try:
                    invoice = await self.render_invoice.render(invoice)
                except RenderError as e:
                    return self._not_ready(invoice_id, e)

            return Return.ok(
                ArtifactResponseDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    pdf_url=invoice.pdf_url,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="DOWNLOAD_ARTIFACT_FAILED",
                    message="Failed to retrieve invoice artifact",
                    reason=str(e),
                )
            )

    async def execute_content(self, invoice_id: int, user_id: str) -> Result[ArtifactContentDTO]:
        """
        Return the artifact bytes

        A stored URL whose file is missing is treated like a missing
        artifact and rendered again once.
        """
        try:
            invoice = await self.invoice_repo.get_for_owner(invoice_id, user_id)
            if not invoice:
                return self._not_found(invoice_id)

            content = await self.renderer.load(invoice) if invoice.pdf_url else None
            if content is None:
                try:
                    invoice = await self.render_invoice.render(invoice)
                except RenderError as e:
                    return self._not_ready(invoice_id, e)
                content = await self.renderer.load(invoice)

            if content is None:
                return Return.err(
                    Error(
                        code="ARTIFACT_NOT_READY",
                        message=f"Artifact for invoice {invoice_id} is not available",
                        reason="Rendered artifact could not be read back",
                    )
                )

            return Return.ok(
                ArtifactContentDTO(
                    invoice_id=invoice.id,
                    filename=f"Invoice-{invoice.invoice_number}.pdf",
                    content=content,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="DOWNLOAD_ARTIFACT_FAILED",
                    message="Failed to retrieve invoice artifact",
                    reason=str(e),
                )
            )

    def _not_found(self, invoice_id: int):
        return Return.err(
            Error(
                code="INVOICE_NOT_FOUND",
                message=f"Invoice with ID {invoice_id} not found",
                reason="Invoice does not exist or belongs to another user",
            )
        )

    def _not_ready(self, invoice_id: int, error: RenderError):
        logger.warning(f"Artifact for invoice {invoice_id} not ready: {error.message}")
        return Return.err(
            Error(
                code="ARTIFACT_NOT_READY",
                message=f"Artifact for invoice {invoice_id} is not ready",
                reason=error.reason or error.message,
            )
        )
