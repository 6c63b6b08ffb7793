"""In-memory collaborators for integration tests"""

from typing import List, Optional

from src.adapter.repositories import SqlAlchemyInvoiceRepository
from src.app.services.errors import RenderError
from src.app.services.invoice_renderer import InvoiceRenderer, InvoiceSnapshot, RenderedArtifact
from src.app.services.mailer import DeliveryReceipt, Mailer


class RecordingMailer(Mailer):
    """Mailer that keeps sent emails in memory"""

    def __init__(self):
        self.sent: List[dict] = []

    async def send(
        self,
        recipient_email: str,
        artifact_url: str,
        subject: str,
        message: str,
        sender_name: Optional[str] = None,
        attachment_name: Optional[str] = None,
    ) -> DeliveryReceipt:
        self.sent.append(
            {
                "recipient_email": recipient_email,
                "artifact_url": artifact_url,
                "subject": subject,
                "message": message,
            }
        )
        return DeliveryReceipt(success=True, message_id=f"msg_{len(self.sent)}")


class FailingRenderer(InvoiceRenderer):

    async def render(self, snapshot: InvoiceSnapshot) -> RenderedArtifact:
        raise RenderError("Failed to render invoice", reason="renderer offline")

    async def load(self, invoice) -> Optional[bytes]:
        return None


class FailingUpdateInvoiceRepository(SqlAlchemyInvoiceRepository):
    """Invoice repository whose update fails, so recording an artifact fails"""

    async def update(self, invoice):
        raise RuntimeError("database unavailable")
