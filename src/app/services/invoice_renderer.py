"""Invoice Rendering Service Interface

Defines the contract for turning an invoice into a printable artifact.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem
from src.domain.invoice_settings import InvoiceSettings


class InvoiceSnapshot(BaseModel):
    """Everything the renderer needs, read at render time"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    invoice: Invoice
    items: List[InvoiceItem]
    settings: Optional[InvoiceSettings] = None


class RenderedArtifact(BaseModel):
    artifact_url: str


class InvoiceRenderer(ABC):
    """
    Service interface for invoice artifact generation

    Implementations must raise RenderError on any failure and return only
    the normalized RenderedArtifact.
    """

    @abstractmethod
    async def render(self, snapshot: InvoiceSnapshot) -> RenderedArtifact:
        """
        Render the invoice and store the artifact

        Args:
            snapshot: Invoice, its ordered items and the issuer's settings

        Returns:
            RenderedArtifact with the URL of the stored document

        Raises:
            RenderError: If the artifact could not be produced or stored
        """
        pass

    @abstractmethod
    async def load(self, invoice: Invoice) -> Optional[bytes]:
        """Return the stored artifact bytes for an invoice, if any"""
        pass
