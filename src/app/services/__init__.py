from .unit_of_work import UnitOfWork
from .errors import CollaboratorError, RenderError, DeliveryError
from .artifact_storage import ArtifactStorage
from .invoice_renderer import InvoiceRenderer, InvoiceSnapshot, RenderedArtifact
from .mailer import Mailer, DeliveryReceipt
from .listing_snapshot_source import ListingSnapshotSource, ListingSnapshot

__all__ = [
    "UnitOfWork",
    "CollaboratorError",
    "RenderError",
    "DeliveryError",
    "ArtifactStorage",
    "InvoiceRenderer",
    "InvoiceSnapshot",
    "RenderedArtifact",
    "Mailer",
    "DeliveryReceipt",
    "ListingSnapshotSource",
    "ListingSnapshot",
]
