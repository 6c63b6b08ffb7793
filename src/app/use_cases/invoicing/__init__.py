"""Invoicing domain use cases"""
from .create_invoice import CreateInvoice
from .render_invoice import RenderInvoice
from .send_invoice import SendInvoice
from .get_invoice import GetInvoice
from .get_invoice_totals import GetInvoiceTotals
from .download_artifact import DownloadInvoiceArtifact
from .list_invoices import ListInvoices
from .update_invoice import UpdateInvoice
from .update_invoice_status import UpdateInvoiceStatus
from .invoice_settings import GetInvoiceSettings, UpsertInvoiceSettings
from .dtos import (
    LineItemInputDTO,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    UpdateInvoiceStatusCommandDTO,
    SendInvoiceCommandDTO,
    SendInvoiceResponseDTO,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    InvoiceItemDTO,
    InvoiceResponseDTO,
    InvoiceSummaryDTO,
    InvoiceTotalsResponseDTO,
    ArtifactResponseDTO,
    ArtifactContentDTO,
    InvoiceSettingsDTO,
    UpsertInvoiceSettingsCommandDTO,
)

__all__ = [
    "CreateInvoice",
    "RenderInvoice",
    "SendInvoice",
    "GetInvoice",
    "GetInvoiceTotals",
    "DownloadInvoiceArtifact",
    "ListInvoices",
    "UpdateInvoice",
    "UpdateInvoiceStatus",
    "GetInvoiceSettings",
    "UpsertInvoiceSettings",
    "LineItemInputDTO",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "UpdateInvoiceStatusCommandDTO",
    "SendInvoiceCommandDTO",
    "SendInvoiceResponseDTO",
    "ListInvoicesQueryDTO",
    "ListInvoicesResponseDTO",
    "InvoiceItemDTO",
    "InvoiceResponseDTO",
    "InvoiceSummaryDTO",
    "InvoiceTotalsResponseDTO",
    "ArtifactResponseDTO",
    "ArtifactContentDTO",
    "InvoiceSettingsDTO",
    "UpsertInvoiceSettingsCommandDTO",
]
