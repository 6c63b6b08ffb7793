from .invoice_repository import InvoiceRepository
from .invoice_item_repository import InvoiceItemRepository
from .invoice_settings_repository import InvoiceSettingsRepository

__all__ = [
    "InvoiceRepository",
    "InvoiceItemRepository",
    "InvoiceSettingsRepository",
]
