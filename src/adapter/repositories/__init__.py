from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_item_repository import SqlAlchemyInvoiceItemRepository
from .invoice_settings_repository import SqlAlchemyInvoiceSettingsRepository
from .listing_repository import SqlAlchemyListingRepository

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceItemRepository",
    "SqlAlchemyInvoiceSettingsRepository",
    "SqlAlchemyListingRepository",
]
