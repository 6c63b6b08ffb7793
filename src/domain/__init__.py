from .base import BaseModel
from .invoice import Invoice, InvoiceStatus, InvoiceType
from .invoice_item import InvoiceItem
from .invoice_settings import InvoiceSettings
from .listing import Listing
from .ledger import LineItem, LineItemLedger
from .totals import InvoiceTotals, calculate_totals

__all__ = [
    "BaseModel",
    "Invoice",
    "InvoiceStatus",
    "InvoiceType",
    "InvoiceItem",
    "InvoiceSettings",
    "Listing",
    "LineItem",
    "LineItemLedger",
    "InvoiceTotals",
    "calculate_totals",
]
