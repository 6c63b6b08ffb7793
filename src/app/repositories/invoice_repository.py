"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, List, Tuple
from src.domain.invoice import Invoice, InvoiceStatus, InvoiceType


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Implementations flush but never commit; the UnitOfWork commits.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        pass

    @abstractmethod
    async def get_for_owner(self, invoice_id: int, user_id: str) -> Optional[Invoice]:
        """
        Retrieve invoice by ID, scoped to its owner

        Returns:
            Invoice if it exists and belongs to user_id, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_user(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        invoice_type: Optional[InvoiceType] = None,
        search: Optional[str] = None,
        issued_from: Optional[date] = None,
        sort_by: str = "created_at",
        descending: bool = True,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        Retrieve a filtered page of an issuer's invoices

        Args:
            user_id: Issuer identifier
            status: Optional status filter
            invoice_type: Optional type filter
            search: Case-insensitive match on title, recipient email or number
            issued_from: Only invoices with issue_date on or after this date
            sort_by: Column to sort by
            descending: Sort direction
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of (invoices, total matching count)
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        pass

    @abstractmethod
    async def generate_invoice_number(self, user_id: str) -> str:
        """
        Generate the next invoice number for an issuer without settings

        Format: INV-YYYY-NNNNNN (e.g., INV-2024-000001), sequenced per issuer
        """
        pass
