"""Invoice Item Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_item import InvoiceItem


class InvoiceItemRepository(ABC):
    """Repository interface for InvoiceItem persistence"""

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceItem]:
        """
        Retrieve all items for an invoice

        Returns:
            Items ordered by position
        """
        pass

    @abstractmethod
    async def create_many(self, items: List[InvoiceItem]) -> List[InvoiceItem]:
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: int) -> None:
        pass
