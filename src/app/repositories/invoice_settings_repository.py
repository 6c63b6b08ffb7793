"""Invoice Settings Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.invoice_settings import InvoiceSettings


class InvoiceSettingsRepository(ABC):

    @abstractmethod
    async def get_by_user_id(self, user_id: str, for_update: bool = False) -> Optional[InvoiceSettings]:
        """
        Retrieve an issuer's settings

        Args:
            user_id: Issuer identifier
            for_update: Lock the row (used while taking an invoice number)
        """
        pass

    @abstractmethod
    async def create(self, settings: InvoiceSettings) -> InvoiceSettings:
        pass

    @abstractmethod
    async def update(self, settings: InvoiceSettings) -> InvoiceSettings:
        pass
