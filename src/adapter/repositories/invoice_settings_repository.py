"""SQLAlchemy Invoice Settings Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_settings_repository import InvoiceSettingsRepository
from src.domain.base import utc_now
from src.domain.invoice_settings import InvoiceSettings


class SqlAlchemyInvoiceSettingsRepository(InvoiceSettingsRepository):
    """
    SQLAlchemy implementation of InvoiceSettingsRepository

    Supports SELECT FOR UPDATE so two invoices never take the same number.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: str, for_update: bool = False) -> Optional[InvoiceSettings]:
        stmt = select(InvoiceSettings).where(InvoiceSettings.user_id == user_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, settings: InvoiceSettings) -> InvoiceSettings:
        self.session.add(settings)
        await self.session.flush()
        await self.session.refresh(settings)
        return settings

    async def update(self, settings: InvoiceSettings) -> InvoiceSettings:
        settings.updated_at = utc_now()
        self.session.add(settings)
        await self.session.flush()
        await self.session.refresh(settings)
        return settings
