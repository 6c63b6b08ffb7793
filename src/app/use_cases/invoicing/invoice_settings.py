"""Invoice Settings Use Cases

Read and create-or-update an issuer's business profile and numbering.
"""

import logging
from libs.result import Result, Return, Error
from src.domain.base import utc_now
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_settings_repository import InvoiceSettingsRepository
from src.domain.invoice_settings import (
    DEFAULT_INVOICE_PREFIX,
    DEFAULT_NEXT_INVOICE_NUMBER,
    InvoiceSettings,
)
from .dtos import InvoiceSettingsDTO, UpsertInvoiceSettingsCommandDTO
from .mappers import to_settings_dto
from .validation import validation_error

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "address",
    "phone",
    "email",
    "website",
    "tax_number",
    "terms",
    "notes",
)


class GetInvoiceSettings:
    def __init__(self, settings_repo: InvoiceSettingsRepository):
        self.settings_repo = settings_repo

    async def execute(self, user_id: str) -> Result[InvoiceSettingsDTO]:
        try:
            settings = await self.settings_repo.get_by_user_id(user_id)
            if not settings:
                return Return.err(
                    Error(
                        code="SETTINGS_NOT_FOUND",
                        message=f"No invoice settings for user {user_id}",
                        reason="Settings have not been saved yet",
                    )
                )
            return Return.ok(to_settings_dto(settings))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_SETTINGS_FAILED",
                    message="Failed to retrieve invoice settings",
                    reason=str(e),
                )
            )


class UpsertInvoiceSettings:
    """
    Use Case: Create or update invoice settings

    Business Rules:
    1. One settings row per issuer
    2. business_name is required
    3. invoice_prefix defaults to INV-, next_invoice_number to 1001
    4. next_invoice_number cannot move backwards (numbers stay unique)
    """

    def __init__(self, uow: UnitOfWork, settings_repo: InvoiceSettingsRepository):
        self.uow = uow
        self.settings_repo = settings_repo

    async def execute(self, command: UpsertInvoiceSettingsCommandDTO) -> Result[InvoiceSettingsDTO]:
        try:
            if not command.business_name or not command.business_name.strip():
                return Return.err(validation_error({"business_name": "Business name is required"}))

            settings = await self.settings_repo.get_by_user_id(command.user_id, for_update=True)

            if not settings:
                settings = InvoiceSettings(
                    user_id=command.user_id,
                    business_name=command.business_name.strip(),
                    invoice_prefix=command.invoice_prefix or DEFAULT_INVOICE_PREFIX,
                    next_invoice_number=command.next_invoice_number or DEFAULT_NEXT_INVOICE_NUMBER,
                    **{field: getattr(command, field) for field in PROFILE_FIELDS},
                )
                settings = await self.settings_repo.create(settings)
                logger.info(f"Created invoice settings for user {command.user_id}")
            else:
                if (
                    command.next_invoice_number is not None
                    and command.next_invoice_number < settings.next_invoice_number
                ):
                    return Return.err(
                        validation_error(
                            {
                                "next_invoice_number": (
                                    f"Must be at least {settings.next_invoice_number}"
                                )
                            }
                        )
                    )

                settings.business_name = command.business_name.strip()
                for field in PROFILE_FIELDS:
                    setattr(settings, field, getattr(command, field))
                if command.invoice_prefix is not None:
                    settings.invoice_prefix = command.invoice_prefix
                if command.next_invoice_number is not None:
                    settings.next_invoice_number = command.next_invoice_number
                settings.updated_at = utc_now()
                settings = await self.settings_repo.update(settings)
                logger.info(f"Updated invoice settings for user {command.user_id}")

            await self.uow.commit()
            return Return.ok(to_settings_dto(settings))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPSERT_INVOICE_SETTINGS_FAILED",
                    message="Failed to save invoice settings",
                    reason=str(e),
                )
            )
