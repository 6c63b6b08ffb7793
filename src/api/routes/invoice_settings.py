"""Invoice Settings API Routes

FastAPI routes for an issuer's business profile and invoice numbering.
"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.invoice_request import InvoiceSettingsRequestSchema
from src.app.use_cases.invoicing import GetInvoiceSettings, UpsertInvoiceSettings
from src.app.use_cases.invoicing.dtos import InvoiceSettingsDTO, UpsertInvoiceSettingsCommandDTO
from src.adapter.repositories import SqlAlchemyInvoiceSettingsRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import raise_client_error

router = APIRouter(prefix="/invoice-settings", tags=["Invoice Settings"])


@router.get(
    "/{user_id}",
    response_model=InvoiceSettingsDTO,
    responses={
        404: {
            "description": "Settings not saved yet",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "SETTINGS_NOT_FOUND",
                            "message": "No invoice settings for user user_abc123"
                        }
                    }
                }
            }
        }
    }
)
async def get_invoice_settings(user_id: str, session: AsyncSession = Depends(get_session)):
    """Get the issuer's invoice settings."""
    result = await GetInvoiceSettings(SqlAlchemyInvoiceSettingsRepository(session)).execute(user_id)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.put("/{user_id}", response_model=InvoiceSettingsDTO)
async def save_invoice_settings(
    user_id: str,
    request: InvoiceSettingsRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Create or update the issuer's invoice settings.

    New settings start numbering at `INV-1001` unless `invoice_prefix` or
    `next_invoice_number` are given. The counter cannot be moved backwards.
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = UpsertInvoiceSettings(uow, SqlAlchemyInvoiceSettingsRepository(session))
    result = await use_case.execute(
        UpsertInvoiceSettingsCommandDTO(user_id=user_id, **request.model_dump())
    )

    if result.is_err():
        raise_client_error(result.error)

    return result.value
