"""Invoice API Routes

FastAPI routes for composing, rendering, sending and downloading invoices.
"""

from typing import Optional
from urllib.parse import quote
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.invoice_request import (
    CreateInvoiceRequestSchema,
    InvoiceOwnerRequestSchema,
    SendInvoiceRequestSchema,
    UpdateInvoiceRequestSchema,
    UpdateInvoiceStatusRequestSchema,
)
from src.app.services.invoice_renderer import InvoiceRenderer
from src.app.services.mailer import Mailer
from src.app.use_cases.invoicing import (
    CreateInvoice,
    DownloadInvoiceArtifact,
    GetInvoice,
    GetInvoiceTotals,
    ListInvoices,
    RenderInvoice,
    SendInvoice,
    UpdateInvoice,
    UpdateInvoiceStatus,
)
from src.app.use_cases.invoicing.dtos import (
    ArtifactResponseDTO,
    CreateInvoiceCommandDTO,
    DateRange,
    InvoiceResponseDTO,
    InvoiceTotalsResponseDTO,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    SendInvoiceCommandDTO,
    SendInvoiceResponseDTO,
    SortField,
    UpdateInvoiceCommandDTO,
    UpdateInvoiceStatusCommandDTO,
)
from src.adapter.repositories import (
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoiceItemRepository,
    SqlAlchemyInvoiceSettingsRepository,
    SqlAlchemyListingRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.invoice import InvoiceStatus, InvoiceType
from src.depends import get_config, get_mailer, get_renderer, get_session
from src.api.error import raise_client_error

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _error_example(description: str, code: str, message: str) -> dict:
    return {
        "description": description,
        "content": {
            "application/json": {
                "example": {"error": {"code": code, "message": message}}
            }
        },
    }


NOT_FOUND_RESPONSE = _error_example(
    "Invoice not found", "INVOICE_NOT_FOUND", "Invoice with ID 123 not found"
)


def _content_disposition(filename: str) -> str:
    quoted = quote(filename, safe="")
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


def _render_invoice(session: AsyncSession, renderer: InvoiceRenderer) -> RenderInvoice:
    return RenderInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
        SqlAlchemyInvoiceSettingsRepository(session),
        renderer,
    )


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "Invoice is invalid",
                            "details": {
                                "recipient_email": "Recipient email is required",
                                "items.0.description": "Description is required",
                            },
                        }
                    }
                }
            },
        },
        404: _error_example("Listing not found", "LISTING_NOT_FOUND", "Listing with ID 7 not found"),
    },
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
    renderer: InvoiceRenderer = Depends(get_renderer),
    config=Depends(get_config),
):
    """
    Create a draft invoice.

    Line items, tax rate and recipient are validated together; every failing
    field is listed in `error.details`. When `listing_id` is given, the
    listing's title and price become the first line item.

    The PDF is rendered right after creation unless `render` is false. A
    render failure does not fail the request; `pdf_url` is then null and the
    artifact is produced on send or download.

    **Example request:**
    ```json
    {
      "user_id": "user_abc123",
      "recipient_email": "buyer@example.com",
      "title": "Widget order",
      "items": [{"description": "Widget", "quantity": 3, "unit_price": "10.00"}],
      "tax_rate": 10
    }
    ```

    **Returns:**
    - 201: Invoice created (status `draft`, total 33.00 for the example)
    - 400: Validation error
    - 404: Listing not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = CreateInvoice(
        uow,
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
        SqlAlchemyInvoiceSettingsRepository(session),
        SqlAlchemyListingRepository(session),
        render_invoice=_render_invoice(session, renderer),
        default_due_days=config.INVOICE_DEFAULT_DUE_DAYS,
        currency=config.INVOICE_CURRENCY,
    )
    result = await use_case.execute(CreateInvoiceCommandDTO(**request.model_dump()))

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get("", response_model=ListInvoicesResponseDTO)
async def list_invoices(
    user_id: str = Query(..., min_length=1),
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    type_filter: Optional[InvoiceType] = Query(default=None, alias="type"),
    search: Optional[str] = Query(default=None),
    date_range: DateRange = Query(default="all"),
    sort_by: SortField = Query(default="created_at"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100),
    session: AsyncSession = Depends(get_session),
):
    """
    List the issuer's invoices.

    **Query parameters:**
    - `user_id` (required): Issuer
    - `status`, `type`: Optional filters
    - `search`: Matches title, recipient email or invoice number
    - `date_range`: `all`, `last30`, `last90` or `this_year` (on issue date)
    - `sort_by`, `sort_order`: Sorting (default newest first)
    - `page`, `page_size`: Pagination
    """
    query = ListInvoicesQueryDTO(
        user_id=user_id,
        status=status_filter,
        type=type_filter,
        search=search,
        date_range=date_range,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
    )
    result = await ListInvoices(SqlAlchemyInvoiceRepository(session)).execute(query)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_invoice(
    invoice_id: int,
    user_id: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session),
):
    """Get an invoice with its line items."""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session), SqlAlchemyInvoiceItemRepository(session)
    )
    result = await use_case.execute(invoice_id, user_id)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.patch(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={
        404: NOT_FOUND_RESPONSE,
        400: _error_example(
            "Invoice already issued",
            "INVOICE_ISSUED",
            "Invoice INV-1001 has been issued; only notes can be changed",
        ),
    },
)
async def update_invoice(
    invoice_id: int,
    request: UpdateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Edit an invoice.

    Draft invoices without a rendered PDF accept any field; changing
    `items` or `tax_rate` recomputes the totals. Once the PDF exists only
    `notes` can change.
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = UpdateInvoice(
        uow, SqlAlchemyInvoiceRepository(session), SqlAlchemyInvoiceItemRepository(session)
    )
    command = UpdateInvoiceCommandDTO(
        invoice_id=invoice_id, **request.model_dump(exclude_unset=True)
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.post(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    responses={
        404: NOT_FOUND_RESPONSE,
        400: _error_example(
            "Transition not allowed",
            "INVALID_STATUS_TRANSITION",
            "Cannot change status from draft to paid",
        ),
    },
)
async def update_invoice_status(
    invoice_id: int,
    request: UpdateInvoiceStatusRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Mark an invoice as paid or void it.

    - `pending -> paid`
    - `draft -> void`, `pending -> void`

    Paid and void invoices are final.
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = UpdateInvoiceStatus(
        uow, SqlAlchemyInvoiceRepository(session), SqlAlchemyInvoiceItemRepository(session)
    )
    result = await use_case.execute(
        UpdateInvoiceStatusCommandDTO(
            invoice_id=invoice_id, user_id=request.user_id, status=request.status
        )
    )

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}/totals",
    response_model=InvoiceTotalsResponseDTO,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_invoice_totals(
    invoice_id: int,
    user_id: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session),
):
    """
    Get the stored subtotal, tax and total with the per-item breakdown.

    These are the same values printed on the PDF.
    """
    use_case = GetInvoiceTotals(
        SqlAlchemyInvoiceRepository(session), SqlAlchemyInvoiceItemRepository(session)
    )
    result = await use_case.execute(invoice_id, user_id)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.post(
    "/{invoice_id}/render",
    response_model=ArtifactResponseDTO,
    responses={
        404: NOT_FOUND_RESPONSE,
        502: _error_example("Rendering failed", "RENDER_FAILED", "Failed to render invoice INV-1001"),
    },
)
async def render_invoice(
    invoice_id: int,
    request: InvoiceOwnerRequestSchema,
    session: AsyncSession = Depends(get_session),
    renderer: InvoiceRenderer = Depends(get_renderer),
):
    """(Re)render the invoice PDF and store its URL."""
    result = await _render_invoice(session, renderer).execute(invoice_id, request.user_id)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.post(
    "/{invoice_id}/send",
    response_model=SendInvoiceResponseDTO,
    responses={
        404: NOT_FOUND_RESPONSE,
        400: _error_example(
            "Invoice cannot be sent",
            "INVALID_INVOICE_STATUS",
            "Invoice cannot be sent. Current status: void",
        ),
        502: _error_example(
            "Rendering or delivery failed",
            "DELIVERY_FAILED",
            "Email provider returned status 500",
        ),
    },
)
async def send_invoice(
    invoice_id: int,
    request: SendInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
    renderer: InvoiceRenderer = Depends(get_renderer),
    mailer: Mailer = Depends(get_mailer),
    config=Depends(get_config),
):
    """
    Email the invoice to its recipient.

    The PDF is rendered first when missing; if that fails nothing is sent.
    A draft invoice becomes `pending`. Resending a pending invoice delivers
    it again without changing its status.

    **Returns:**
    - 200: Invoice sent
    - 400: Invoice is paid or void
    - 404: Invoice not found
    - 502: RENDER_FAILED or DELIVERY_FAILED (status unchanged)
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = SendInvoice(
        uow,
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceSettingsRepository(session),
        _render_invoice(session, renderer),
        mailer,
        default_business_name=config.DEFAULT_BUSINESS_NAME,
    )
    result = await use_case.execute(
        SendInvoiceCommandDTO(
            invoice_id=invoice_id, user_id=request.user_id, message=request.message
        )
    )

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}/artifact",
    response_model=ArtifactResponseDTO,
    responses={
        404: NOT_FOUND_RESPONSE,
        409: _error_example(
            "Artifact not ready", "ARTIFACT_NOT_READY", "Artifact for invoice 123 is not ready"
        ),
    },
)
async def get_invoice_artifact(
    invoice_id: int,
    user_id: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session),
    renderer: InvoiceRenderer = Depends(get_renderer),
):
    """Get the PDF URL, rendering it first if it does not exist yet."""
    use_case = DownloadInvoiceArtifact(
        SqlAlchemyInvoiceRepository(session), _render_invoice(session, renderer), renderer
    )
    result = await use_case.execute(invoice_id, user_id)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}/artifact/pdf",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF document"},
        404: NOT_FOUND_RESPONSE,
        409: _error_example(
            "Artifact not ready", "ARTIFACT_NOT_READY", "Artifact for invoice 123 is not ready"
        ),
    },
)
async def download_invoice_pdf(
    invoice_id: int,
    user_id: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session),
    renderer: InvoiceRenderer = Depends(get_renderer),
):
    """Download the invoice PDF file."""
    use_case = DownloadInvoiceArtifact(
        SqlAlchemyInvoiceRepository(session), _render_invoice(session, renderer), renderer
    )
    result = await use_case.execute_content(invoice_id, user_id)

    if result.is_err():
        raise_client_error(result.error)

    return Response(
        content=result.value.content,
        media_type="application/pdf",
        headers={"Content-Disposition": _content_disposition(result.value.filename)},
    )
