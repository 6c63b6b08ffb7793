"""Unit tests for RenderInvoice and DownloadInvoiceArtifact use cases"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.errors import RenderError
from src.app.services.invoice_renderer import RenderedArtifact
from src.app.use_cases.invoicing.download_artifact import DownloadInvoiceArtifact
from src.app.use_cases.invoicing.render_invoice import RenderInvoice

PDF_URL = "http://files/invoices/1/Invoice-INV-1001.pdf"


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    repo.get_by_id = AsyncMock()
    return repo


@pytest.fixture
def mock_item_repo(sample_items):
    repo = MagicMock()
    repo.get_by_invoice_id = AsyncMock(return_value=sample_items)
    return repo


@pytest.fixture
def mock_settings_repo(sample_settings):
    repo = MagicMock()
    repo.get_by_user_id = AsyncMock(return_value=sample_settings)
    return repo


@pytest.fixture
def mock_renderer():
    renderer = MagicMock()
    renderer.render = AsyncMock(return_value=RenderedArtifact(artifact_url=PDF_URL))
    renderer.load = AsyncMock(return_value=b"%PDF-1.4 test")
    return renderer


@pytest.fixture
def render_use_case(mock_uow, mock_invoice_repo, mock_item_repo, mock_settings_repo, mock_renderer):
    return RenderInvoice(mock_uow, mock_invoice_repo, mock_item_repo, mock_settings_repo, mock_renderer)


@pytest.mark.asyncio
class TestRenderInvoice:

    async def test_render_records_pdf_url(
        self, render_use_case, mock_invoice_repo, mock_renderer, mock_uow, make_invoice, sample_items, sample_settings
    ):
        """
        Given: Invoice without artifact
        When: render is executed
        Then: Renderer gets invoice, items and settings; pdf_url is saved
        """
        # Arrange
        invoice = make_invoice()
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=invoice)

        # Act
        result = await render_use_case.execute(1, "user_123")

        # Assert
        assert result.is_ok()
        assert result.value.pdf_url == PDF_URL
        snapshot = mock_renderer.render.call_args.args[0]
        assert snapshot.invoice is invoice
        assert snapshot.items == sample_items
        assert snapshot.settings is sample_settings
        mock_invoice_repo.update.assert_called_once_with(invoice)
        mock_uow.commit.assert_called_once()

    async def test_render_failure_leaves_invoice_untouched(
        self, render_use_case, mock_invoice_repo, mock_renderer, mock_uow, make_invoice
    ):
        invoice = make_invoice()
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=invoice)
        mock_renderer.render = AsyncMock(side_effect=RenderError("Failed to render", reason="boom"))

        result = await render_use_case.execute(1, "user_123")

        assert result.error.code == "RENDER_FAILED"
        assert invoice.pdf_url is None
        mock_invoice_repo.update.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_record_failure_becomes_render_error(
        self, render_use_case, mock_invoice_repo, mock_uow, make_invoice
    ):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())
        mock_invoice_repo.update = AsyncMock(side_effect=Exception("db down"))

        result = await render_use_case.execute(1, "user_123")

        assert result.error.code == "RENDER_FAILED"
        mock_uow.rollback.assert_called_once()

    async def test_not_found_for_other_owner(self, render_use_case, mock_invoice_repo, mock_renderer):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=None)

        result = await render_use_case.execute(1, "someone_else")

        assert result.error.code == "INVOICE_NOT_FOUND"
        mock_renderer.render.assert_not_called()


@pytest.mark.asyncio
class TestDownloadInvoiceArtifact:

    @pytest.fixture
    def download_use_case(self, mock_invoice_repo, render_use_case, mock_renderer):
        return DownloadInvoiceArtifact(mock_invoice_repo, render_use_case, mock_renderer)

    async def test_existing_artifact_returned_without_render(
        self, download_use_case, mock_invoice_repo, mock_renderer, make_invoice
    ):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice(pdf_url=PDF_URL))

        result = await download_use_case.execute(1, "user_123")

        assert result.value.pdf_url == PDF_URL
        mock_renderer.render.assert_not_called()

    async def test_missing_artifact_rendered_lazily(
        self, download_use_case, mock_invoice_repo, mock_renderer, make_invoice
    ):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())

        result = await download_use_case.execute(1, "user_123")

        assert result.value.pdf_url == PDF_URL
        mock_renderer.render.assert_called_once()

    async def test_render_failure_is_not_ready(
        self, download_use_case, mock_invoice_repo, mock_renderer, make_invoice
    ):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())
        mock_renderer.render = AsyncMock(side_effect=RenderError("Failed to render"))

        result = await download_use_case.execute(1, "user_123")

        assert result.error.code == "ARTIFACT_NOT_READY"

    async def test_content_returns_bytes_and_filename(
        self, download_use_case, mock_invoice_repo, make_invoice
    ):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice(pdf_url=PDF_URL))

        result = await download_use_case.execute_content(1, "user_123")

        assert result.value.content.startswith(b"%PDF")
        assert result.value.filename == "Invoice-INV-1001.pdf"

    async def test_content_rerendered_when_file_missing(
        self, download_use_case, mock_invoice_repo, mock_renderer, make_invoice
    ):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice(pdf_url=PDF_URL))
        mock_renderer.load = AsyncMock(side_effect=[None, b"%PDF-1.4 fresh"])

        result = await download_use_case.execute_content(1, "user_123")

        assert result.value.content == b"%PDF-1.4 fresh"
        mock_renderer.render.assert_called_once()
