"""Unit tests for ReportLab renderer and local artifact storage"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.artifact_storage import LocalArtifactStorage
from src.adapter.services.pdf_renderer import ReportLabInvoiceRenderer, format_quantity, format_rate
from src.app.services.errors import RenderError
from src.app.services.invoice_renderer import InvoiceSnapshot


@pytest.fixture
def storage(tmp_path):
    return LocalArtifactStorage(str(tmp_path), "http://files")


@pytest.mark.asyncio
class TestReportLabInvoiceRenderer:

    async def test_render_stores_pdf(self, storage, tmp_path, make_invoice, sample_items, sample_settings):
        """
        Given: Invoice with items and settings
        When: render is called
        Then: A PDF is written under the storage dir and its URL returned
        """
        renderer = ReportLabInvoiceRenderer(storage)
        invoice = make_invoice(notes="Thanks <3")

        artifact = await renderer.render(
            InvoiceSnapshot(invoice=invoice, items=sample_items, settings=sample_settings)
        )

        assert artifact.artifact_url == "http://files/invoices/1/Invoice-INV-1001.pdf"
        stored = (tmp_path / "invoices" / "1" / "Invoice-INV-1001.pdf").read_bytes()
        assert stored.startswith(b"%PDF")
        assert await renderer.load(invoice) == stored

    async def test_render_without_settings(self, storage, make_invoice, sample_items):
        renderer = ReportLabInvoiceRenderer(storage, default_business_name="Fallback Seller")

        artifact = await renderer.render(InvoiceSnapshot(invoice=make_invoice(), items=sample_items))

        assert artifact.artifact_url.endswith(".pdf")

    async def test_storage_failure_raises_render_error(self, make_invoice, sample_items):
        failing_storage = MagicMock()
        failing_storage.save = AsyncMock(side_effect=OSError("disk full"))
        renderer = ReportLabInvoiceRenderer(failing_storage)

        with pytest.raises(RenderError) as exc_info:
            await renderer.render(InvoiceSnapshot(invoice=make_invoice(), items=sample_items))

        assert exc_info.value.reason == "disk full"

    async def test_unsafe_number_is_sanitized_in_key(self, make_invoice):
        renderer = ReportLabInvoiceRenderer(MagicMock())

        key = renderer.artifact_key(make_invoice(invoice_number="../INV 1/2"))

        assert key == "invoices/1/Invoice-.._INV_1_2.pdf"


@pytest.mark.asyncio
class TestLocalArtifactStorage:

    async def test_missing_artifact_loads_none(self, storage):
        assert await storage.load("invoices/9/missing.pdf") is None

    async def test_key_outside_directory_rejected(self, storage):
        with pytest.raises(ValueError):
            await storage.save("../escape.pdf", b"x")


class TestFormatting:

    def test_format_quantity_trims_zeros(self):
        from decimal import Decimal

        assert format_quantity(Decimal("3.000000")) == "3"
        assert format_quantity(Decimal("1.500000")) == "1.5"

    def test_format_rate(self):
        from decimal import Decimal

        assert format_rate(Decimal("10.000000")) == "10"
        assert format_rate(Decimal("7.250000")) == "7.25"
