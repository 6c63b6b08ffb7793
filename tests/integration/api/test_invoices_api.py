"""Integration tests for Invoice API endpoints"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from src.depends import get_renderer
from tests.integration.fakes import FailingRenderer

WIDGET_PAYLOAD = {
    "user_id": "user_api_1",
    "recipient_email": "buyer@example.com",
    "recipient_name": "Jane Buyer",
    "title": "Widget order",
    "type": "product",
    "items": [{"description": "Widget", "quantity": "3", "unit_price": "10.00"}],
    "tax_rate": "10",
    "render": False,
}


async def _create(client: AsyncClient, **overrides) -> dict:
    payload = {**WIDGET_PAYLOAD, **overrides}
    response = await client.post("/invoices", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateInvoiceAPI:

    @pytest.mark.asyncio
    async def test_create_invoice_success(self, client: AsyncClient):
        """POST /invoices with a valid request returns 201 and the draft"""
        # Act
        data = await _create(client)

        # Assert
        assert data["status"] == "draft"
        assert Decimal(data["amount"]) == Decimal("30")
        assert Decimal(data["tax_amount"]) == Decimal("3")
        assert Decimal(data["total_amount"]) == Decimal("33")
        assert data["items"][0]["description"] == "Widget"
        assert data["pdf_url"] is None

    @pytest.mark.asyncio
    async def test_create_invoice_validation_error(self, client: AsyncClient):
        """Missing email and item description come back together"""
        payload = {
            **WIDGET_PAYLOAD,
            "recipient_email": None,
            "items": [{"description": "", "quantity": "1", "unit_price": "5"}],
        }

        response = await client.post("/invoices", json=payload)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "recipient_email" in error["details"]
        assert "items.0.description" in error["details"]

        listing = await client.get("/invoices", params={"user_id": "user_api_1"})
        assert listing.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_create_with_unknown_listing(self, client: AsyncClient):
        response = await client.post("/invoices", json={**WIDGET_PAYLOAD, "listing_id": 404})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LISTING_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_malformed_request_is_422(self, client: AsyncClient):
        response = await client.post("/invoices", json={"recipient_email": "x@example.com"})

        assert response.status_code == 422


class TestInvoiceReadAPI:

    @pytest.mark.asyncio
    async def test_get_invoice_scoped_to_owner(self, client: AsyncClient):
        created = await _create(client)

        own = await client.get(f"/invoices/{created['invoice_id']}", params={"user_id": "user_api_1"})
        other = await client.get(f"/invoices/{created['invoice_id']}", params={"user_id": "intruder"})

        assert own.status_code == 200
        assert own.json()["invoice_number"] == created["invoice_number"]
        assert other.status_code == 404
        assert other.json()["error"]["code"] == "INVOICE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_totals(self, client: AsyncClient):
        created = await _create(client)

        response = await client.get(
            f"/invoices/{created['invoice_id']}/totals", params={"user_id": "user_api_1"}
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["subtotal"]) == Decimal("30")
        assert Decimal(data["total"]) == Decimal("33")
        assert data["currency"] == "USD"

    @pytest.mark.asyncio
    async def test_list_with_search_and_status(self, client: AsyncClient):
        await _create(client, title="Garden service")
        await _create(client, title="Widget order")
        await _create(client, user_id="user_api_2")

        response = await client.get(
            "/invoices", params={"user_id": "user_api_1", "search": "garden", "status": "draft"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["invoices"][0]["title"] == "Garden service"

    @pytest.mark.asyncio
    async def test_list_pagination(self, client: AsyncClient):
        for _ in range(3):
            await _create(client)

        response = await client.get(
            "/invoices", params={"user_id": "user_api_1", "page": 2, "page_size": 2}
        )

        data = response.json()
        assert data["total"] == 3
        assert data["total_pages"] == 2
        assert len(data["invoices"]) == 1


class TestInvoiceLifecycleAPI:

    @pytest.mark.asyncio
    async def test_render_send_and_pay(self, client: AsyncClient, mailer):
        """draft -> (render) -> send -> pending -> paid"""
        created = await _create(client)
        invoice_id = created["invoice_id"]

        render = await client.post(f"/invoices/{invoice_id}/render", json={"user_id": "user_api_1"})
        assert render.status_code == 200
        assert render.json()["pdf_url"].endswith(".pdf")

        send = await client.post(
            f"/invoices/{invoice_id}/send", json={"user_id": "user_api_1", "message": "Thanks!"}
        )
        assert send.status_code == 200
        assert send.json()["status"] == "pending"
        assert mailer.sent[0]["subject"] == f"Invoice #{created['invoice_number']} from Marketplace Seller"

        paid = await client.post(
            f"/invoices/{invoice_id}/status", json={"user_id": "user_api_1", "status": "paid"}
        )
        assert paid.status_code == 200
        assert paid.json()["status"] == "paid"

        resend = await client.post(f"/invoices/{invoice_id}/send", json={"user_id": "user_api_1"})
        assert resend.status_code == 400
        assert resend.json()["error"]["code"] == "INVALID_INVOICE_STATUS"

    @pytest.mark.asyncio
    async def test_invalid_status_transition(self, client: AsyncClient):
        created = await _create(client)

        response = await client.post(
            f"/invoices/{created['invoice_id']}/status", json={"user_id": "user_api_1", "status": "paid"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    @pytest.mark.asyncio
    async def test_download_pdf_renders_lazily(self, client: AsyncClient):
        created = await _create(client)

        response = await client.get(
            f"/invoices/{created['invoice_id']}/artifact/pdf", params={"user_id": "user_api_1"}
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        disposition = response.headers["content-disposition"]
        assert disposition == f'attachment; filename="Invoice-{created["invoice_number"]}.pdf"'
        assert response.content.startswith(b"%PDF")

        artifact = await client.get(
            f"/invoices/{created['invoice_id']}/artifact", params={"user_id": "user_api_1"}
        )
        assert artifact.json()["pdf_url"].endswith(".pdf")

    @pytest.mark.asyncio
    async def test_send_with_failing_renderer_is_502(self, app, client: AsyncClient, mailer):
        created = await _create(client)
        app.dependency_overrides[get_renderer] = lambda: FailingRenderer()

        response = await client.post(
            f"/invoices/{created['invoice_id']}/send", json={"user_id": "user_api_1"}
        )

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "RENDER_FAILED"
        assert mailer.sent == []

        invoice = await client.get(f"/invoices/{created['invoice_id']}", params={"user_id": "user_api_1"})
        assert invoice.json()["status"] == "draft"

    @pytest.mark.asyncio
    async def test_artifact_not_ready_is_409(self, app, client: AsyncClient):
        created = await _create(client)
        app.dependency_overrides[get_renderer] = lambda: FailingRenderer()

        response = await client.get(
            f"/invoices/{created['invoice_id']}/artifact", params={"user_id": "user_api_1"}
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ARTIFACT_NOT_READY"

    @pytest.mark.asyncio
    async def test_patch_draft_then_issued(self, client: AsyncClient):
        created = await _create(client)
        invoice_id = created["invoice_id"]

        patched = await client.patch(
            f"/invoices/{invoice_id}",
            json={"user_id": "user_api_1", "tax_rate": "0", "notes": "Net 14"},
        )
        assert patched.status_code == 200
        assert Decimal(patched.json()["total_amount"]) == Decimal("30")

        await client.post(f"/invoices/{invoice_id}/render", json={"user_id": "user_api_1"})

        locked = await client.patch(f"/invoices/{invoice_id}", json={"user_id": "user_api_1", "title": "New"})
        assert locked.status_code == 400
        assert locked.json()["error"]["code"] == "INVOICE_ISSUED"

        notes = await client.patch(f"/invoices/{invoice_id}", json={"user_id": "user_api_1", "notes": "Updated"})
        assert notes.status_code == 200
        assert notes.json()["notes"] == "Updated"


class TestInvoiceSettingsAPI:

    @pytest.mark.asyncio
    async def test_settings_drive_numbering(self, client: AsyncClient, mailer):
        missing = await client.get("/invoice-settings/user_api_1")
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "SETTINGS_NOT_FOUND"

        saved = await client.put(
            "/invoice-settings/user_api_1",
            json={"business_name": "Acme Sales", "terms": "Net 14"},
        )
        assert saved.status_code == 200
        assert saved.json()["invoice_prefix"] == "INV-"
        assert saved.json()["next_invoice_number"] == 1001

        created = await _create(client)
        assert created["invoice_number"] == "INV-1001"

        await client.post(f"/invoices/{created['invoice_id']}/send", json={"user_id": "user_api_1"})
        assert mailer.sent[0]["subject"] == "Invoice #INV-1001 from Acme Sales"

        settings = await client.get("/invoice-settings/user_api_1")
        assert settings.json()["next_invoice_number"] == 1002

    @pytest.mark.asyncio
    async def test_download_filename_with_unsafe_prefix_is_encoded(self, client: AsyncClient):
        await client.put(
            "/invoice-settings/user_api_1",
            json={"business_name": "Acme Sales", "invoice_prefix": "ACME 24;"},
        )
        created = await _create(client)
        assert created["invoice_number"] == "ACME 24;1001"

        response = await client.get(
            f"/invoices/{created['invoice_id']}/artifact/pdf", params={"user_id": "user_api_1"}
        )

        assert response.status_code == 200
        assert (
            response.headers["content-disposition"]
            == "attachment; filename*=utf-8''Invoice-ACME%2024%3B1001.pdf"
        )
