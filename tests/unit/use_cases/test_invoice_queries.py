"""Unit tests for GetInvoice, GetInvoiceTotals and ListInvoices use cases"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.dtos import ListInvoicesQueryDTO
from src.app.use_cases.invoicing.get_invoice import GetInvoice
from src.app.use_cases.invoicing.get_invoice_totals import GetInvoiceTotals
from src.app.use_cases.invoicing.list_invoices import ListInvoices, issued_from_for_range
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def mock_invoice_repo():
    return MagicMock()


@pytest.fixture
def mock_item_repo(sample_items):
    repo = MagicMock()
    repo.get_by_invoice_id = AsyncMock(return_value=sample_items)
    return repo


@pytest.mark.asyncio
class TestGetInvoiceTotals:

    async def test_returns_stored_values(self, mock_invoice_repo, mock_item_repo, make_invoice):
        """
        Given: Stored totals that differ from a recomputation of the items
        When: totals are requested
        Then: The stored values are returned unchanged
        """
        # Arrange
        invoice = make_invoice(amount=Decimal("30"), tax_amount=Decimal("3"), total_amount=Decimal("33"))
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=invoice)
        mock_item_repo.get_by_invoice_id.return_value[0].amount = Decimal("31")

        # Act
        result = await GetInvoiceTotals(mock_invoice_repo, mock_item_repo).execute(1, "user_123")

        # Assert
        totals = result.value
        assert totals.subtotal == Decimal("30")
        assert totals.tax_amount == Decimal("3")
        assert totals.total == Decimal("33")
        assert totals.currency == "USD"
        assert len(totals.items) == 1

    async def test_not_found(self, mock_invoice_repo, mock_item_repo):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=None)

        result = await GetInvoiceTotals(mock_invoice_repo, mock_item_repo).execute(1, "user_123")

        assert result.error.code == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
class TestGetInvoice:

    async def test_returns_invoice_with_items(self, mock_invoice_repo, mock_item_repo, make_invoice):
        mock_invoice_repo.get_for_owner = AsyncMock(return_value=make_invoice())

        result = await GetInvoice(mock_invoice_repo, mock_item_repo).execute(1, "user_123")

        assert result.value.invoice_number == "INV-1001"
        assert result.value.items[0].description == "Widget"

    async def test_repository_error(self, mock_invoice_repo, mock_item_repo):
        mock_invoice_repo.get_for_owner = AsyncMock(side_effect=Exception("db down"))

        result = await GetInvoice(mock_invoice_repo, mock_item_repo).execute(1, "user_123")

        assert result.error.code == "GET_INVOICE_FAILED"


@pytest.mark.asyncio
class TestListInvoices:

    async def test_filters_and_pagination(self, mock_invoice_repo, make_invoice):
        """
        Given: 25 matching invoices
        When: page 2 of size 10 is requested with filters
        Then: Repository gets limit/offset and filters; total_pages is 3
        """
        # Arrange
        mock_invoice_repo.list_by_user = AsyncMock(return_value=([make_invoice()], 25))
        query = ListInvoicesQueryDTO(
            user_id="user_123",
            status=InvoiceStatus.PENDING,
            search="  widget ",
            sort_by="total_amount",
            sort_order="asc",
            page=2,
            page_size=10,
        )

        # Act
        result = await ListInvoices(mock_invoice_repo).execute(query)

        # Assert
        assert result.value.total == 25
        assert result.value.total_pages == 3
        assert result.value.invoices[0].invoice_number == "INV-1001"
        kwargs = mock_invoice_repo.list_by_user.call_args.kwargs
        assert kwargs["status"] == InvoiceStatus.PENDING
        assert kwargs["search"] == "widget"
        assert kwargs["sort_by"] == "total_amount"
        assert kwargs["descending"] is False
        assert kwargs["limit"] == 10
        assert kwargs["offset"] == 10
        assert kwargs["issued_from"] is None

    async def test_empty_result(self, mock_invoice_repo):
        mock_invoice_repo.list_by_user = AsyncMock(return_value=([], 0))

        result = await ListInvoices(mock_invoice_repo).execute(ListInvoicesQueryDTO(user_id="user_123"))

        assert result.value.invoices == []
        assert result.value.total_pages == 0


class TestDateRanges:

    @pytest.mark.parametrize(
        "date_range,expected",
        [
            ("last30", date(2024, 5, 16)),
            ("last90", date(2024, 3, 17)),
            ("this_year", date(2024, 1, 1)),
            ("all", None),
        ],
    )
    def test_issued_from_for_range(self, date_range, expected):
        assert issued_from_for_range(date_range, today=date(2024, 6, 15)) == expected
