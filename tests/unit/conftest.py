import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.domain.invoice import Invoice, InvoiceStatus, InvoiceType
from src.domain.invoice_item import InvoiceItem
from src.domain.invoice_settings import InvoiceSettings


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def make_invoice():
    """Factory for persisted-looking invoices (Widget x3 @ 10.00, 10% tax)"""

    def _make(**overrides):
        data = dict(
            id=1,
            user_id="user_123",
            invoice_number="INV-1001",
            status=InvoiceStatus.DRAFT,
            type=InvoiceType.PRODUCT,
            title="Widget order",
            recipient_email="buyer@example.com",
            recipient_name="Jane Buyer",
            currency="USD",
            amount=Decimal("30"),
            tax_rate=Decimal("10"),
            tax_amount=Decimal("3"),
            total_amount=Decimal("33"),
            issue_date=date(2024, 1, 1),
            due_date=date(2024, 1, 15),
            pdf_url=None,
            created_at=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
        )
        data.update(overrides)
        return Invoice(**data)

    return _make


@pytest.fixture
def sample_items():
    return [
        InvoiceItem(
            id=10,
            invoice_id=1,
            position=0,
            description="Widget",
            quantity=Decimal("3"),
            unit_price=Decimal("10"),
            amount=Decimal("30"),
            created_at=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
        )
    ]


@pytest.fixture
def sample_settings():
    return InvoiceSettings(
        id=1,
        user_id="user_123",
        business_name="Acme Sales",
        email="billing@acme.test",
        invoice_prefix="ACME-",
        next_invoice_number=1001,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
