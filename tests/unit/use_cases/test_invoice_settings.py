"""Unit tests for GetInvoiceSettings and UpsertInvoiceSettings use cases"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.dtos import UpsertInvoiceSettingsCommandDTO
from src.app.use_cases.invoicing.invoice_settings import GetInvoiceSettings, UpsertInvoiceSettings


@pytest.fixture
def mock_settings_repo():
    repo = MagicMock()
    repo.get_by_user_id = AsyncMock(return_value=None)
    repo.create = AsyncMock(side_effect=lambda settings: settings)
    repo.update = AsyncMock(side_effect=lambda settings: settings)
    return repo


@pytest.mark.asyncio
class TestUpsertInvoiceSettings:

    async def test_insert_uses_defaults(self, mock_uow, mock_settings_repo):
        """
        Given: Issuer has no settings
        When: settings are saved with only a business name
        Then: Prefix INV- and counter 1001 are used
        """
        use_case = UpsertInvoiceSettings(mock_uow, mock_settings_repo)

        result = await use_case.execute(
            UpsertInvoiceSettingsCommandDTO(user_id="user_123", business_name="Acme Sales")
        )

        assert result.value.invoice_prefix == "INV-"
        assert result.value.next_invoice_number == 1001
        mock_settings_repo.create.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_update_existing(self, mock_uow, mock_settings_repo, sample_settings):
        mock_settings_repo.get_by_user_id = AsyncMock(return_value=sample_settings)
        use_case = UpsertInvoiceSettings(mock_uow, mock_settings_repo)

        result = await use_case.execute(
            UpsertInvoiceSettingsCommandDTO(
                user_id="user_123", business_name="Acme Ltd", terms="Net 30", next_invoice_number=2000
            )
        )

        assert result.value.business_name == "Acme Ltd"
        assert result.value.terms == "Net 30"
        assert result.value.invoice_prefix == "ACME-"
        assert result.value.next_invoice_number == 2000
        mock_settings_repo.update.assert_called_once()

    async def test_counter_cannot_move_backwards(self, mock_uow, mock_settings_repo, sample_settings):
        mock_settings_repo.get_by_user_id = AsyncMock(return_value=sample_settings)
        use_case = UpsertInvoiceSettings(mock_uow, mock_settings_repo)

        result = await use_case.execute(
            UpsertInvoiceSettingsCommandDTO(user_id="user_123", business_name="Acme", next_invoice_number=5)
        )

        assert result.error.code == "VALIDATION_ERROR"
        assert "next_invoice_number" in result.error.details
        mock_uow.commit.assert_not_called()

    async def test_blank_business_name(self, mock_uow, mock_settings_repo):
        result = await UpsertInvoiceSettings(mock_uow, mock_settings_repo).execute(
            UpsertInvoiceSettingsCommandDTO(user_id="user_123", business_name="   ")
        )

        assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
class TestGetInvoiceSettings:

    async def test_missing_settings(self, mock_settings_repo):
        result = await GetInvoiceSettings(mock_settings_repo).execute("user_123")

        assert result.error.code == "SETTINGS_NOT_FOUND"

    async def test_existing_settings(self, mock_settings_repo, sample_settings):
        mock_settings_repo.get_by_user_id = AsyncMock(return_value=sample_settings)

        result = await GetInvoiceSettings(mock_settings_repo).execute("user_123")

        assert result.value.business_name == "Acme Sales"
