"""Tests for the voxbone CLI."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from voxbone.cli import cli
from voxbone.exceptions import ConfigurationError, ValidationError
from voxbone.models import AllocationResult, AllocationStage, AllocationStatus
from voxbone.results import ApiResult

CREDENTIALS = ["--user", "u", "--password", "p", "--url", "https://api.test/rest/"]


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_client():
    """Create mock API client usable as an async context manager."""
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)

    client.allocate = AsyncMock(return_value=AllocationResult(
        status=AllocationStatus.SUCCESS,
        stage=AllocationStage.CONFIRM,
        payload={"dids": [{"didId": 9001, "e164": "+12125550101", "countryCodeA3": "USA"}]},
        did_group_id="G2",
        cart_identifier=4211,
        order_reference="7412345",
    ))
    client.inventory.list_did_groups = AsyncMock(return_value=ApiResult.success({
        "didGroups": [{"didGroupId": 7, "cityName": "NEW YORK", "stock": 5, "available": True}],
    }))
    client.inventory.list_dids = AsyncMock(return_value=ApiResult.success({"dids": []}))
    client.inventory.list_countries = AsyncMock(return_value=ApiResult.success({"countries": []}))
    client.ordering.list_orders = AsyncMock(return_value=ApiResult.success({"orders": []}))
    client.ordering.account_balance = AsyncMock(return_value=ApiResult.success({
        "accountBalance": {"balance": 42.5, "currency": "EUR"},
    }))
    client.ordering.cancel_dids = AsyncMock(return_value=ApiResult.success({"numberCancelled": 1}))
    return client


@pytest.fixture
def patched(mock_client):
    with patch("voxbone.cli.VoxboneClient", return_value=mock_client) as client_class:
        yield client_class


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "allocate" in result.output
        assert "didgroups" in result.output

    def test_credentials_passed_to_client(self, runner, patched):
        runner.invoke(cli, CREDENTIALS + ["balance"])
        patched.assert_called_once_with(user="u", password="p", url="https://api.test/rest/")


class TestAllocateCommand:
    """Tests for the allocate command."""

    def test_allocate_json(self, runner, patched, mock_client):
        result = runner.invoke(cli, CREDENTIALS + ["-o", "json", "allocate", "USA", "-q", "2",
                                                   "-f", "50", "-f", "25", "-a", "212"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "SUCCESS"
        assert data["orderReference"] == "7412345"
        mock_client.allocate.assert_awaited_once_with(
            country_code="USA", quantity=2, feature_ids=[50, 25], area_code="212"
        )

    def test_allocate_default_features(self, runner, patched, mock_client):
        result = runner.invoke(cli, CREDENTIALS + ["allocate", "USA"])

        assert result.exit_code == 0
        assert "+12125550101" in result.output
        mock_client.allocate.assert_awaited_once_with(
            country_code="USA", quantity=1, feature_ids=None, area_code=None
        )

    def test_allocate_failure_exit_code(self, runner, patched, mock_client):
        mock_client.allocate.return_value = AllocationResult(
            status=AllocationStatus.FAIL,
            stage=AllocationStage.SELECTING,
            payload={"status": "FAIL", "message": "No DID group available."},
            message="No DID group available.",
        )

        result = runner.invoke(cli, CREDENTIALS + ["allocate", "USA"])

        assert result.exit_code == 1
        assert "No DID group available." in result.output

    def test_validation_error_exit_code(self, runner, patched, mock_client):
        mock_client.allocate.side_effect = ValidationError("countryCode is missing")

        result = runner.invoke(cli, CREDENTIALS + ["allocate", ""])

        assert result.exit_code == 2
        assert "countryCode is missing" in result.output

    def test_missing_credentials(self, runner):
        with patch("voxbone.cli.VoxboneClient", side_effect=ConfigurationError("API credentials are required")):
            result = runner.invoke(cli, ["balance"])

        assert result.exit_code == 2
        assert "credentials" in result.output


class TestListingCommands:
    """Tests for the listing commands."""

    def test_didgroups_table(self, runner, patched, mock_client):
        result = runner.invoke(cli, CREDENTIALS + ["didgroups", "USA", "-f", "50", "--page-size", "50"])

        assert result.exit_code == 0
        assert "NEW YORK" in result.output
        mock_client.inventory.list_did_groups.assert_awaited_once_with(
            country_code_a3="USA",
            area_code=None,
            feature_ids=[50],
            did_type=None,
            page_number=None,
            page_size=50,
        )

    def test_dids_empty(self, runner, patched, mock_client):
        result = runner.invoke(cli, CREDENTIALS + ["dids", "-r", "7412345"])

        assert result.exit_code == 0
        assert "No data to display" in result.output
        mock_client.inventory.list_dids.assert_awaited_once_with(
            order_reference="7412345", country_code_a3=None, e164_pattern=None
        )

    def test_balance(self, runner, patched):
        result = runner.invoke(cli, CREDENTIALS + ["balance"])

        assert result.exit_code == 0
        assert "42.5" in result.output

    def test_request_failure_exit_code(self, runner, patched, mock_client):
        mock_client.ordering.list_orders.return_value = ApiResult.network_error("ConnectError: refused")

        result = runner.invoke(cli, CREDENTIALS + ["orders"])

        assert result.exit_code == 1
        assert "refused" in result.output

    def test_cancel(self, runner, patched, mock_client):
        result = runner.invoke(cli, CREDENTIALS + ["cancel", "9001", "--yes"])

        assert result.exit_code == 0
        mock_client.ordering.cancel_dids.assert_awaited_once_with([9001])
