"""Unit tests for the request client."""

import base64

import httpx
import pytest

from voxbone.client import VoxboneClient
from voxbone.config import Settings
from voxbone.exceptions import ConfigurationError
from voxbone.results import ApiResult, ResultKind

from tests.conftest import BASE_URL, TEST_PASSWORD, TEST_USER, body_of, json_response, route


class TestClientConfiguration:
    """Tests for client construction."""

    def test_credentials_fall_back_to_settings(self, settings):
        """Test omitted values come from the settings."""
        client = VoxboneClient(settings=settings)

        assert client.user == TEST_USER
        assert client.password == TEST_PASSWORD
        assert client.url == BASE_URL
        assert client.timeout == 5.0

    def test_explicit_values_win(self, settings):
        """Test constructor arguments override the settings."""
        client = VoxboneClient("other", "secret", "https://sandbox.example.com/rest", settings=settings)

        assert client.user == "other"
        assert client.password == "secret"
        assert client.url == "https://sandbox.example.com/rest/"

    def test_missing_credentials(self):
        """Test a client without credentials cannot be created."""
        settings = Settings(user="", password="", url=BASE_URL)

        with pytest.raises(ConfigurationError):
            VoxboneClient(settings=settings)

    def test_clients_do_not_share_settings(self, settings):
        """Test each client keeps the settings it was built with."""
        first = VoxboneClient(settings=settings)
        second = VoxboneClient(settings=Settings(user="u", password="p", url=BASE_URL, default_page_size=100))

        assert first.settings.default_page_size == 20
        assert second.settings.default_page_size == 100

    def test_repr(self, settings):
        assert repr(VoxboneClient(settings=settings)) == f"VoxboneClient(url='{BASE_URL}')"


class TestSendRequest:
    """Tests for VoxboneClient.send_request."""

    @pytest.mark.asyncio
    async def test_success(self, client, api_mock):
        """Test a 2xx response becomes an OK result."""
        route(api_mock, "GET", "ordering/accountbalance").mock(
            return_value=json_response({"accountBalance": {"balance": 12.5, "currency": "EUR"}})
        )

        result = await client.send_request("get", "ordering/accountbalance")

        assert result.kind is ResultKind.OK
        assert result.ok
        assert result.status_code == 200
        assert result.data["accountBalance"]["balance"] == 12.5

    @pytest.mark.asyncio
    async def test_basic_auth_and_headers(self, client, api_mock):
        """Test credentials are sent with basic auth and JSON headers."""
        r = route(api_mock, "GET", "ordering/accountbalance").mock(return_value=json_response({}))

        await client.send_request("GET", "ordering/accountbalance")

        request = r.calls.last.request
        expected = base64.b64encode(f"{TEST_USER}:{TEST_PASSWORD}".encode()).decode()
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"].startswith("voxbone-python/")

    @pytest.mark.asyncio
    async def test_body_only_when_given(self, client, api_mock):
        """Test a JSON body is sent only when one is passed."""
        r = route(api_mock, "PUT", "ordering/cart").mock(return_value=json_response({}))

        await client.send_request("PUT", "ordering/cart", body={"description": "numbers"})
        assert body_of(r.calls.last.request) == {"description": "numbers"}

        await client.send_request("PUT", "ordering/cart")
        assert r.calls.last.request.content == b""

    @pytest.mark.asyncio
    async def test_error_response_is_returned(self, client, api_mock):
        """Test an error response is returned with its body, not raised."""
        error_body = {
            "status": "FAIL",
            "errors": [{"apiErrorCode": 1001, "apiErrorMessage": "Unknown cart"}],
        }
        route(api_mock, "GET", "ordering/cart/99/checkout").mock(
            return_value=json_response(error_body, status_code=400)
        )

        result = await client.send_request("GET", "ordering/cart/99/checkout")

        assert result.kind is ResultKind.HTTP_ERROR
        assert result.failed
        assert result.status_code == 400
        assert result.data == error_body
        assert result.payload == error_body
        assert result.status == "FAIL"
        assert result.error == "HTTP 400: Unknown cart"

    @pytest.mark.asyncio
    async def test_non_json_error_body(self, client, api_mock):
        """Test a plain text error body is kept as text."""
        route(api_mock, "GET", "ordering/accountbalance").mock(
            return_value=httpx.Response(503, text="Service Unavailable")
        )

        result = await client.send_request("GET", "ordering/accountbalance")

        assert result.kind is ResultKind.HTTP_ERROR
        assert result.data == "Service Unavailable"
        assert result.error == "HTTP 503: Service Unavailable"

    @pytest.mark.asyncio
    async def test_empty_body(self, client, api_mock):
        """Test an empty successful body parses as an empty mapping."""
        route(api_mock, "POST", "ordering/cancel").mock(return_value=httpx.Response(200))

        result = await client.send_request("POST", "ordering/cancel", body={"didIds": [1]})

        assert result.ok
        assert result.data == {}

    @pytest.mark.asyncio
    async def test_network_error_is_returned(self, client, api_mock):
        """Test a network failure becomes a NETWORK_ERROR result."""
        route(api_mock, "GET", "ordering/accountbalance").mock(side_effect=httpx.ConnectError)

        result = await client.send_request("GET", "ordering/accountbalance")

        assert result.kind is ResultKind.NETWORK_ERROR
        assert result.status_code is None
        assert result.data is None
        assert result.error.startswith("ConnectError")
        assert result.payload == {"status": "FAIL", "message": result.error}

    @pytest.mark.asyncio
    async def test_close(self, settings, api_mock):
        """Test closing releases the HTTP client."""
        route(api_mock, "GET", "ordering/accountbalance").mock(return_value=json_response({}))
        client = VoxboneClient(settings=settings)

        await client.send_request("GET", "ordering/accountbalance")
        assert client._http_client is not None

        await client.close()
        assert client._http_client is None


class TestApiResult:
    """Tests for ApiResult helpers."""

    def test_get_on_non_mapping(self):
        result = ApiResult.success(["a", "b"])

        assert result.get("didGroups") is None
        assert result.status is None

    def test_to_dict(self):
        result = ApiResult.http_error({"status": "FAIL"}, 404)

        assert result.to_dict() == {
            "kind": "http_error",
            "data": {"status": "FAIL"},
            "status_code": 404,
            "error": "HTTP 404",
        }
