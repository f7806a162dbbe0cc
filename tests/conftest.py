"""Shared pytest fixtures for testing."""

import json
from typing import Any, AsyncGenerator, Dict, List, Tuple

import httpx
import pytest
import pytest_asyncio
import respx

from voxbone.client import VoxboneClient
from voxbone.config import Settings

API_HOST = "api.test.voxbone.com"
API_PATH = "/ws-voxbone/services/rest/"
BASE_URL = f"https://{API_HOST}{API_PATH}"

TEST_USER = "test_user"
TEST_PASSWORD = "test_password"


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment."""
    return Settings(
        user=TEST_USER,
        password=TEST_PASSWORD,
        url=BASE_URL,
        default_page_number=0,
        default_page_size=20,
        timeout=5.0,
    )


@pytest_asyncio.fixture
async def client(settings: Settings) -> AsyncGenerator[VoxboneClient, None]:
    """Create a test API client."""
    async with VoxboneClient(settings=settings) as client:
        yield client


@pytest.fixture
def api_mock():
    """Intercept every httpx request; unmatched requests fail the test."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


# =============================================================================
# Helpers
# =============================================================================


def route(mock: respx.MockRouter, method: str, endpoint: str) -> respx.Route:
    """Route for an endpoint path relative to the API base URL."""
    return mock.route(method=method, host=API_HOST, path=API_PATH + endpoint)


def json_response(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=data)


def sent(mock: respx.MockRouter) -> List[Tuple[str, str]]:
    """Method and endpoint of every request sent, in order."""
    return [
        (call.request.method, call.request.url.path[len(API_PATH):])
        for call in mock.calls
    ]


def body_of(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content) if request.content else {}


def raw_query(request: httpx.Request) -> str:
    return request.url.query.decode()


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def did_groups_payload() -> Dict[str, Any]:
    """Inventory answer where only the third group can supply two DIDs."""
    return {
        "didGroups": [
            {"didGroupId": 101, "available": False, "stock": 10, "countryCodeA3": "USA"},
            {"didGroupId": 102, "available": True, "stock": 1, "countryCodeA3": "USA"},
            {"didGroupId": "G2", "available": True, "stock": 5, "countryCodeA3": "USA"},
        ],
        "resultCount": 3,
    }


@pytest.fixture
def cart_payload() -> Dict[str, Any]:
    return {
        "cart": {
            "cartIdentifier": 4211,
            "customerReference": None,
            "description": None,
            "dateAdded": "2024-05-02 10:15:00",
            "orderProducts": [],
        }
    }


@pytest.fixture
def checkout_payload() -> Dict[str, Any]:
    return {
        "status": "SUCCESS",
        "productCheckoutList": [
            {"orderReference": "7412345", "productType": "DID", "status": "SUCCESS", "message": None},
        ],
    }


@pytest.fixture
def dids_payload() -> Dict[str, Any]:
    return {
        "dids": [
            {"didId": 9001, "e164": "+12125550101", "countryCodeA3": "USA", "didGroupId": "G2"},
            {"didId": 9002, "e164": "+12125550102", "countryCodeA3": "USA", "didGroupId": "G2"},
        ],
        "resultCount": 2,
    }
