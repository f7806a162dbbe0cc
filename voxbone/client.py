"""
Voxbone Python SDK - Main Client

This module provides the VoxboneClient class, the entry point for all API
interactions and the single place where HTTP requests are sent.
"""

from __future__ import annotations

from typing import AbstractSet, Any, Dict, Optional, Sequence, Union

import httpx
import structlog

from voxbone.allocation import DidAllocator
from voxbone.config import Settings, get_settings
from voxbone.exceptions import ConfigurationError, ValidationError
from voxbone.models import AllocationRequest, AllocationResult
from voxbone.resources.cart import CartResource
from voxbone.resources.inventory import InventoryResource
from voxbone.resources.ordering import OrderingResource
from voxbone.results import ApiResult

logger = structlog.get_logger(__name__)

USER_AGENT = "voxbone-python/1.0.0"


class VoxboneClient:
    """
    Async client for the Voxbone provisioning API.

    Credentials and base URL default to the values in :class:`Settings`
    (``VOXBONE_USER``, ``VOXBONE_PASSWORD``, ``VOXBONE_URL``). Requests never
    raise on HTTP or network failures; they resolve to an
    :class:`~voxbone.results.ApiResult` whose ``kind`` says what happened.

    Args:
        user: API user name
        password: API password
        url: REST API base URL
        settings: Settings to read defaults from (default: ``get_settings()``)
        timeout: Request timeout in seconds
        transport: Optional httpx transport, mainly for testing

    Example:
        >>> async with VoxboneClient(user="me", password="secret") as client:
        ...     result = await client.allocate(country_code="BEL", quantity=2)
        ...     if result.succeeded:
        ...         for did in result.dids:
        ...             print(did["e164"])

    Attributes:
        inventory: DID group, DID and country listings
        carts: Cart management and checkout
        ordering: Orders, cancellation and account balance
    """

    def __init__(
        self,
        user: Optional[str] = None,
        password: Optional[str] = None,
        url: Optional[str] = None,
        *,
        settings: Optional[Settings] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()

        self.user = user or self.settings.user
        self.password = password or self.settings.password
        if not self.user or not self.password:
            raise ConfigurationError(
                "API credentials are required. Provide user and password or set "
                "the VOXBONE_USER and VOXBONE_PASSWORD environment variables."
            )

        url = url or self.settings.url
        self.url = url if url.endswith("/") else url + "/"
        self.timeout = timeout or self.settings.timeout

        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

        self.inventory = InventoryResource(self)
        self.carts = CartResource(self)
        self.ordering = OrderingResource(self)
        self.allocator = DidAllocator(self.inventory, self.carts)

        logger.debug("voxbone_client_initialized", url=self.url)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.url,
                auth=httpx.BasicAuth(self.user, self.password),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "User-Agent": USER_AGENT,
                },
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._http_client

    async def send_request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
    ) -> ApiResult:
        """
        Send one request to the API.

        Args:
            method: HTTP method
            path: Endpoint path relative to the base URL, query string included
            body: JSON body, omitted when None

        Returns:
            ApiResult describing the response or the network failure
        """
        client = await self._get_client()
        method = method.upper()

        kwargs: Dict[str, Any] = {}
        if body is not None:
            kwargs["json"] = body

        logger.debug("voxbone_request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.warning("voxbone_request_failed", method=method, path=path, error=str(e))
            return ApiResult.network_error(f"{type(e).__name__}: {e}")

        result = self._handle_response(response)
        logger.debug(
            "voxbone_response",
            method=method,
            path=path,
            status_code=response.status_code,
            kind=result.kind.value,
        )
        return result

    def _handle_response(self, response: httpx.Response) -> ApiResult:
        """Turn an HTTP response into an ApiResult."""
        data = self._parse_body(response)
        if response.is_success:
            return ApiResult.success(data, response.status_code)
        return ApiResult.http_error(
            data,
            response.status_code,
            error=self._error_message(data, response.status_code),
        )

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _error_message(data: Any, status_code: int) -> str:
        if isinstance(data, dict):
            if data.get("message"):
                return str(data["message"])
            errors = data.get("errors")
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                message = errors[0].get("apiErrorMessage") or errors[0].get("message")
                if message:
                    return f"HTTP {status_code}: {message}"
        elif isinstance(data, str) and data:
            return f"HTTP {status_code}: {data[:200]}"
        return f"HTTP {status_code}"

    async def allocate(
        self,
        request: Optional[AllocationRequest] = None,
        *,
        country_code: Optional[str] = None,
        quantity: Optional[int] = None,
        feature_ids: Optional[Union[Sequence[int], AbstractSet[int]]] = None,
        area_code: Optional[str] = None,
    ) -> AllocationResult:
        """
        Search, reserve and order DIDs in one call.

        Args:
            request: A prepared AllocationRequest; cannot be combined
                with keyword arguments
            country_code: ISO 3166-1 alpha-3 country code (required)
            quantity: Number of DIDs (default 1)
            feature_ids: Required features (default voice, ``[50]``)
            area_code: Area code of the DID group

        Returns:
            AllocationResult

        Raises:
            ValidationError: If the country code is missing, or if both a
                request and keyword arguments are given
        """
        if request is not None:
            given = {
                name: value
                for name, value in (
                    ("country_code", country_code),
                    ("quantity", quantity),
                    ("feature_ids", feature_ids),
                    ("area_code", area_code),
                )
                if value is not None
            }
            if given:
                raise ValidationError(
                    "Pass either an AllocationRequest or keyword arguments, not both",
                    field_errors={k: "unexpected" for k in given},
                )
        else:
            request = AllocationRequest.build(
                country_code=country_code,
                quantity=quantity,
                feature_ids=feature_ids,
                area_code=area_code,
            )
        return await self.allocator.allocate(request)

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("voxbone_client_closed")

    async def __aenter__(self) -> "VoxboneClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def __repr__(self) -> str:
        return f"VoxboneClient(url='{self.url}')"
