"""
Voxbone Python SDK - Base Resource

This module contains the base class for all API resources.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Dict, Any, Type, TypeVar

from voxbone.exceptions import ValidationError
from voxbone.query import PagedQuery, encode_query
from voxbone.results import ApiResult

if TYPE_CHECKING:
    from voxbone.client import VoxboneClient


Q = TypeVar("Q", bound=PagedQuery)


class BaseResource:
    """
    Base class for all API resources.

    Each public method maps to exactly one HTTP request and resolves to
    an :class:`~voxbone.results.ApiResult`.
    """

    def __init__(self, client: "VoxboneClient") -> None:
        """
        Initialize the resource.

        Args:
            client: The VoxboneClient instance
        """
        self._client = client

    async def _get(self, path: str) -> ApiResult:
        """Make a GET request."""
        return await self._client.send_request("GET", path)

    async def _post(self, path: str, json: Optional[Dict[str, Any]] = None) -> ApiResult:
        """Make a POST request."""
        return await self._client.send_request("POST", path, body=json)

    async def _put(self, path: str, json: Optional[Dict[str, Any]] = None) -> ApiResult:
        """Make a PUT request."""
        return await self._client.send_request("PUT", path, body=json)

    def _encode(self, options: PagedQuery) -> str:
        """Encode ``options`` with the client's pagination defaults."""
        settings = self._client.settings
        return encode_query(
            options,
            default_page_number=settings.default_page_number,
            default_page_size=settings.default_page_size,
        )

    def _listing_path(self, endpoint: str, options: PagedQuery) -> str:
        return f"{endpoint}?{self._encode(options)}"

    @staticmethod
    def _build_query(
        query_class: Type[Q],
        query: Optional[Q],
        filters: Dict[str, Any],
    ) -> Q:
        """Accept either an option object or its fields as keyword arguments."""
        if query is not None:
            if filters:
                raise ValidationError(
                    "Pass either a query object or keyword filters, not both",
                    field_errors={k: "unexpected" for k in filters},
                )
            return query
        try:
            return query_class(**filters)
        except TypeError as e:
            raise ValidationError(f"Invalid filter for {query_class.__name__}: {e}") from e

    @staticmethod
    def _require(value: Any, name: str) -> None:
        if not value:
            raise ValidationError(
                f"{name} is a required parameter",
                field_errors={name: "required"},
            )
