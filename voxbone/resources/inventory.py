"""
Voxbone Python SDK - Inventory Resource

Search the numbering inventory: DID groups, DIDs and countries.
"""

from __future__ import annotations

from typing import Any, Optional

from voxbone.config import Endpoints
from voxbone.query import CountryQuery, DidGroupQuery, DidQuery
from voxbone.resources.base import BaseResource
from voxbone.results import ApiResult


class InventoryResource(BaseResource):
    """
    Resource for the inventory endpoints.

    Example:
        >>> async with VoxboneClient() as client:
        ...     groups = await client.inventory.list_did_groups(
        ...         country_code_a3="BEL", feature_ids=[50]
        ...     )
        ...     for group in groups.get("didGroups", []):
        ...         print(group["didGroupId"], group["stock"])
    """

    async def list_did_groups(self, query: Optional[DidGroupQuery] = None, **filters: Any) -> ApiResult:
        """
        List DID groups available in a country.

        Args:
            query: Filters as a DidGroupQuery
            **filters: DidGroupQuery fields, when ``query`` is not given

        Returns:
            ApiResult whose body carries ``didGroups``

        Raises:
            ValidationError: If ``country_code_a3`` is missing
        """
        query = self._build_query(DidGroupQuery, query, filters)
        self._require(query.country_code_a3, "countryCodeA3")

        path = f"{Endpoints.DID_GROUPS}?countryCodeA3={query.country_code_a3}" + self._encode(query)
        return await self._get(path)

    async def list_dids(self, query: Optional[DidQuery] = None, **filters: Any) -> ApiResult:
        """
        List DIDs, e.g. the numbers delivered for an order reference.

        Args:
            query: Filters as a DidQuery
            **filters: DidQuery fields, when ``query`` is not given

        Returns:
            ApiResult whose body carries ``dids``
        """
        query = self._build_query(DidQuery, query, filters)
        return await self._get(self._listing_path(Endpoints.DIDS, query))

    async def list_countries(self, query: Optional[CountryQuery] = None, **filters: Any) -> ApiResult:
        """List countries, optionally by country code or DID type."""
        query = self._build_query(CountryQuery, query, filters)
        return await self._get(self._listing_path(Endpoints.COUNTRIES, query))
