"""Voxbone Python SDK - Ordering Resource."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

from voxbone.config import Endpoints
from voxbone.exceptions import ValidationError
from voxbone.query import OrderQuery
from voxbone.resources.base import BaseResource
from voxbone.results import ApiResult


class OrderingResource(BaseResource):
    """Orders, DID cancellation and account balance."""

    async def list_orders(self, query: Optional[OrderQuery] = None, **filters: Any) -> ApiResult:
        """List orders, optionally filtered by reference."""
        query = self._build_query(OrderQuery, query, filters)
        return await self._get(self._listing_path(Endpoints.ORDERS, query))

    async def cancel_dids(self, did_ids: Sequence[Union[int, str]]) -> ApiResult:
        """
        Release DIDs back to the inventory.

        Raises:
            ValidationError: If no DID ids are given
        """
        if not did_ids:
            raise ValidationError("No DID ids provided", field_errors={"didIds": "required"})
        return await self._post(Endpoints.CANCEL, json={"didIds": list(did_ids)})

    async def account_balance(self) -> ApiResult:
        """Get the account balance."""
        return await self._get(Endpoints.ACCOUNT_BALANCE)
