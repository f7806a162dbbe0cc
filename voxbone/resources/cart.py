"""
Voxbone Python SDK - Cart Resource

Carts stage products before checkout turns them into an order.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from voxbone.config import Endpoints
from voxbone.exceptions import ValidationError
from voxbone.models import CapacityCartItem, CartItem, CreditPackageCartItem, DidCartItem
from voxbone.query import CartQuery
from voxbone.resources.base import BaseResource
from voxbone.results import ApiResult

_ITEM_TYPES = (DidCartItem, CapacityCartItem, CreditPackageCartItem)


class CartResource(BaseResource):
    """
    Resource for managing carts.

    Example:
        >>> result = await client.carts.create(description="trunk numbers")
        >>> cart_id = result.data["cart"]["cartIdentifier"]
        >>> await client.carts.add(cart_id, DidCartItem(did_group_id=1234, quantity=2))
        >>> await client.carts.checkout(cart_id)
    """

    async def create(
        self,
        customer_reference: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ApiResult:
        """
        Create a new, empty cart.

        Args:
            customer_reference: Free-form reference stored with the cart
            description: Cart description

        Returns:
            ApiResult whose body carries ``cart``
        """
        body: Dict[str, Any] = {}
        if customer_reference:
            body["customerReference"] = customer_reference
        if description:
            body["description"] = description

        return await self._put(Endpoints.CARTS, json=body)

    async def add(self, cart_identifier: Union[int, str], *items: CartItem) -> ApiResult:
        """
        Add products to a cart.

        Args:
            cart_identifier: The cart's identifier
            *items: At most one item of each kind

        Returns:
            ApiResult whose body ``status`` is ``SUCCESS`` when the items were added

        Raises:
            ValidationError: If the identifier is missing or an item is invalid
        """
        self._require(cart_identifier, "cartIdentifier")

        body: Dict[str, Any] = {}
        for item in items:
            if not isinstance(item, _ITEM_TYPES):
                raise ValidationError(
                    f"Unsupported cart item: {type(item).__name__}",
                    field_errors={"item": repr(item)},
                )
            if item.body_key in body:
                raise ValidationError(
                    f"Only one {item.body_key} can be added per request",
                    field_errors={item.body_key: "duplicate"},
                )
            body[item.body_key] = item.to_dict()

        path = Endpoints.CART_PRODUCT.format(cart_identifier=cart_identifier)
        return await self._post(path, json=body)

    async def get(self, cart_identifier: Union[int, str]) -> ApiResult:
        """List the items in a cart."""
        self._require(cart_identifier, "cartIdentifier")
        return await self._get(Endpoints.CART.format(cart_identifier=cart_identifier))

    async def list(self, query: Optional[CartQuery] = None, **filters: Any) -> ApiResult:
        """List open carts."""
        query = self._build_query(CartQuery, query, filters)
        return await self._get(self._listing_path(Endpoints.CARTS, query))

    async def checkout(self, cart_identifier: Union[int, str]) -> ApiResult:
        """
        Check out a cart, turning its contents into an order.

        Returns:
            ApiResult whose body carries ``productCheckoutList``
        """
        self._require(cart_identifier, "cartIdentifier")
        return await self._get(Endpoints.CART_CHECKOUT.format(cart_identifier=cart_identifier))
