"""
Voxbone Python SDK - Models

Typed views over the API's JSON records, plus the input and output of the
allocation workflow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

from voxbone.config import Limits
from voxbone.exceptions import ValidationError
from voxbone.results import ApiResult


def _to_stock(value: Any) -> int:
    try:
        stock = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(stock, 0)


@dataclass(frozen=True)
class DidGroup:
    """A purchasable block of numbers sharing country, area and features."""
    did_group_id: Union[int, str]
    available: bool = False
    stock: int = 0
    country_code_a3: Optional[str] = None
    state_id: Optional[Union[int, str]] = None
    city_name: Optional[str] = None
    area_code: Optional[str] = None
    rate_center: Optional[str] = None
    did_type: Optional[str] = None
    features: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DidGroup":
        return cls(
            did_group_id=data.get("didGroupId"),
            available=bool(data.get("available")),
            stock=_to_stock(data.get("stock")),
            country_code_a3=data.get("countryCodeA3"),
            state_id=data.get("stateId"),
            city_name=data.get("cityName"),
            area_code=data.get("areaCode"),
            rate_center=data.get("rateCenter"),
            did_type=data.get("didType"),
            features=list(data.get("features") or []),
        )

    @property
    def feature_ids(self) -> List[int]:
        return [f["featureId"] for f in self.features if isinstance(f, dict) and "featureId" in f]

    def is_eligible(self, quantity: int) -> bool:
        """Whether ``quantity`` numbers can be ordered from this group."""
        return self.available and self.stock >= quantity


# Cart items

@dataclass(frozen=True)
class DidCartItem:
    """Order ``quantity`` numbers from a DID group."""
    body_key: ClassVar[str] = "didCartItem"

    did_group_id: Union[int, str]
    quantity: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"didGroupId": self.did_group_id, "quantity": self.quantity}


@dataclass(frozen=True)
class CapacityCartItem:
    """Order channel capacity in a zone."""
    body_key: ClassVar[str] = "capacityCartItem"

    zone: str
    quantity: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"zone": self.zone, "quantity": self.quantity}


@dataclass(frozen=True)
class CreditPackageCartItem:
    """Order a prepaid credit package."""
    body_key: ClassVar[str] = "creditPackageCartItem"

    credit_package_id: Union[int, str]
    quantity: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"creditPackageId": self.credit_package_id, "quantity": self.quantity}


CartItem = Union[DidCartItem, CapacityCartItem, CreditPackageCartItem]


@dataclass(frozen=True)
class Cart:
    """A server-side cart. Consumed by checkout; never deleted by the client."""
    cart_identifier: Union[int, str]
    customer_reference: Optional[str] = None
    description: Optional[str] = None
    date_added: Optional[str] = None
    order_products: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cart":
        return cls(
            cart_identifier=data["cartIdentifier"],
            customer_reference=data.get("customerReference"),
            description=data.get("description"),
            date_added=data.get("dateAdded"),
            order_products=list(data.get("orderProducts") or []),
        )

    @classmethod
    def from_response(cls, data: Any) -> Optional["Cart"]:
        """Extract the cart from a create/get response, None if malformed."""
        if not isinstance(data, dict):
            return None
        cart = data.get("cart")
        if not isinstance(cart, dict) or cart.get("cartIdentifier") in (None, ""):
            return None
        return cls.from_dict(cart)


@dataclass(frozen=True)
class ProductCheckout:
    """One product line of a checkout."""
    order_reference: Optional[str]
    product_type: Optional[str] = None
    status: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductCheckout":
        return cls(
            order_reference=data.get("orderReference"),
            product_type=data.get("productType"),
            status=data.get("status"),
            message=data.get("message"),
        )


@dataclass(frozen=True)
class CheckoutResult:
    """Result of checking out a cart."""
    product_checkout_list: List[ProductCheckout] = field(default_factory=list)
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "CheckoutResult":
        if not isinstance(data, dict):
            return cls()
        products = data.get("productCheckoutList")
        if not isinstance(products, list):
            products = []
        return cls(
            product_checkout_list=[
                ProductCheckout.from_dict(p) for p in products if isinstance(p, dict)
            ],
            status=data.get("status"),
        )

    @property
    def first_order_reference(self) -> Optional[str]:
        if not self.product_checkout_list:
            return None
        return self.product_checkout_list[0].order_reference


# Allocation

@dataclass(frozen=True)
class AllocationRequest:
    """
    What to allocate.

    Use :meth:`build` to apply defaults to loosely typed input.

    Attributes:
        country_code: ISO 3166-1 alpha-3 country code
        quantity: Number of DIDs wanted
        feature_ids: Feature codes the numbers must support (50 is voice)
        area_code: Optional area code of the DID group
    """
    country_code: Optional[str]
    quantity: int = 1
    feature_ids: Tuple[int, ...] = (Limits.VOICE_FEATURE_ID,)
    area_code: Optional[str] = None

    @classmethod
    def build(
        cls,
        country_code: Optional[str] = None,
        quantity: Optional[int] = None,
        feature_ids: Any = None,
        area_code: Optional[str] = None,
    ) -> "AllocationRequest":
        if not quantity:
            quantity = 1
        elif isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise ValidationError(
                "quantity must be a positive integer",
                field_errors={"quantity": repr(quantity)},
            )

        if _is_feature_list(feature_ids):
            features = tuple(feature_ids)
        elif _is_feature_set(feature_ids):
            features = tuple(sorted(feature_ids))
        else:
            features = (Limits.VOICE_FEATURE_ID,)

        return cls(
            country_code=country_code,
            quantity=quantity,
            feature_ids=features,
            area_code=area_code or None,
        )


def _is_feature_list(value: Any) -> bool:
    if not isinstance(value, (list, tuple)):
        return False
    return all(isinstance(v, int) and not isinstance(v, bool) for v in value)


def _is_feature_set(value: Any) -> bool:
    if not isinstance(value, (set, frozenset)):
        return False
    return all(isinstance(v, int) and not isinstance(v, bool) for v in value)


class AllocationStatus(str, Enum):
    """Terminal state of an allocation."""
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"
    # Checkout answered without a product list; nothing more is known
    UNCONFIRMED = "UNCONFIRMED"


class AllocationStage(str, Enum):
    """Steps of the allocation workflow, in order."""
    SEARCHING = "searching"
    SELECTING = "selecting"
    CART_CREATE = "cart_create"
    CART_ADD = "cart_add"
    CHECKOUT = "checkout"
    CONFIRM = "confirm"


@dataclass(frozen=True)
class AllocationResult:
    """
    Outcome of an allocation.

    ``payload`` is what the workflow hands back to callers: the DID listing
    for the new order on success, a ``{"status": "FAIL", "message": ...}``
    record for expected failures, or the upstream body that stopped the run.
    """
    status: AllocationStatus
    stage: AllocationStage
    payload: Any = None
    message: Optional[str] = None
    did_group_id: Optional[Union[int, str]] = None
    cart_identifier: Optional[Union[int, str]] = None
    order_reference: Optional[str] = None
    api_result: Optional[ApiResult] = None

    @property
    def succeeded(self) -> bool:
        return self.status is AllocationStatus.SUCCESS

    @property
    def dids(self) -> List[Dict[str, Any]]:
        """Allocated DID records, empty unless the allocation succeeded."""
        if not self.succeeded or not isinstance(self.payload, dict):
            return []
        dids = self.payload.get("dids")
        return dids if isinstance(dids, list) else []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "stage": self.stage.value,
            "message": self.message,
            "didGroupId": self.did_group_id,
            "cartIdentifier": self.cart_identifier,
            "orderReference": self.order_reference,
            "payload": self.payload,
        }

