"""Voxbone numbering provisioning SDK for Python."""

from voxbone.allocation import DidAllocator, select_did_group
from voxbone.client import VoxboneClient
from voxbone.config import Endpoints, Limits, Settings, get_settings
from voxbone.exceptions import ConfigurationError, ValidationError, VoxboneError
from voxbone.models import (
    AllocationRequest,
    AllocationResult,
    AllocationStage,
    AllocationStatus,
    CapacityCartItem,
    Cart,
    CartItem,
    CheckoutResult,
    CreditPackageCartItem,
    DidCartItem,
    DidGroup,
    ProductCheckout,
)
from voxbone.query import (
    CartQuery,
    CountryQuery,
    DidGroupQuery,
    DidQuery,
    OrderQuery,
    encode_query,
)
from voxbone.results import ApiResult, ResultKind

__version__ = "1.0.0"

__all__ = [
    # Client
    "VoxboneClient",
    "Settings",
    "get_settings",
    "Endpoints",
    "Limits",

    # Allocation
    "DidAllocator",
    "select_did_group",
    "AllocationRequest",
    "AllocationResult",
    "AllocationStage",
    "AllocationStatus",

    # Models
    "DidGroup",
    "Cart",
    "CartItem",
    "DidCartItem",
    "CapacityCartItem",
    "CreditPackageCartItem",
    "CheckoutResult",
    "ProductCheckout",

    # Queries
    "DidGroupQuery",
    "DidQuery",
    "CartQuery",
    "OrderQuery",
    "CountryQuery",
    "encode_query",

    # Results
    "ApiResult",
    "ResultKind",

    # Exceptions
    "VoxboneError",
    "ValidationError",
    "ConfigurationError",
]
