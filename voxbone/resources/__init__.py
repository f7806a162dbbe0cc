"""
Voxbone Python SDK - Resources

Each resource groups the endpoints of one API area.
"""

from voxbone.resources.base import BaseResource
from voxbone.resources.cart import CartResource
from voxbone.resources.inventory import InventoryResource
from voxbone.resources.ordering import OrderingResource

__all__ = [
    "BaseResource",
    "CartResource",
    "InventoryResource",
    "OrderingResource",
]
