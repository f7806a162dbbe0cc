"""
DID allocation workflow.

Turns "N numbers of type X in country Y" into a completed order:

    SEARCHING    list DID groups matching the request
    SELECTING    first group (in API order) that is available with enough stock
    CART_CREATE  create an empty cart
    CART_ADD     add a DID item for the selected group
    CHECKOUT     check the cart out
    CONFIRM      list the DIDs of the resulting order

Each step awaits the previous one. A failed step ends the run and becomes
the result. Nothing is retried and a cart left behind by a later failure is
not cleaned up.
"""

from __future__ import annotations

from typing import Any, Optional, Union

import structlog

from voxbone.exceptions import ValidationError
from voxbone.models import (
    AllocationRequest,
    AllocationResult,
    AllocationStage,
    AllocationStatus,
    Cart,
    CheckoutResult,
    DidCartItem,
    DidGroup,
)
from voxbone.query import DidGroupQuery, DidQuery
from voxbone.resources.cart import CartResource
from voxbone.resources.inventory import InventoryResource
from voxbone.results import ApiResult

logger = structlog.get_logger(__name__)

NO_DID_GROUP_FOUND = "No DID Group found."
NO_DID_GROUP_AVAILABLE = "No DID group available."


class DidAllocator:
    """
    Runs the allocation workflow against an inventory and a cart resource.

    Holds no state between runs, so one allocator can serve concurrent
    allocations.
    """

    def __init__(self, inventory: InventoryResource, carts: CartResource) -> None:
        self._inventory = inventory
        self._carts = carts

    async def allocate(self, request: AllocationRequest) -> AllocationResult:
        """
        Allocate DIDs.

        Args:
            request: What to allocate

        Returns:
            AllocationResult; ``payload`` holds the DID listing on success

        Raises:
            ValidationError: If the country code is missing. Raised before
                any request is sent.
        """
        if not request.country_code:
            raise ValidationError(
                "countryCode is missing",
                field_errors={"countryCode": "required"},
            )

        log = logger.bind(
            country_code=request.country_code,
            quantity=request.quantity,
            feature_ids=list(request.feature_ids),
        )

        # SEARCHING
        stage = AllocationStage.SEARCHING
        log.debug("allocation_stage", stage=stage.value)
        groups = await self._inventory.list_did_groups(
            DidGroupQuery(
                country_code_a3=request.country_code,
                feature_ids=request.feature_ids,
                area_code=request.area_code,
            )
        )
        if groups.failed:
            return self._forward(log, stage, groups)
        did_groups = groups.get("didGroups")
        if not isinstance(did_groups, list):
            return self._fail(log, stage, NO_DID_GROUP_FOUND, api_result=groups)

        # SELECTING
        stage = AllocationStage.SELECTING
        group = select_did_group(did_groups, request.quantity)
        if group is None or group.did_group_id in (None, ""):
            return self._fail(log, stage, NO_DID_GROUP_AVAILABLE, api_result=groups)
        log = log.bind(did_group_id=group.did_group_id)
        log.debug("allocation_stage", stage=stage.value)

        # CART_CREATE
        stage = AllocationStage.CART_CREATE
        created = await self._carts.create()
        cart = Cart.from_response(created.data) if created.ok else None
        if cart is None:
            return self._forward(log, stage, created, did_group_id=group.did_group_id)
        log = log.bind(cart_identifier=cart.cart_identifier)
        log.debug("allocation_stage", stage=stage.value)

        # CART_ADD
        stage = AllocationStage.CART_ADD
        added = await self._carts.add(
            cart.cart_identifier,
            DidCartItem(did_group_id=group.did_group_id, quantity=request.quantity),
        )
        if added.failed or added.status != "SUCCESS":
            return self._forward(
                log, stage, added,
                did_group_id=group.did_group_id,
                cart_identifier=cart.cart_identifier,
            )
        log.debug("allocation_stage", stage=stage.value)

        # CHECKOUT
        stage = AllocationStage.CHECKOUT
        checked_out = await self._carts.checkout(cart.cart_identifier)
        if checked_out.failed:
            return self._forward(
                log, stage, checked_out,
                did_group_id=group.did_group_id,
                cart_identifier=cart.cart_identifier,
            )
        order_reference = CheckoutResult.from_dict(checked_out.data).first_order_reference
        if not order_reference:
            log.warning("allocation_unconfirmed", stage=stage.value)
            return AllocationResult(
                status=AllocationStatus.UNCONFIRMED,
                stage=stage,
                payload=checked_out.data,
                did_group_id=group.did_group_id,
                cart_identifier=cart.cart_identifier,
                api_result=checked_out,
            )
        log = log.bind(order_reference=order_reference)

        # CONFIRM
        stage = AllocationStage.CONFIRM
        dids = await self._inventory.list_dids(DidQuery(order_reference=order_reference))
        if dids.failed:
            return self._forward(
                log, stage, dids,
                did_group_id=group.did_group_id,
                cart_identifier=cart.cart_identifier,
                order_reference=order_reference,
            )

        log.info("allocation_succeeded")
        return AllocationResult(
            status=AllocationStatus.SUCCESS,
            stage=stage,
            payload=dids.data,
            did_group_id=group.did_group_id,
            cart_identifier=cart.cart_identifier,
            order_reference=order_reference,
            api_result=dids,
        )

    @staticmethod
    def _fail(
        log: Any,
        stage: AllocationStage,
        message: str,
        api_result: Optional[ApiResult] = None,
    ) -> AllocationResult:
        log.warning("allocation_failed", stage=stage.value, reason=message)
        return AllocationResult(
            status=AllocationStatus.FAIL,
            stage=stage,
            payload={"status": AllocationStatus.FAIL.value, "message": message},
            message=message,
            api_result=api_result,
        )

    @staticmethod
    def _forward(
        log: Any,
        stage: AllocationStage,
        api_result: ApiResult,
        did_group_id: Optional[Union[int, str]] = None,
        cart_identifier: Optional[Union[int, str]] = None,
        order_reference: Optional[str] = None,
    ) -> AllocationResult:
        """End the run with the upstream response as the result."""
        log.warning(
            "allocation_failed",
            stage=stage.value,
            kind=api_result.kind.value,
            status_code=api_result.status_code,
            error=api_result.error,
        )
        return AllocationResult(
            status=AllocationStatus.FAIL,
            stage=stage,
            payload=api_result.payload,
            message=api_result.error,
            did_group_id=did_group_id,
            cart_identifier=cart_identifier,
            order_reference=order_reference,
            api_result=api_result,
        )


def select_did_group(records: list, quantity: int) -> Optional[DidGroup]:
    """First record, in the given order, that can supply ``quantity`` DIDs."""
    for record in records:
        if not isinstance(record, dict):
            continue
        group = DidGroup.from_dict(record)
        if group.is_eligible(quantity):
            return group
    return None
