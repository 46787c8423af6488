"""Order endpoints: checkout, fulfillment updates, cancellation and the vendor view."""

import json

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.api.auth import get_principal, require_roles
from marketplace.api.schemas import (
    OrderIdResponse,
    OrderPatchRequest,
    PlaceOrderRequest,
    VendorOrderRowSchema,
    VendorOrdersResponse,
)
from marketplace.errors import Forbidden
from marketplace.ordering.cancellation import CancelOrder
from marketplace.ordering.item_update import UpdateOrderItem
from marketplace.ordering.placement import PlaceOrder
from marketplace.ordering.vendor_orders import vendor_order_rows
from marketplace.shared.principal import Principal, Role

order_router = APIRouter(prefix="/orders", tags=["orders"])
vendor_order_router = APIRouter(prefix="/vendor/orders", tags=["orders"])

CANCEL_ACTION = "cancel"


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(
    body: PlaceOrderRequest, principal: Principal = Depends(require_roles(Role.USER))
) -> OrderIdResponse:
    command = PlaceOrder(
        user_id=principal.id,
        items=json.dumps([item.model_dump() for item in body.items]),
        address=body.address.model_dump_json() if body.address else None,
        total_amount=body.total_amount,
        delivery_charge=body.delivery_charge,
        coupon_code=body.coupon_code,
        discount_amount=body.discount_amount,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(message="Order placed", order_id=order_id)


@order_router.patch("/{order_id}", response_model=OrderIdResponse)
async def patch_order(
    order_id: str, body: OrderPatchRequest, principal: Principal = Depends(get_principal)
) -> OrderIdResponse:
    """Customers cancel their own orders; vendors and admins update line items."""
    if (body.action or "").strip().lower() == CANCEL_ACTION:
        if not principal.is_user:
            raise Forbidden("Only customers can cancel their orders")
        command = CancelOrder(order_id=order_id, user_id=principal.id, reason=body.reason)
        current_domain.process(command, asynchronous=False)
        return OrderIdResponse(message="Order cancelled", order_id=order_id)

    if not (principal.is_vendor or principal.is_admin):
        raise Forbidden("Forbidden")
    if not body.item_id:
        raise ValidationError({"item_id": ["Item id is required"]})

    command = UpdateOrderItem(
        order_id=order_id,
        item_id=body.item_id,
        item_type=body.item_type,
        variant_id=body.variant_id,
        status=body.status,
        delivery_date=body.delivery_date,
        clear_delivery_date=body.clear_delivery_date,
        actor_id=principal.id,
        actor_role=principal.account_type,
    )
    current_domain.process(command, asynchronous=False)
    return OrderIdResponse(message="Order updated", order_id=order_id)


@vendor_order_router.get("", response_model=VendorOrdersResponse)
async def get_vendor_orders(
    status: str | None = None,
    offset: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1),
    principal: Principal = Depends(require_roles(Role.VENDOR)),
) -> VendorOrdersResponse:
    rows = vendor_order_rows(principal.id, status=status, offset=offset, limit=limit)
    return VendorOrdersResponse(orders=[VendorOrderRowSchema(**row.to_dict()) for row in rows])
