"""Fulfillment updates on a single order line, by its vendor or an admin."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Identifier, String
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.errors import Forbidden
from marketplace.ordering.order import ItemType, Order
from marketplace.shared.principal import Role

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class UpdateOrderItem:
    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    item_type = String(required=True, choices=ItemType)
    variant_id = Identifier()
    status = String(max_length=20)
    delivery_date = DateTime()
    clear_delivery_date = Boolean(default=False)
    actor_id = Identifier(required=True)
    actor_role = String(required=True)


def _assert_vendor_sells(vendor_id: str, item_id: str, item_type: str) -> None:
    if item_type != ItemType.PRODUCT.value:
        raise Forbidden("You cannot modify this order")
    try:
        product = current_domain.repository_for(Product).get(item_id)
    except ObjectNotFoundError:
        raise Forbidden("You cannot modify this order") from None
    if str(product.seller_id or "") != str(vendor_id):
        raise Forbidden("You cannot modify this order")


@marketplace.command_handler(part_of=Order)
class UpdateOrderItemHandler:
    @handle(UpdateOrderItem)
    def update_order_item(self, command):
        if command.actor_role not in (Role.VENDOR.value, Role.ADMIN.value):
            raise Forbidden("Only vendors and admins can update order items")

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if command.actor_role == Role.VENDOR.value:
            _assert_vendor_sells(command.actor_id, command.item_id, command.item_type)

        order.update_item(
            item_id=command.item_id,
            item_type=command.item_type,
            variant_id=command.variant_id,
            status=command.status,
            delivery_date=command.delivery_date,
            clear_delivery_date=bool(command.clear_delivery_date),
        )
        repo.add(order)

        logger.info(
            "Order item updated",
            order_id=str(order.id),
            item_id=command.item_id,
            actor_role=command.actor_role,
            order_status=order.status,
        )
        return str(order.id)
