"""Order placement — the checkout's contract for creating an order."""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.ordering.order import DEFAULT_DELIVERY_CHARGE, Order


@marketplace.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {item_id, item_type, quantity, variant_id?, variant?}
    address = Text()  # JSON: {name, phone, pincode, address, city, state, landmark}
    total_amount = Float(required=True, min_value=0.0)
    delivery_charge = Float(default=DEFAULT_DELIVERY_CHARGE)
    coupon_code = String(max_length=50)
    discount_amount = Float(default=0.0)


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        address = json.loads(command.address) if isinstance(command.address, str) else command.address

        order = Order.create(
            user_id=command.user_id,
            items_data=items,
            address=address,
            total_amount=command.total_amount,
            delivery_charge=command.delivery_charge,
            coupon_code=command.coupon_code,
            discount_amount=command.discount_amount or 0.0,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
