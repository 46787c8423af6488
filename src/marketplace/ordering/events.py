"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A customer checked out; the order's structure is now fixed."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total_amount = Float(required=True)
    coupon_code = String()
    discount_amount = Float()
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderItemUpdated:
    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    item_type = String(required=True)
    variant_id = Identifier()
    status = String(required=True)
    delivery_date = DateTime()
    order_status = String(required=True)
    updated_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    reason = String(required=True)
    cancelled_by = Identifier(required=True)
    cancelled_by_role = String(required=True)
    restock_lines = Text()  # JSON: list of {item_id, variant_id, quantity}
    cancelled_at = DateTime(required=True)
