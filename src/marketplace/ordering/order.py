"""Order aggregate (CQRS) — a customer checkout and its line items.

Orders are created once at checkout and never change shape afterwards; only
fulfillment state moves. Every line item carries its own status and delivery
date, which may diverge from the order-level status. After a fulfillment
update the order-level status is re-derived from the items.

Cancellation metadata (reason, actor, actor role, timestamp) is recorded
together or not at all.
"""

import json
from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from marketplace.domain import marketplace
from marketplace.errors import PreconditionFailed
from marketplace.ordering.events import OrderCancelled, OrderItemUpdated, OrderPlaced
from marketplace.ordering.status import (
    ASSIGNABLE_STATUSES,
    OrderStatus,
    derive_order_status,
    effective_status,
    format_status,
)
from marketplace.utils.timeutils import ensure_utc, utcnow

DEFAULT_DELIVERY_CHARGE = 15.0


class ItemType(Enum):
    PRODUCT = "Product"
    STAY = "Stay"
    TOUR = "Tour"
    ADVENTURE = "Adventure"
    VEHICLE_RENTAL = "VehicleRental"


class CancellationRole(Enum):
    USER = "user"
    VENDOR = "vendor"
    ADMIN = "admin"


@marketplace.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, as captured at checkout."""

    name = String(max_length=150)
    phone = String(max_length=20)
    pincode = String(max_length=12)
    address = String(max_length=500)
    city = String(max_length=100)
    state = String(max_length=100)
    landmark = String(max_length=200)


@marketplace.value_object(part_of="Order")
class VariantSnapshot:
    """The product variant as it was when the order was placed."""

    color = String(max_length=50)
    size = String(max_length=50)
    price = Float(min_value=0.0)
    photos = Text()  # JSON list of URLs

    @property
    def photo_urls(self) -> list[str]:
        return json.loads(self.photos) if self.photos else []


@marketplace.entity(part_of="Order")
class OrderItem:
    item_id = Identifier(required=True)
    item_type = String(required=True, choices=ItemType)
    quantity = Integer(required=True, min_value=1)
    variant_id = Identifier()
    variant = ValueObject(VariantSnapshot)
    status = String(choices=OrderStatus)
    delivery_date = DateTime()


@marketplace.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    address = ValueObject(ShippingAddress)
    total_amount = Float(required=True, min_value=0.0)
    delivery_charge = Float(default=DEFAULT_DELIVERY_CHARGE, min_value=0.0)
    coupon_code = String(max_length=50)
    discount_amount = Float(default=0.0, min_value=0.0)
    cancellation_reason = String(max_length=500)
    cancelled_by = Identifier()
    cancelled_by_role = String(choices=CancellationRole)
    cancelled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def cancellation_metadata_is_all_or_nothing(self):
        fields = (self.cancellation_reason, self.cancelled_by, self.cancelled_by_role, self.cancelled_at)
        present = [value is not None for value in fields]
        if any(present) and not all(present):
            raise ValidationError({"cancellation": ["Cancellation details must be recorded together"]})

    @classmethod
    def create(
        cls,
        user_id: str,
        items_data: list[dict],
        address: dict | None,
        total_amount: float,
        delivery_charge: float = DEFAULT_DELIVERY_CHARGE,
        coupon_code: str | None = None,
        discount_amount: float = 0.0,
    ):
        """Create an order from checkout data.

        Args:
            items_data: dicts with item_id, item_type, quantity and optionally
                variant_id and variant ({color, size, price, photos}).
            address: dict with name, phone, pincode, address, city, state, landmark.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = utcnow()
        order = cls(
            user_id=user_id,
            address=ShippingAddress(**address) if address else None,
            total_amount=total_amount,
            delivery_charge=delivery_charge,
            coupon_code=coupon_code.strip().upper() if coupon_code else None,
            discount_amount=discount_amount or 0.0,
            created_at=now,
            updated_at=now,
        )
        for data in items_data:
            snapshot = data.get("variant")
            order.add_items(
                OrderItem(
                    item_id=data["item_id"],
                    item_type=data["item_type"],
                    quantity=data.get("quantity", 1),
                    variant_id=data.get("variant_id"),
                    variant=VariantSnapshot(
                        color=snapshot.get("color"),
                        size=snapshot.get("size"),
                        price=snapshot.get("price"),
                        photos=json.dumps(snapshot.get("photos", [])),
                    )
                    if snapshot
                    else None,
                    status=OrderStatus.PENDING.value,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                total_amount=total_amount,
                coupon_code=order.coupon_code,
                discount_amount=order.discount_amount,
                placed_at=now,
            )
        )
        return order

    @property
    def normalized_status(self) -> str:
        return effective_status(None, self.status)

    def item_status(self, item) -> str:
        return effective_status(item.status, self.status)

    def find_item(self, item_id: str, item_type: str, variant_id: str | None = None):
        for item in self.items:
            if str(item.item_id) != str(item_id) or item.item_type != item_type:
                continue
            if variant_id and str(item.variant_id or "") != str(variant_id):
                continue
            return item
        return None

    def update_item(
        self,
        item_id: str,
        item_type: str,
        variant_id: str | None = None,
        status: str | None = None,
        delivery_date: datetime | None = None,
        clear_delivery_date: bool = False,
    ) -> None:
        """Move one line item's fulfillment state and re-derive the order status."""
        item = self.find_item(item_id, item_type, variant_id)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in order"]})

        if status is not None:
            formatted = format_status(status)
            if formatted not in {s.value for s in ASSIGNABLE_STATUSES}:
                raise ValidationError({"status": [f"Invalid status '{status}'"]})
            item.status = formatted

        if clear_delivery_date:
            item.delivery_date = None
        elif delivery_date is not None:
            item.delivery_date = ensure_utc(delivery_date)

        now = utcnow()
        self.status = derive_order_status([self.item_status(i) for i in self.items])
        self.updated_at = now

        self.raise_(
            OrderItemUpdated(
                order_id=str(self.id),
                item_id=str(item.item_id),
                item_type=item.item_type,
                variant_id=str(item.variant_id) if item.variant_id else None,
                status=self.item_status(item),
                delivery_date=item.delivery_date,
                order_status=self.status,
                updated_at=now,
            )
        )

    def cancel(self, reason: str, cancelled_by: str, role: str = CancellationRole.USER.value) -> list[dict]:
        """Cancel every line item and record who cancelled and why.

        Returns the product lines whose units go back to stock.
        """
        if not reason or not reason.strip():
            raise ValidationError({"reason": ["Cancellation reason is required"]})

        current = self.normalized_status
        if current == OrderStatus.CANCELLED.value:
            raise PreconditionFailed({"status": ["Order already cancelled"]})
        if current == OrderStatus.DELIVERED.value or any(
            self.item_status(i) == OrderStatus.DELIVERED.value for i in self.items
        ):
            raise PreconditionFailed({"status": ["Delivered orders cannot be cancelled"]})

        restock = [
            {
                "item_id": str(item.item_id),
                "variant_id": str(item.variant_id) if item.variant_id else None,
                "quantity": item.quantity,
            }
            for item in self.items
            if item.item_type == ItemType.PRODUCT.value and self.item_status(item) != OrderStatus.CANCELLED.value
        ]

        now = utcnow()
        with atomic_change(self):
            for item in self.items:
                item.status = OrderStatus.CANCELLED.value
                item.delivery_date = None
            self.status = OrderStatus.CANCELLED.value
            self.cancellation_reason = reason.strip()
            self.cancelled_by = cancelled_by
            self.cancelled_by_role = role
            self.cancelled_at = now
            self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                reason=self.cancellation_reason,
                cancelled_by=str(cancelled_by),
                cancelled_by_role=role,
                restock_lines=json.dumps(restock),
                cancelled_at=now,
            )
        )
        return restock
