"""Order and line-item status vocabulary.

Every read path resolves status through `normalize_status` /
`effective_status`, so the legacy "Placed" value and missing statuses always
surface as "Pending".
"""

from enum import Enum


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    PLACED = "Placed"  # legacy, read as Pending


# Statuses a vendor or admin may assign to a line item
ASSIGNABLE_STATUSES = (
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
)


def format_status(value: str | None) -> str | None:
    """Trim, lower-case, then capitalize the first letter ("sHIPPED " → "Shipped")."""
    if value is None:
        return None
    value = value.strip().lower()
    if not value:
        return None
    return value[0].upper() + value[1:]


def normalize_status(value: str | None) -> str:
    formatted = format_status(value)
    if formatted is None or formatted == OrderStatus.PLACED.value:
        return OrderStatus.PENDING.value
    return formatted


def effective_status(item_status: str | None, order_status: str | None) -> str:
    """The status shown for a line item: its own when set, else the order's."""
    if item_status and item_status.strip():
        return normalize_status(item_status)
    return normalize_status(order_status)


def derive_order_status(item_statuses: list[str]) -> str:
    """Order-level status implied by its items after a fulfillment update.

    All cancelled → Cancelled; all delivered → Delivered; otherwise the most
    advanced of Shipped, Processing; otherwise Pending.
    """
    statuses = [normalize_status(s) for s in item_statuses]
    if not statuses:
        return OrderStatus.PENDING.value
    if all(s == OrderStatus.CANCELLED.value for s in statuses):
        return OrderStatus.CANCELLED.value
    if all(s == OrderStatus.DELIVERED.value for s in statuses):
        return OrderStatus.DELIVERED.value
    if OrderStatus.SHIPPED.value in statuses:
        return OrderStatus.SHIPPED.value
    if OrderStatus.PROCESSING.value in statuses:
        return OrderStatus.PROCESSING.value
    return OrderStatus.PENDING.value
