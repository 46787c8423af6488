"""Vendor-scoped order view.

Expands customer orders into one row per product line sold by the vendor.
Rows are derived on read and never stored. The pipeline runs in stages:

    newest orders first
      → one (order, item) pair per line item
      → keep product lines
      → join the product, keep lines whose seller is the vendor
      → resolve unit price, compute sold amount
      → optional status filter (item OR order status)
      → newest first again, then page

Lines pointing at a deleted product are dropped; a deleted buyer only
degrades the buyer fields.
"""

from collections.abc import Iterable, Iterator
from dataclasses import asdict, dataclass
from datetime import datetime

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.accounts.account import Account
from marketplace.catalogue.product import Product
from marketplace.ordering.order import ItemType, Order
from marketplace.ordering.status import effective_status, format_status, normalize_status

logger = structlog.get_logger(__name__)

UNKNOWN_PRODUCT = "Unknown product"
UNKNOWN_BUYER = "Unknown"


@dataclass(frozen=True)
class VendorOrderRow:
    order_id: str
    item_id: str
    variant_id: str | None
    product_name: str
    product_image: str | None
    quantity: int
    unit_price: float
    sold_amount: float
    buyer_name: str
    buyer_email: str | None
    buyer_phone: str | None
    buyer_address: dict | None
    delivery_date: datetime | None
    status: str
    order_status: str
    order_created_at: datetime | None
    cancellation_reason: str | None
    cancelled_at: datetime | None
    cancelled_by_role: str | None

    def to_dict(self) -> dict:
        return asdict(self)


def _newest_first(records: Iterable, attr: str = "created_at") -> list:
    # Stable sort; records without a timestamp sink to the end
    return sorted(
        records,
        key=lambda record: (getattr(record, attr) is not None, getattr(record, attr) or datetime.min),
        reverse=True,
    )


def _fan_out(orders: Iterable[Order]) -> Iterator[tuple[Order, object]]:
    for order in orders:
        for item in order.items:
            yield order, item


def _product_lines(pairs: Iterable[tuple[Order, object]]) -> Iterator[tuple[Order, object]]:
    for order, item in pairs:
        if item.item_type == ItemType.PRODUCT.value:
            yield order, item


def _owned_by(pairs, products: dict[str, Product]) -> Iterator[tuple[Order, object, Product]]:
    for order, item in pairs:
        product = products.get(str(item.item_id))
        if product is not None:
            yield order, item, product


def resolve_unit_price(item, product: Product | None) -> float:
    """Variant snapshot price, then the live variant's price, then the product's base price, else 0."""
    if item.variant is not None and item.variant.price is not None:
        return float(item.variant.price)
    if product is not None:
        variant = product.find_variant(item.variant_id)
        if variant is not None and variant.price is not None:
            return float(variant.price)
        if product.base_price is not None:
            return float(product.base_price)
    return 0.0


def _product_image(item, product: Product) -> str | None:
    candidates = (
        item.variant.photo_urls if item.variant is not None else [],
        product.image_urls,
        product.photo_urls,
    )
    for urls in candidates:
        if urls:
            return urls[0]
    return None


class _BuyerDirectory:
    """Caches buyer lookups for one query; unknown buyers resolve to None."""

    def __init__(self):
        self._repo = current_domain.repository_for(Account)
        self._cache: dict[str, Account | None] = {}

    def get(self, user_id) -> Account | None:
        key = str(user_id)
        if key not in self._cache:
            try:
                self._cache[key] = self._repo.get(key)
            except ObjectNotFoundError:
                logger.debug("Buyer missing for order", user_id=key)
                self._cache[key] = None
        return self._cache[key]


def _build_row(order: Order, item, product: Product, buyer: Account | None) -> VendorOrderRow:
    address = order.address
    unit_price = resolve_unit_price(item, product)

    return VendorOrderRow(
        order_id=str(order.id),
        item_id=str(item.item_id),
        variant_id=str(item.variant_id) if item.variant_id else None,
        product_name=product.name or UNKNOWN_PRODUCT,
        product_image=_product_image(item, product),
        quantity=item.quantity,
        unit_price=unit_price,
        sold_amount=unit_price * item.quantity,
        buyer_name=(address.name if address and address.name else None)
        or (buyer.full_name if buyer else None)
        or UNKNOWN_BUYER,
        buyer_email=buyer.email if buyer else None,
        buyer_phone=(address.phone if address and address.phone else None)
        or (buyer.contact_number if buyer else None),
        buyer_address={
            "line1": address.address,
            "city": address.city,
            "state": address.state,
            "pincode": address.pincode,
        }
        if address
        else None,
        delivery_date=item.delivery_date,
        status=effective_status(item.status, order.status),
        order_status=effective_status(None, order.status),
        order_created_at=order.created_at,
        cancellation_reason=order.cancellation_reason,
        cancelled_at=order.cancelled_at,
        cancelled_by_role=order.cancelled_by_role,
    )


def vendor_order_rows(
    vendor_id: str,
    status: str | None = None,
    offset: int = 0,
    limit: int | None = None,
) -> list[VendorOrderRow]:
    """Fulfillment rows for every product line the vendor sells.

    `status` matches a row when either the item's effective status or the
    order's status equals it, after case normalization. A "Placed" filter
    matches Pending rows.
    """
    product_repo = current_domain.repository_for(Product)
    products = {
        str(p.id): p for p in product_repo._dao.query.filter(seller_id=vendor_id).limit(None).all().items
    }
    if not products:
        return []

    orders = current_domain.repository_for(Order)._dao.query.order_by("-created_at").limit(None).all().items
    buyers = _BuyerDirectory()
    # Legacy "Placed" is stored but always read as Pending
    target = normalize_status(status) if format_status(status) else None

    rows = []
    for order, item, product in _owned_by(_product_lines(_fan_out(orders)), products):
        row = _build_row(order, item, product, buyers.get(order.user_id))
        if target and target not in (row.status, row.order_status):
            continue
        rows.append(row)

    rows = _newest_first(rows, attr="order_created_at")
    end = offset + limit if limit else None
    return rows[offset:end]
