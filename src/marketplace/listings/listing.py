"""Public listing aggregates owned by vendors.

Stays, tours, adventures and vehicle rentals share the fields the marketplace
core needs: the owning vendor, the public filters (category, city) and the
`is_active` switch. Richer listing content lives with the presentation layer.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from marketplace.domain import marketplace
from marketplace.utils.timeutils import utcnow


@marketplace.aggregate
class Stay:
    vendor_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    category = String(max_length=50)  # rooms, hotels, homestays, bnbs
    city = String(max_length=100)
    price = Float(default=0.0, min_value=0.0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()


@marketplace.aggregate
class Tour:
    vendor_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    category = String(max_length=50)
    city = String(max_length=100)
    price = Float(default=0.0, min_value=0.0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()


@marketplace.aggregate
class Adventure:
    vendor_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    category = String(max_length=50)
    city = String(max_length=100)
    price = Float(default=0.0, min_value=0.0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()


@marketplace.aggregate
class VehicleRental:
    vendor_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    category = String(max_length=50)  # cars, bikes, ...
    city = String(max_length=100)
    price = Float(default=0.0, min_value=0.0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()


LISTING_TYPES = (Stay, Tour, Adventure, VehicleRental)


def new_listing(
    listing_cls,
    vendor_id: str,
    name: str,
    category: str | None = None,
    city: str | None = None,
    price: float = 0.0,
):
    """An active listing of `listing_cls`, stamped with the current time."""
    now = utcnow()
    return listing_cls(
        vendor_id=vendor_id,
        name=name,
        category=category,
        city=city,
        price=price,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
