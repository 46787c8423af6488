"""Coupon aggregate — admin-managed discount codes."""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String

from marketplace.coupons.events import CouponCreated, CouponRedeemed
from marketplace.domain import marketplace
from marketplace.utils.timeutils import ensure_utc, utcnow


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


# Fields an admin may patch after creation
EDITABLE_FIELDS = (
    "code",
    "discount_type",
    "discount_amount",
    "min_purchase",
    "max_discount",
    "start_date",
    "expiry_date",
    "usage_limit",
    "is_active",
)


@marketplace.aggregate
class Coupon:
    code = String(required=True, max_length=50)
    discount_type = String(required=True, choices=DiscountType)
    discount_amount = Float(required=True, min_value=0.0)
    min_purchase = Float(default=0.0, min_value=0.0)
    max_discount = Float(min_value=0.0)
    start_date = DateTime()
    expiry_date = DateTime(required=True)
    usage_limit = Integer(min_value=1)
    usage_count = Integer(default=0, min_value=0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def percentage_cannot_exceed_hundred(self):
        if self.discount_type == DiscountType.PERCENTAGE.value and (self.discount_amount or 0) > 100:
            raise ValidationError({"discount_amount": ["Percentage discount cannot exceed 100"]})

    @invariant.post
    def window_must_be_ordered(self):
        if self.start_date and self.expiry_date and ensure_utc(self.start_date) > ensure_utc(self.expiry_date):
            raise ValidationError({"expiry_date": ["Expiry date must be after the start date"]})

    @classmethod
    def create(
        cls,
        code: str,
        discount_type: str,
        discount_amount: float,
        expiry_date: datetime,
        min_purchase: float = 0.0,
        max_discount: float | None = None,
        start_date: datetime | None = None,
        usage_limit: int | None = None,
        is_active: bool = True,
    ):
        now = utcnow()
        coupon = cls(
            code=normalize_code(code),
            discount_type=discount_type,
            discount_amount=discount_amount,
            min_purchase=min_purchase or 0.0,
            max_discount=max_discount,
            start_date=ensure_utc(start_date) or now,
            expiry_date=ensure_utc(expiry_date),
            usage_limit=usage_limit,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        coupon.raise_(CouponCreated(coupon_id=str(coupon.id), code=coupon.code, created_at=now))
        return coupon

    def update(self, **changes) -> None:
        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in unknown})

        with atomic_change(self):
            for field, value in changes.items():
                if field == "code":
                    value = normalize_code(value)
                elif field in ("start_date", "expiry_date"):
                    value = ensure_utc(value)
                setattr(self, field, value)
            self.updated_at = utcnow()

    def redeem(self, order_id: str) -> None:
        now = utcnow()
        self.usage_count = (self.usage_count or 0) + 1
        self.updated_at = now
        self.raise_(
            CouponRedeemed(
                coupon_id=str(self.id),
                code=self.code,
                order_id=order_id,
                usage_count=self.usage_count,
                redeemed_at=now,
            )
        )
