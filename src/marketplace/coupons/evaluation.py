"""Coupon evaluation — a pure function of (coupon, subtotal, now).

Checks run in a fixed order and the first failure wins:

    1. the coupon exists and is active
    2. start_date <= now <= expiry_date
    3. usage_count < usage_limit, when a limit is set
    4. subtotal >= min_purchase

Percentage coupons take `discount_amount` percent of the subtotal, capped at
`max_discount` when one is set. Fixed coupons take `discount_amount`, capped
at the subtotal so a discount never exceeds what is being paid.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from marketplace.coupons.coupon import Coupon, DiscountType
from marketplace.shared.money import format_rupees
from marketplace.utils.timeutils import ensure_utc


class Rejection(Enum):
    NOT_FOUND = "not_found"
    NOT_STARTED = "not_started"
    EXPIRED = "expired"
    EXHAUSTED = "exhausted"
    BELOW_MINIMUM = "below_minimum"


@dataclass(frozen=True)
class CouponEvaluation:
    valid: bool
    code: str | None = None
    discount_type: str | None = None
    discount_amount: float | None = None
    min_purchase: float | None = None
    applied_discount: float = 0.0
    rejection: Rejection | None = None
    reason: str | None = None

    def as_response(self) -> dict:
        return {
            "code": self.code,
            "discount_type": self.discount_type,
            "discount_amount": self.discount_amount,
            "min_purchase": self.min_purchase,
            "applied_discount": self.applied_discount,
        }


def _reject(rejection: Rejection, reason: str, coupon: Coupon | None = None) -> CouponEvaluation:
    return CouponEvaluation(
        valid=False,
        code=coupon.code if coupon else None,
        rejection=rejection,
        reason=reason,
    )


def compute_discount(coupon: Coupon, subtotal: float) -> float:
    amount = float(coupon.discount_amount or 0)
    if coupon.discount_type == DiscountType.PERCENTAGE.value:
        discount = subtotal * amount / 100
        if coupon.max_discount:
            discount = min(discount, float(coupon.max_discount))
    else:
        discount = min(amount, subtotal)
    return round(max(discount, 0.0), 2)


def evaluate(coupon: Coupon | None, subtotal: float, now: datetime) -> CouponEvaluation:
    if coupon is None or not coupon.is_active:
        return _reject(Rejection.NOT_FOUND, "Invalid or inactive coupon code", coupon)

    now = ensure_utc(now)
    start = ensure_utc(coupon.start_date)
    expiry = ensure_utc(coupon.expiry_date)

    if start is not None and start > now:
        return _reject(Rejection.NOT_STARTED, "Coupon is not yet valid", coupon)
    if expiry is not None and expiry < now:
        return _reject(Rejection.EXPIRED, "Coupon has expired", coupon)
    if coupon.usage_limit and (coupon.usage_count or 0) >= coupon.usage_limit:
        return _reject(Rejection.EXHAUSTED, "Coupon usage limit reached", coupon)

    min_purchase = float(coupon.min_purchase or 0)
    if subtotal < min_purchase:
        return _reject(
            Rejection.BELOW_MINIMUM,
            f"Minimum purchase of {format_rupees(min_purchase)} required for this coupon",
            coupon,
        )

    return CouponEvaluation(
        valid=True,
        code=coupon.code,
        discount_type=coupon.discount_type,
        discount_amount=coupon.discount_amount,
        min_purchase=min_purchase,
        applied_discount=compute_discount(coupon, subtotal),
    )
