"""Checkout-facing coupon validation: look the code up, then evaluate it."""

from datetime import datetime

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from marketplace.coupons.coupon import Coupon, normalize_code
from marketplace.coupons.evaluation import CouponEvaluation, Rejection, evaluate
from marketplace.utils.timeutils import utcnow

logger = structlog.get_logger(__name__)


def find_active_coupon(code: str) -> Coupon | None:
    matches = (
        current_domain.repository_for(Coupon)
        ._dao.query.filter(code=normalize_code(code), is_active=True)
        .all()
        .items
    )
    return matches[0] if matches else None


def validate_coupon(code: str, subtotal: float, now: datetime | None = None) -> CouponEvaluation:
    """Evaluate `code` against a cart subtotal.

    Raises ObjectNotFoundError for unknown or inactive codes and
    ValidationError for every other rejection.
    """
    if not normalize_code(code):
        raise ValidationError({"code": ["Coupon code is required"]})
    if subtotal is None or subtotal < 0:
        raise ValidationError({"subtotal": ["Subtotal must be a non-negative number"]})

    result = evaluate(find_active_coupon(code), float(subtotal), now or utcnow())
    if result.valid:
        return result

    logger.info("Coupon rejected", code=normalize_code(code), rejection=result.rejection.value)
    if result.rejection == Rejection.NOT_FOUND:
        raise ObjectNotFoundError(result.reason)
    raise ValidationError({"code": [result.reason]})
