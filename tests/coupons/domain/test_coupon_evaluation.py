"""Tests for coupon evaluation against a cart subtotal."""

from datetime import UTC, datetime, timedelta

import pytest
from marketplace.coupons.coupon import Coupon
from marketplace.coupons.evaluation import Rejection, compute_discount, evaluate

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _coupon(**kwargs):
    defaults = {
        "code": "save10",
        "discount_type": "percentage",
        "discount_amount": 10.0,
        "min_purchase": 500.0,
        "max_discount": 200.0,
        "start_date": NOW - timedelta(days=1),
        "expiry_date": NOW + timedelta(days=30),
    }
    defaults.update(kwargs)
    return Coupon.create(**defaults)


class TestAcceptance:
    def test_save10_capped_at_hundred(self):
        coupon = _coupon(max_discount=100.0)
        assert evaluate(coupon, 2000.0, NOW).applied_discount == 100.0
        assert evaluate(coupon, 400.0, NOW).valid is False

    def test_percentage_discount(self):
        result = evaluate(_coupon(), 2000.0, NOW)
        assert result.valid is True
        assert result.code == "SAVE10"
        assert result.applied_discount == 200.0

    def test_percentage_below_cap(self):
        assert evaluate(_coupon(), 1000.0, NOW).applied_discount == 100.0

    def test_response_shape(self):
        response = evaluate(_coupon(), 1000.0, NOW).as_response()
        assert response == {
            "code": "SAVE10",
            "discount_type": "percentage",
            "discount_amount": 10.0,
            "min_purchase": 500.0,
            "applied_discount": 100.0,
        }

    def test_boundary_instants_accepted(self):
        coupon = _coupon(start_date=NOW, expiry_date=NOW + timedelta(seconds=1))
        assert evaluate(coupon, 600.0, NOW).valid is True
        assert evaluate(coupon, 600.0, NOW + timedelta(seconds=1)).valid is True

    def test_naive_now_treated_as_utc(self):
        assert evaluate(_coupon(), 600.0, NOW.replace(tzinfo=None)).valid is True


class TestRejections:
    def test_missing_coupon(self):
        result = evaluate(None, 1000.0, NOW)
        assert result.rejection == Rejection.NOT_FOUND
        assert result.reason == "Invalid or inactive coupon code"

    def test_inactive_coupon(self):
        assert evaluate(_coupon(is_active=False), 1000.0, NOW).rejection == Rejection.NOT_FOUND

    def test_not_started(self):
        result = evaluate(_coupon(start_date=NOW + timedelta(days=1)), 1000.0, NOW)
        assert result.reason == "Coupon is not yet valid"

    def test_expired(self):
        coupon = _coupon(start_date=NOW - timedelta(days=10), expiry_date=NOW - timedelta(days=1))
        assert evaluate(coupon, 1000.0, NOW).reason == "Coupon has expired"

    def test_usage_limit(self):
        coupon = _coupon(usage_limit=2)
        coupon.usage_count = 2
        assert evaluate(coupon, 1000.0, NOW).reason == "Coupon usage limit reached"

    def test_below_minimum(self):
        result = evaluate(_coupon(), 400.0, NOW)
        assert result.valid is False
        assert result.reason == "Minimum purchase of ₹500 required for this coupon"
        assert result.applied_discount == 0.0

    def test_first_failure_wins(self):
        coupon = _coupon(start_date=NOW - timedelta(days=10), expiry_date=NOW - timedelta(days=1), usage_limit=1)
        coupon.usage_count = 1
        assert evaluate(coupon, 10.0, NOW).rejection == Rejection.EXPIRED


class TestComputeDiscount:
    def test_percentage_without_cap(self):
        coupon = _coupon(max_discount=None)
        assert compute_discount(coupon, 5000.0) == 500.0

    def test_percentage_rounds_to_paise(self):
        coupon = _coupon(discount_amount=12.5, max_discount=None)
        assert compute_discount(coupon, 999.99) == 125.0

    def test_fixed_amount(self):
        coupon = _coupon(discount_type="fixed", discount_amount=150.0, min_purchase=0.0)
        assert compute_discount(coupon, 1000.0) == 150.0

    def test_fixed_amount_clamped_to_subtotal(self):
        coupon = _coupon(discount_type="fixed", discount_amount=150.0, min_purchase=0.0)
        assert compute_discount(coupon, 100.0) == 100.0

    def test_evaluation_is_pure(self):
        coupon = _coupon()
        first = evaluate(coupon, 2000.0, NOW)
        second = evaluate(coupon, 2000.0, NOW)
        assert first == second
        assert coupon.usage_count == 0


class TestCouponInvariants:
    def test_percentage_above_hundred_rejected(self):
        from protean.exceptions import ValidationError

        with pytest.raises(ValidationError):
            _coupon(discount_amount=150.0)

    def test_window_must_be_ordered(self):
        from protean.exceptions import ValidationError

        with pytest.raises(ValidationError):
            _coupon(start_date=NOW, expiry_date=NOW - timedelta(days=1))

    def test_update_rejects_unknown_fields(self):
        from protean.exceptions import ValidationError

        with pytest.raises(ValidationError):
            _coupon().update(usage_count=5)

    def test_update_normalizes_code(self):
        coupon = _coupon()
        coupon.update(code=" monsoon ")
        assert coupon.code == "MONSOON"
